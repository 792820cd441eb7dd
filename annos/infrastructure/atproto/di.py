"""DI provider for AT Protocol infrastructure."""

from typing import AsyncIterable, NewType

import httpx
from dishka import provide

from annos.config import Config
from annos.domain.annotation.port.publisher import AnnotationsFromTemplatePublisher
from annos.infrastructure.atproto.client import XrpcClient
from annos.infrastructure.atproto.publisher import AtprotoAnnotationsFromTemplatePublisher
from annos.util.di.base import Provider
from annos.util.di.scope import Scope

# Disambiguate from any other httpx.AsyncClient in the container
LedgerHttpClient = NewType("LedgerHttpClient", httpx.AsyncClient)


class AtprotoProvider(Provider):
    """DI provider for the ledger client and publisher."""

    @provide(scope=Scope.APP)
    async def get_ledger_http_client(self, config: Config) -> AsyncIterable[LedgerHttpClient]:
        async with httpx.AsyncClient(timeout=httpx.Timeout(config.ledger.timeout)) as client:
            yield LedgerHttpClient(client)

    @provide(scope=Scope.APP)
    def get_xrpc_client(self, config: Config, client: LedgerHttpClient) -> XrpcClient:
        return XrpcClient(config=config.ledger, http_client=client)

    @provide(scope=Scope.APP, provides=AnnotationsFromTemplatePublisher)
    def get_publisher(
        self, client: XrpcClient, config: Config
    ) -> AtprotoAnnotationsFromTemplatePublisher:
        return AtprotoAnnotationsFromTemplatePublisher(
            client=client, collection=config.ledger.collection
        )
