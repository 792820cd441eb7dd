"""AT Protocol adapter for the AnnotationsFromTemplatePublisher port."""

import logging
from collections import defaultdict

import httpx
import logfire

from annos.domain.annotation.model.batch import AnnotationsFromTemplate
from annos.domain.annotation.model.value import PublishedRecordId
from annos.domain.annotation.port.publisher import (
    AnnotationsFromTemplatePublisher,
    PublishedAnnotations,
)
from annos.domain.shared.error import AnnosError, PublishError
from annos.domain.shared.result import Err, Ok, Result
from annos.infrastructure.atproto.client import CREATE_RESULT, DELETE, XrpcClient
from annos.infrastructure.atproto.mapper import to_create_operations

logger = logging.getLogger(__name__)


class AtprotoAnnotationsFromTemplatePublisher(AnnotationsFromTemplatePublisher):
    """Publishes a whole batch with a single applyWrites commit."""

    def __init__(self, client: XrpcClient, collection: str = "app.annos.annotation") -> None:
        self._client = client
        self._collection = collection

    async def publish(
        self, batch: AnnotationsFromTemplate
    ) -> Result[PublishedAnnotations, PublishError]:
        repo = str(batch.curator_id)
        writes = to_create_operations(batch, self._collection)

        try:
            with logfire.span("applyWrites create", repo=repo, count=len(writes)):
                response = await self._client.apply_writes(repo, writes, validate=False)
        except (AnnosError, httpx.HTTPError, ValueError) as e:
            logger.error("Error publishing annotations for %s: %s", repo, e)
            return Err(PublishError(str(e), cause=e))

        results = response.get("results") or [] if isinstance(response, dict) else None
        if not isinstance(results, list) or not all(isinstance(r, dict) for r in results):
            return Err(PublishError(f"Unexpected applyWrites response shape: {response!r}"))
        if len(results) != len(batch.annotations):
            return Err(
                PublishError(
                    f"Expected {len(batch.annotations)} results from ledger, got {len(results)}"
                )
            )

        published: PublishedAnnotations = {}
        for annotation, result in zip(batch.annotations, results):
            if result.get("$type") != CREATE_RESULT:
                return Err(PublishError(f"No create result found for annotation {annotation.id}"))

            uri, cid = result.get("uri"), result.get("cid")
            if not isinstance(uri, str) or not isinstance(cid, str):
                return Err(
                    PublishError(f"Malformed create result for annotation {annotation.id}: {result!r}")
                )
            record_id = PublishedRecordId.create(uri=uri, cid=cid)
            if isinstance(record_id, Err):
                return Err(
                    PublishError(
                        f"Malformed create result for annotation {annotation.id}: "
                        f"{record_id.error.message}",
                        cause=record_id.error,
                    )
                )
            published[str(annotation.id)] = record_id.value

        return Ok(published)

    async def unpublish(
        self, published_record_ids: list[PublishedRecordId]
    ) -> Result[None, PublishError]:
        rkeys_by_repo: dict[str, list[str]] = defaultdict(list)
        for record_id in published_record_ids:
            try:
                at_uri = record_id.at_uri
                repo = str(at_uri.did)
            except ValueError as e:
                return Err(PublishError(f"Cannot resolve repository of {record_id.uri}", cause=e))
            rkeys_by_repo[repo].append(at_uri.rkey)

        for repo, rkeys in rkeys_by_repo.items():
            writes = [
                {"$type": DELETE, "collection": self._collection, "rkey": rkey} for rkey in rkeys
            ]
            try:
                with logfire.span("applyWrites delete", repo=repo, count=len(writes)):
                    await self._client.apply_writes(repo, writes, validate=False)
            except (AnnosError, httpx.HTTPError, ValueError) as e:
                logger.error("Error unpublishing annotations from %s: %s", repo, e)
                return Err(PublishError(str(e), cause=e))

        return Ok(None)
