"""Minimal XRPC client for the repository write endpoints."""

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from annos.config import LedgerConfig
from annos.domain.shared.error import ConfigurationError, ExternalServiceError

logger = logging.getLogger(__name__)

CREATE = "com.atproto.repo.applyWrites#create"
DELETE = "com.atproto.repo.applyWrites#delete"
CREATE_RESULT = "com.atproto.repo.applyWrites#createResult"


@dataclass(frozen=True)
class Session:
    did: str
    access_jwt: str


class XrpcClient:
    """Talks to a PDS over XRPC. Sessions are created lazily and renewed once on 401."""

    def __init__(self, config: LedgerConfig, http_client: httpx.AsyncClient) -> None:
        self._config = config
        self._http = http_client
        self._session: Session | None = None

    async def create_session(self) -> Session:
        if not self._config.identifier or not self._config.app_password:
            raise ConfigurationError(
                "Ledger identifier and app password must be set "
                "(ANNOS_LEDGER__IDENTIFIER, ANNOS_LEDGER__APP_PASSWORD)"
            )

        data = await self._post(
            "com.atproto.server.createSession",
            {"identifier": self._config.identifier, "password": self._config.app_password},
            authenticated=False,
        )
        try:
            self._session = Session(did=data["did"], access_jwt=data["accessJwt"])
        except (KeyError, TypeError) as e:
            raise ExternalServiceError(
                f"Unexpected createSession response: {data!r}", code="ledger_error"
            ) from e
        logger.info("Ledger session created for %s", self._session.did)
        return self._session

    async def apply_writes(
        self, repo: str, writes: list[dict[str, Any]], *, validate: bool = False
    ) -> dict[str, Any]:
        """Apply all writes in one repository commit."""
        return await self._post(
            "com.atproto.repo.applyWrites",
            {"repo": repo, "writes": writes, "validate": validate},
        )

    async def _post(
        self, nsid: str, body: dict[str, Any], *, authenticated: bool = True
    ) -> dict[str, Any]:
        url = f"{self._config.xrpc_url}/{nsid}"
        try:
            response = await self._http.post(url, json=body, headers=await self._headers(authenticated))
            if response.status_code == 401 and authenticated:
                logger.info("Ledger session rejected, creating a new one")
                self._session = None
                response = await self._http.post(url, json=body, headers=await self._headers(True))
        except httpx.RequestError as e:
            logger.exception("XRPC request %s failed: %s", nsid, e)
            raise ExternalServiceError(f"Failed to connect to ledger: {e}", code="ledger_unavailable") from e

        if response.status_code != 200:
            logger.error(
                "XRPC %s failed: status=%d, body=%s", nsid, response.status_code, response.text
            )
            raise ExternalServiceError(
                f"Ledger request {nsid} failed: {response.status_code} {response.text}",
                code="ledger_error",
            )
        try:
            return response.json()
        except ValueError as e:
            raise ExternalServiceError(
                f"Ledger request {nsid} returned invalid JSON", code="ledger_error"
            ) from e

    async def _headers(self, authenticated: bool) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if authenticated:
            session = self._session or await self.create_session()
            headers["Authorization"] = f"Bearer {session.access_jwt}"
        return headers
