"""Cloudback API client."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING, Final

import httpx
from pydantic import ValidationError

from cloudback_sync.adapters.http_resilience import ResilientClient
from cloudback_sync.domain.errors import RemoteError

from .schema import BackupDefinitionPayload, DefinitionKeyPayload, FetchedDefinitionPayload

if TYPE_CHECKING:
    from collections.abc import Callable

    from cloudback_sync.config.cloudback import CloudbackConfig
    from cloudback_sync.config.http_resilience import ResilienceConfig
    from cloudback_sync.domain.model import DefinitionKey, Settings

log = getLogger(__name__)

GET_DEFINITION_PATH: Final[str] = "/ops/definition/get"
UPDATE_DEFINITION_PATH: Final[str] = "/ops/definition/update"


class CloudbackAPIError(RemoteError):
    """Raised when the Cloudback API answers with a non-success status."""

    @classmethod
    def from_response(cls, response: httpx.Response) -> CloudbackAPIError:
        status = f"{response.status_code} {response.reason_phrase}".strip()
        return cls(status, status_code=response.status_code, status=status)


class CloudbackClient:
    """Remote store backed by the Cloudback HTTP API."""

    def __init__(
        self,
        *,
        config: CloudbackConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config
        self._resilience = config.resilience
        self._client_factory = client_factory or ResilientClient

    def fetch_definition(self, key: DefinitionKey) -> Settings:
        return asyncio.run(self._fetch_definition_async(key))

    def upsert_definition(self, key: DefinitionKey, settings: Settings) -> None:
        asyncio.run(self._upsert_definition_async(key, settings))

    async def _fetch_definition_async(self, key: DefinitionKey) -> Settings:
        body = DefinitionKeyPayload.from_key(key).model_dump(by_alias=True)
        async with self._client_factory(self._resilience) as client:
            response = await self._perform_request(client, GET_DEFINITION_PATH, body)

        try:
            payload = FetchedDefinitionPayload.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise RemoteError(
                f"Unexpected Cloudback response payload for {key}",
                status_code=response.status_code,
                status=f"{response.status_code} {response.reason_phrase}",
            ) from exc
        return payload.settings.to_settings()

    async def _upsert_definition_async(self, key: DefinitionKey, settings: Settings) -> None:
        body = BackupDefinitionPayload.from_key_and_settings(key, settings).model_dump(
            by_alias=True
        )
        async with self._client_factory(self._resilience) as client:
            await self._perform_request(client, UPDATE_DEFINITION_PATH, body)

    async def _perform_request(
        self,
        client: ResilientClient,
        path: str,
        body: dict[str, object],
    ) -> httpx.Response:
        try:
            response = await client.post(path, json=body)
        except httpx.HTTPError as exc:
            log.warning("%s request to %s failed: %s", self._resilience.name, path, exc)
            raise RemoteError(f"Cloudback request to {path} failed: {exc}") from exc

        if response.is_error:
            error = CloudbackAPIError.from_response(response)
            log.warning("%s request to %s returned %s", self._resilience.name, path, error.status)
            raise error
        return response
