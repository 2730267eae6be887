"""HTTP client for the Cockpit content API."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from pydantic import ValidationError

from cockpitgraph.adapters.http_resilience import ResilientClient
from cockpitgraph.config.errors import ConfigurationError
from cockpitgraph.domain.model import SourceKind

from .schema import ErrorResponse, parse_records

if TYPE_CHECKING:
    from collections.abc import Callable

    from cockpitgraph.config.cockpit import CockpitConfig
    from cockpitgraph.config.http_resilience import ResilienceConfig

    from .schema import CockpitRecord

log = getLogger(__name__)

HEALTHCHECK_PATH = "/system/healthcheck"
_SOURCE_PATHS: dict[SourceKind, str] = {
    SourceKind.COLLECTION: "/content/items/{name}",
    SourceKind.TREE: "/content/tree/{name}",
}


class CockpitConfigurationError(ConfigurationError):
    """Raised when the configured Cockpit instance cannot be used at all."""


class ConnectivityError(CockpitConfigurationError):
    """Base URL unreachable or not a Cockpit API."""


class InvalidTokenError(CockpitConfigurationError):
    """The API token was rejected."""


class CockpitAPIError(RuntimeError):
    """Raised when a content request fails or returns an unexpected payload."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


class CockpitClient:
    """Low-level async access to one Cockpit instance.

    Coroutines take an open ``ResilientClient`` so callers can run many
    requests over one connection pool; the sync helpers open their own.
    """

    def __init__(
        self,
        *,
        config: CockpitConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        if config.resilience is None:
            raise CockpitConfigurationError("Cockpit config has no resilience settings")
        self._config = config
        self._resilience = config.resilience
        self._client_factory = client_factory or _default_client_factory

    @property
    def config(self) -> CockpitConfig:
        return self._config

    def open(self) -> ResilientClient:
        return self._client_factory(self._resilience)

    def validate(self) -> None:
        asyncio.run(self._validate_once())

    async def _validate_once(self) -> None:
        async with self.open() as client:
            await self.validate_async(client)

    async def validate_async(self, client: ResilientClient) -> None:
        """Check base URL reachability, then token acceptance, against the healthcheck."""

        try:
            response = await client.get(HEALTHCHECK_PATH)
        except httpx.HTTPError as exc:
            raise ConnectivityError(
                f"Base URL {self._config.base_url} is invalid or there is no internet connection"
            ) from exc

        if response.status_code in {401, 403}:
            raise InvalidTokenError("Token config parameter is invalid")
        if response.is_error:
            raise ConnectivityError(
                f"Base URL {self._config.base_url} answered the healthcheck with "
                f"HTTP {response.status_code}"
            )
        log.debug("Cockpit healthcheck passed for %s", self._config.base_url)

    async def fetch_records(
        self,
        client: ResilientClient,
        kind: SourceKind,
        name: str,
        *,
        locale: str | None = None,
    ) -> list[CockpitRecord]:
        path = _SOURCE_PATHS[kind].format(name=name)
        params = {"lang": locale} if locale else None
        response = await client.get(path, params=params)

        payload = _json_or_none(response)
        if response.is_error:
            message = f"Fetching {kind} {name!r} failed with HTTP {response.status_code}"
            if isinstance(payload, dict) and "error" in payload:
                error = ErrorResponse.model_validate(payload)
                message = f"{message}: {error.error}"
            log.error(message)
            raise CockpitAPIError(message, status_code=response.status_code)

        try:
            return parse_records(payload)
        except ValidationError as exc:
            raise CockpitAPIError(f"Unexpected payload for {kind} {name!r}: {exc}") from exc


def _json_or_none(response: httpx.Response) -> object:
    try:
        return response.json()
    except ValueError:
        return None
