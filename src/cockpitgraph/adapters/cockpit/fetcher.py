"""Fetch every configured collection and tree concurrently."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

import httpx

from cockpitgraph.config.cockpit import get_cockpit_config
from cockpitgraph.domain.model import SourceKind
from cockpitgraph.domain.ports.fetching import FetchFailure, FetchResult, FetchSuccess

from .client import CockpitAPIError, CockpitClient

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from cockpitgraph.adapters.http_resilience import ResilientClient
    from cockpitgraph.config.cockpit import CockpitConfig
    from cockpitgraph.config.http_resilience import ResilienceConfig
    from cockpitgraph.domain.ports.fetching import ContentFetcher

log = getLogger(__name__)

_RECOVERABLE = (CockpitAPIError, httpx.HTTPError)


@dataclass(slots=True)
class CockpitFetcher:
    """``ContentFetcher`` backed by the Cockpit HTTP API.

    The instance is validated once before the first fetch; a failed validation
    raises. Failures of single collections or trees are returned as
    ``FetchFailure`` so the caller decides whether to skip or abort.
    """

    config: CockpitConfig = field(default_factory=get_cockpit_config)
    client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None
    locale: str | None = None

    def __call__(
        self,
        *,
        collections: Sequence[str] = (),
        trees: Sequence[str] = (),
    ) -> list[FetchResult]:
        return asyncio.run(self._fetch_all_async(collections=collections, trees=trees))

    async def _fetch_all_async(
        self,
        *,
        collections: Sequence[str],
        trees: Sequence[str],
    ) -> list[FetchResult]:
        cockpit = CockpitClient(config=self.config, client_factory=self.client_factory)
        requests = [(SourceKind.COLLECTION, name) for name in collections]
        requests += [(SourceKind.TREE, name) for name in trees]

        async with cockpit.open() as client:
            await cockpit.validate_async(client)
            results = await asyncio.gather(
                *(self._fetch_one(cockpit, client, kind, name) for kind, name in requests)
            )

        failed = [result for result in results if isinstance(result, FetchFailure)]
        log.info("Fetched %d sources (%d failed)", len(results) - len(failed), len(failed))
        return list(results)

    async def _fetch_one(
        self,
        cockpit: CockpitClient,
        client: ResilientClient,
        kind: SourceKind,
        name: str,
    ) -> FetchResult:
        try:
            records = await cockpit.fetch_records(client, kind, name, locale=self.locale)
        except _RECOVERABLE as exc:
            log.warning("Error while fetching %s %s: %s", kind, name, exc)
            reason = str(exc) or type(exc).__name__
            return FetchFailure(name=name, kind=kind, reason=reason, error=exc)
        log.debug("Fetched %d records for %s %s", len(records), kind, name)
        return FetchSuccess(name=name, kind=kind, records=[record.to_raw() for record in records])


if TYPE_CHECKING:
    _fetcher_check: ContentFetcher = CockpitFetcher()
