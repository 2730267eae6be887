"""Application orchestration entry points."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from cockpitgraph.adapters.cockpit import CockpitFetcher
from cockpitgraph.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyNodeUnitOfWork,
    is_started,
    startup,
)
from cockpitgraph.config.cockpit import get_cockpit_config
from cockpitgraph.domain.ingest_pipeline import (
    IngestError,
    NodeStore,
    PipelineCounters,
    build_sources,
    content_nodes,
    run_content_pipeline,
)
from cockpitgraph.domain.ports.fetching import FetchFailure, FetchSuccess
from cockpitgraph.domain.ports.unit_of_work import NodeUnitOfWork

if TYPE_CHECKING:
    from cockpitgraph.config.cockpit import CockpitConfig
    from cockpitgraph.domain.ports.fetching import ContentFetcher

UnitOfWorkFactory = Callable[[], NodeUnitOfWork]


log = getLogger(__name__)


class PartialFetchError(IngestError):
    """Raised in strict mode when at least one collection or tree failed to fetch."""

    def __init__(self, failures: list[FetchFailure]) -> None:
        names = ", ".join(f"{failure.kind} {failure.name}" for failure in failures)
        super().__init__(f"Could not fetch {names}")
        self.failures = failures


@dataclass(slots=True)
class SyncContentResult:
    sources: int = 0
    content_nodes: int = 0
    failures: list[FetchFailure] = field(default_factory=list[FetchFailure])
    counters: PipelineCounters = field(default_factory=PipelineCounters)


def _default_unit_of_work() -> NodeUnitOfWork:
    if not is_started():
        startup()
    return SqlAlchemyNodeUnitOfWork()


def sync_cockpit_content(
    *,
    config: CockpitConfig | None = None,
    fetcher: ContentFetcher | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    strict: bool = False,
) -> SyncContentResult:
    """Fetch, normalize, materialize and link all configured Cockpit content."""

    effective_config = config or get_cockpit_config()
    effective_fetcher = fetcher or CockpitFetcher(config=effective_config)
    effective_uow = unit_of_work_factory or _default_unit_of_work
    log.info(
        "Starting Cockpit sync: base_url=%s, collections=%s, trees=%s",
        effective_config.base_url,
        list(effective_config.collections),
        list(effective_config.trees),
    )
    if effective_config.locales:
        log.warning(
            "Locales %s configured but multi-locale fetching is not implemented; "
            "fetching the default locale only",
            list(effective_config.locales),
        )

    results = effective_fetcher(
        collections=effective_config.collections,
        trees=effective_config.trees,
    )
    failures = [result for result in results if isinstance(result, FetchFailure)]
    successes = [result for result in results if isinstance(result, FetchSuccess)]
    if failures:
        if strict:
            raise PartialFetchError(failures)
        for failure in failures:
            log.warning("Skipping %s %s: %s", failure.kind, failure.name, failure.reason)

    sources = build_sources(successes, aliases=effective_config.aliases)
    result = SyncContentResult(sources=len(sources), failures=failures)

    with effective_uow() as uow:
        store = NodeStore(uow.repositories.nodes)
        context = run_content_pipeline(
            sources,
            base_url=effective_config.base_url,
            materializer=store,
            object_factory=store,
        )
        for node in content_nodes(sources):
            store.add(node)
            result.content_nodes += 1
        uow.commit()

    result.counters = context.counters
    log.info(
        "Finished Cockpit sync: sources=%d, content_nodes=%d, resource_nodes=%d, "
        "missing_media=%d, failed_sources=%d",
        result.sources,
        result.content_nodes,
        context.counters.nodes_materialized,
        context.counters.missing_media,
        len(failures),
    )
    return result
