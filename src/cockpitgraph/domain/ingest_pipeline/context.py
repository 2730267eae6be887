"""Shared context structures for the ingest pipeline (graph + state)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator

    from cockpitgraph.domain.model import ContentItem, ContentSource

    from .registry import MaterializedRegistry, ResourceRegistry


@dataclass(slots=True)
class ContentGraph:
    """Every source fetched in one run.

    Normalization and linking must see the same graph instance: registries are
    scoped to the whole forest, not to a single source.
    """

    sources: list[ContentSource] = field(default_factory=list["ContentSource"])

    def add_source(self, source: ContentSource) -> None:
        if source not in self.sources:
            self.sources.append(source)

    def walk(self) -> Iterator[ContentItem]:
        for source in self.sources:
            yield from source.walk()


@dataclass(slots=True)
class PipelineCounters:
    items_normalized: int = 0
    fields_normalized: int = 0
    nodes_materialized: int = 0
    unmaterialized: int = 0
    fields_linked: int = 0
    missing_media: int = 0


@dataclass(slots=True)
class PipelineContext:
    """Mutable context shared across pipeline phases."""

    base_url: str
    registry: ResourceRegistry | None = None
    materialized: MaterializedRegistry | None = None
    counters: PipelineCounters = field(default_factory=PipelineCounters)
