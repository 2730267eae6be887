"""Entry points for running the content pipeline."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .context import ContentGraph, PipelineContext
from .linking import LinkingPhase
from .materialization import MaterializationPhase
from .normalization import NormalizationPhase
from .orchestrator import IngestionPipeline

if TYPE_CHECKING:
    from collections.abc import Iterable

    from cockpitgraph.domain.model import ContentSource
    from cockpitgraph.domain.ports.nodes import NodeMaterializer, ObjectNodeFactory


def default_pipeline(
    *,
    materializer: NodeMaterializer,
    object_factory: ObjectNodeFactory,
) -> IngestionPipeline:
    """Normalize, materialize, link: in that order, over the whole graph."""

    return IngestionPipeline(
        phases=(
            NormalizationPhase(),
            MaterializationPhase(materializer),
            LinkingPhase(object_factory),
        )
    )


def run_content_pipeline(
    sources: Iterable[ContentSource],
    *,
    base_url: str,
    materializer: NodeMaterializer,
    object_factory: ObjectNodeFactory,
) -> PipelineContext:
    """Run the default pipeline over ``sources`` and return the finished context."""

    graph = ContentGraph(sources=list(sources))
    context = PipelineContext(base_url=base_url)
    default_pipeline(materializer=materializer, object_factory=object_factory).run(
        graph, context=context
    )
    return context
