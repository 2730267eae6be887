"""Phase-based orchestrator for the content pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from .context import ContentGraph, PipelineContext


class PipelinePhase(Protocol):
    """Contract implemented by each pipeline phase."""

    name: str

    def run(self, graph: ContentGraph, *, context: PipelineContext) -> None: ...


@dataclass(slots=True)
class IngestionPipeline:
    """Compose and execute the ordered pipeline phases.

    The orchestrator only wires phases together; each phase checks that the
    state it depends on was produced by an earlier one.
    """

    phases: Sequence[PipelinePhase] = field(default_factory=tuple)

    def with_phase(self, phase: PipelinePhase) -> IngestionPipeline:
        """Return a new pipeline appending ``phase`` at the end."""

        return IngestionPipeline(phases=(*self.phases, phase))

    def extend(self, phases: Iterable[PipelinePhase]) -> IngestionPipeline:
        """Return a new pipeline with the provided ``phases`` concatenated."""

        return IngestionPipeline(phases=(*self.phases, *tuple(phases)))

    def run(self, graph: ContentGraph, *, context: PipelineContext) -> ContentGraph:
        """Execute the configured phases in-order against ``graph``."""

        for phase in self.phases:
            phase.run(graph, context=context)
        return graph
