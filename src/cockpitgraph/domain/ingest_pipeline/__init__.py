"""Content ingest pipeline.

Raw records become typed item trees (``builder``), a normalization pass
registers every embedded resource across the whole forest (``normalization``),
an external store turns registry entries into nodes (``materialization``), and
a linking pass swaps field payloads for node references (``linking``). Phases
share a ``PipelineContext`` and run over one ``ContentGraph``.
"""

from __future__ import annotations

from .builder import (
    build_collection_item,
    build_field,
    build_source,
    build_sources,
    build_tree_item,
)
from .content_nodes import content_node, content_nodes, item_node_id
from .context import ContentGraph, PipelineContext, PipelineCounters
from .errors import (
    IngestError,
    RegistryConsistencyError,
    StructuralInvariantError,
    UnsealedRegistryError,
)
from .linking import LinkingPhase, LinkStats, ReferenceLinker, link_sources
from .markdown import scan_markdown
from .materialization import MaterializationPhase, NodeStore, materialize_registry
from .normalization import NormalizationPhase, ResourceNormalizer, normalize_sources, resolve_url
from .orchestrator import IngestionPipeline, PipelinePhase
from .registry import MaterializedRegistry, ResourceRegistry
from .runner import default_pipeline, run_content_pipeline

__all__ = [
    "ContentGraph",
    "IngestError",
    "IngestionPipeline",
    "LinkStats",
    "LinkingPhase",
    "MaterializationPhase",
    "MaterializedRegistry",
    "NodeStore",
    "NormalizationPhase",
    "PipelineContext",
    "PipelineCounters",
    "PipelinePhase",
    "ReferenceLinker",
    "RegistryConsistencyError",
    "ResourceNormalizer",
    "ResourceRegistry",
    "StructuralInvariantError",
    "UnsealedRegistryError",
    "build_collection_item",
    "build_field",
    "build_source",
    "build_sources",
    "build_tree_item",
    "content_node",
    "content_nodes",
    "default_pipeline",
    "item_node_id",
    "link_sources",
    "materialize_registry",
    "normalize_sources",
    "resolve_url",
    "run_content_pipeline",
    "scan_markdown",
]
