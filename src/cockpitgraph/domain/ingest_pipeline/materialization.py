"""Materialization: turn registry entries into nodes and seal the registry."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from cockpitgraph.domain.ids import content_hash, node_id
from cockpitgraph.domain.model import Node, NodeType, ResourceCategory

if TYPE_CHECKING:
    from cockpitgraph.domain.model import NodeId
    from cockpitgraph.domain.ports.nodes import NodeMaterializer, NodeRepository

    from .context import ContentGraph, PipelineContext
    from .registry import MaterializedRegistry, ResourceRegistry

log = getLogger(__name__)


def materialize_registry(
    registry: ResourceRegistry,
    materializer: NodeMaterializer,
) -> MaterializedRegistry:
    """Call ``materializer`` once per distinct key and seal the result."""

    assigned: dict[ResourceCategory, dict[str, NodeId | None]] = {
        category: {} for category in ResourceCategory
    }
    for category, key, value in registry.entries():
        assigned[category][key] = materializer.materialize(category, key, value)
    return registry.seal(assigned)


def resource_node(category: ResourceCategory, key: str, value: object) -> Node:
    """Node for one registry entry. Ids derive from the dedup key."""

    node_type = NodeType.for_category(category)
    if category is ResourceCategory.IMAGE or category is ResourceCategory.ASSET:
        payload: dict[str, object] = {"url": key}
    elif category is ResourceCategory.MARKDOWN:
        payload = {"content": value}
    else:
        payload = {"layout": value, "hash": key}
    return Node(id=node_id(node_type, key), node_type=node_type, payload=payload)


def object_node(value: object) -> Node:
    return Node(
        id=node_id(NodeType.OBJECT, content_hash(value)),
        node_type=NodeType.OBJECT,
        payload={"data": value},
    )


class NodeStore:
    """Materializer and object-node factory backed by a ``NodeRepository``."""

    def __init__(self, repository: NodeRepository) -> None:
        self.repository = repository

    def materialize(self, category: ResourceCategory, key: str, value: object) -> NodeId | None:
        node = resource_node(category, key, value)
        self.repository.add(node)
        return node.id

    def create(self, value: object) -> NodeId:
        node = object_node(value)
        self.repository.add(node)
        return node.id

    def add(self, node: Node) -> NodeId:
        self.repository.add(node)
        return node.id


class MaterializationPhase:
    """Materialize every registry entry. Must follow normalization."""

    name: str = "materialization"

    def __init__(self, materializer: NodeMaterializer) -> None:
        self.materializer = materializer

    def run(self, graph: ContentGraph, *, context: PipelineContext) -> None:  # noqa: ARG002
        registry = context.registry
        if registry is None:
            raise RuntimeError("Normalization must run before materialization")
        if context.materialized is not None:
            raise RuntimeError("Registry already materialized for this run")

        sealed = materialize_registry(registry, self.materializer)
        context.materialized = sealed

        placeholders = sum(
            1
            for category in ResourceCategory
            for value in sealed.bucket(category).values()
            if value is None
        )
        context.counters.nodes_materialized += len(registry) - placeholders
        context.counters.unmaterialized += placeholders
        log.info(
            "Materialized %d resource nodes (%d left as placeholders)",
            len(registry) - placeholders,
            placeholders,
        )
