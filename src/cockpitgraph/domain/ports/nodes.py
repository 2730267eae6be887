"""Ports for the collaborators that turn resources into graph nodes."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Iterable

    from cockpitgraph.domain.model import Node, NodeId, ResourceCategory


@runtime_checkable
class NodeMaterializer(Protocol):
    """Creates one node per registry entry and returns its id.

    Returning ``None`` leaves the entry as an explicit placeholder; the linker
    treats it like a missing resource.
    """

    def materialize(self, category: ResourceCategory, key: str, value: object) -> NodeId | None:
        ...


@runtime_checkable
class ObjectNodeFactory(Protocol):
    """Creates a node for the payload of an ``object`` field."""

    def create(self, value: object) -> NodeId: ...


@runtime_checkable
class NodeRepository(Protocol):
    """Persistence contract for graph nodes. ``add`` replaces a node with the same id."""

    def add(self, node: Node) -> None: ...

    def get(self, node_id: NodeId) -> Node | None: ...

    def iter_nodes(self, *, node_type: str | None = None) -> Iterable[Node]: ...


__all__ = ["NodeMaterializer", "NodeRepository", "ObjectNodeFactory"]
