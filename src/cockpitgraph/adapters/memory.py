"""In-memory node repository and unit of work, for dry runs and tests."""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal

from cockpitgraph.domain.ports.unit_of_work import NodeRepositories

if TYPE_CHECKING:
    from collections.abc import Iterator
    from types import TracebackType

    from cockpitgraph.domain.model import Node, NodeId


class InMemoryNodeRepository:
    def __init__(self) -> None:
        self.nodes: dict[NodeId, Node] = {}

    def add(self, node: Node) -> None:
        self.nodes[node.id] = node

    def get(self, node_id: NodeId) -> Node | None:
        return self.nodes.get(node_id)

    def iter_nodes(self, *, node_type: str | None = None) -> Iterator[Node]:
        for node in self.nodes.values():
            if node_type is None or node.node_type == node_type:
                yield node

    def __len__(self) -> int:
        return len(self.nodes)


class InMemoryNodeUnitOfWork:
    """Stages nodes and publishes them to a shared repository on commit."""

    def __init__(self, repository: InMemoryNodeRepository | None = None) -> None:
        self.committed = repository if repository is not None else InMemoryNodeRepository()
        self._staged: InMemoryNodeRepository | None = None

    def __enter__(self) -> InMemoryNodeUnitOfWork:
        self._staged = InMemoryNodeRepository()
        self._staged.nodes.update(self.committed.nodes)
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        self._staged = None
        return False

    @property
    def repositories(self) -> NodeRepositories:
        if self._staged is None:
            raise RuntimeError("Unit of work used outside of its context")
        return NodeRepositories(nodes=self._staged)

    def commit(self) -> None:
        if self._staged is None:
            raise RuntimeError("Unit of work used outside of its context")
        self.committed.nodes = dict(self._staged.nodes)

    def rollback(self) -> None:
        if self._staged is not None:
            self._staged.nodes = dict(self.committed.nodes)


if TYPE_CHECKING:
    from cockpitgraph.domain.ports.nodes import NodeRepository
    from cockpitgraph.domain.ports.unit_of_work import NodeUnitOfWork

    _repository_check: NodeRepository = InMemoryNodeRepository()
    _uow_check: NodeUnitOfWork = InMemoryNodeUnitOfWork()
