from __future__ import annotations

import pytest

from cockpitgraph.adapters.memory import InMemoryNodeRepository, InMemoryNodeUnitOfWork
from cockpitgraph.domain.model import Node, NodeType
from cockpitgraph.domain.ports.nodes import NodeRepository


def _node(node_id: str, node_type: str = NodeType.IMAGE) -> Node:
    return Node(id=node_id, node_type=node_type, payload={"url": f"https://cms.example/{node_id}"})


def test_repository_replaces_nodes_with_the_same_id() -> None:
    repository = InMemoryNodeRepository()

    repository.add(_node("a"))
    repository.add(Node(id="a", node_type=NodeType.IMAGE, payload={"url": "changed"}))

    stored = repository.get("a")
    assert stored is not None
    assert stored.payload == {"url": "changed"}
    assert len(repository) == 1
    assert isinstance(repository, NodeRepository)


def test_repository_filters_by_type() -> None:
    repository = InMemoryNodeRepository()
    repository.add(_node("a"))
    repository.add(_node("b", NodeType.MARKDOWN))

    assert [node.id for node in repository.iter_nodes(node_type=NodeType.MARKDOWN)] == ["b"]
    assert [node.id for node in repository.iter_nodes()] == ["a", "b"]


def test_commit_publishes_staged_nodes() -> None:
    repository = InMemoryNodeRepository()
    uow = InMemoryNodeUnitOfWork(repository)

    with uow:
        uow.repositories.nodes.add(_node("a"))
        assert repository.get("a") is None
        uow.commit()

    assert repository.get("a") is not None


def test_uncommitted_nodes_are_discarded() -> None:
    repository = InMemoryNodeRepository()
    uow = InMemoryNodeUnitOfWork(repository)

    with pytest.raises(RuntimeError, match="boom"), uow:
        uow.repositories.nodes.add(_node("a"))
        raise RuntimeError("boom")

    assert len(repository) == 0


def test_repositories_require_context() -> None:
    with pytest.raises(RuntimeError, match="outside of its context"):
        _ = InMemoryNodeUnitOfWork().repositories
