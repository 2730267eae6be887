"""SQLAlchemy-backed node repository."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

from sqlalchemy import delete, insert, select

from cockpitgraph.domain.model import Node
from cockpitgraph.domain.ports.nodes import NodeRepository

from .mappings import content_node_table

if TYPE_CHECKING:
    from collections.abc import Iterator

    from sqlalchemy.engine import Row
    from sqlalchemy.orm import Session

    from cockpitgraph.domain.model import NodeId


class SqlAlchemyNodeRepository(NodeRepository):
    """Persist graph nodes as JSON rows. ``add`` replaces an existing row with the same id."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, node: Node) -> None:
        self.session.execute(delete(content_node_table).where(content_node_table.c.id == node.id))
        self.session.execute(
            insert(content_node_table).values(
                id=node.id,
                node_type=node.node_type,
                parent_id=node.parent_id,
                payload=node.payload,
            )
        )

    def get(self, node_id: NodeId) -> Node | None:
        stmt = select(content_node_table).where(content_node_table.c.id == node_id)
        row = self.session.execute(stmt).first()
        return _to_node(row) if row is not None else None

    def iter_nodes(self, *, node_type: str | None = None) -> Iterator[Node]:
        stmt = select(content_node_table).order_by(content_node_table.c.id)
        if node_type is not None:
            stmt = stmt.where(content_node_table.c.node_type == node_type)
        for row in self.session.execute(stmt):
            yield _to_node(row)


def _to_node(row: Row[Any]) -> Node:
    return Node(
        id=row.id,
        node_type=row.node_type,
        parent_id=row.parent_id,
        payload=cast("dict[str, object]", row.payload),
    )
