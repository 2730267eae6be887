"""Graph nodes handed to node stores."""

from __future__ import annotations

from dataclasses import dataclass, field

from .fields import NodeId


@dataclass(slots=True, kw_only=True)
class Node:
    id: NodeId
    node_type: str
    payload: dict[str, object] = field(default_factory=dict[str, object])
    parent_id: NodeId | None = None
