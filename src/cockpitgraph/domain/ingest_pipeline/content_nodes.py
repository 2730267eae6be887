"""Turn linked content items into graph nodes."""

from __future__ import annotations

from dataclasses import asdict, is_dataclass
from logging import getLogger
from typing import TYPE_CHECKING, Final

from cockpitgraph.domain.ids import node_id
from cockpitgraph.domain.model import AssetField, Field, Node

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from cockpitgraph.domain.model import ContentItem, ContentSource, FieldValue

log = getLogger(__name__)

RESERVED_PAYLOAD_KEYS: Final[frozenset[str]] = frozenset({"type", "reference", "value"})


def item_node_id(item: ContentItem) -> str:
    """Same id a collection link to this record resolves to."""

    return node_id(item.source, item.id, item.locale)


def content_nodes(sources: Iterable[ContentSource]) -> Iterator[Node]:
    """Yield one node per item, parents before their children."""

    for source in sources:
        for item in source.walk():
            yield content_node(item, node_type=source.node_type_name)


def content_node(item: ContentItem, *, node_type: str) -> Node:
    parent = node_id(item.source, item.parent_id, item.locale) if item.parent_id else None
    payload: dict[str, object] = {
        "cockpitId": item.id,
        "source": item.source,
        "kind": item.kind.value,
        "locale": item.locale,
        "createdAt": item.created_at.isoformat() if item.created_at else None,
        "modifiedAt": item.modified_at.isoformat() if item.modified_at else None,
        "createdBy": item.created_by,
        "modifiedBy": item.modified_by,
        "lastTouchedBy": item.last_touched_by,
        "depth": item.depth,
        "fields": {name: field_payload(value) for name, value in item.fields.items()},
        "children": [item_node_id(child) for child in item.children or []],
    }
    return Node(id=item_node_id(item), node_type=node_type, payload=payload, parent_id=parent)


def field_payload(value: FieldValue) -> object:
    if not isinstance(value, Field):
        return value
    payload: dict[str, object] = {"type": value.type_tag}
    if value.linked:
        payload["reference"] = value.reference
    else:
        log.debug("Serializing unlinked %s field", value.type_tag)
        payload["value"] = _plain(value.value)
    if isinstance(value, AssetField):
        for key, attribute in value.attributes.items():
            if key in RESERVED_PAYLOAD_KEYS:
                log.debug("Dropping asset attribute %r that clashes with the field payload", key)
                continue
            payload[key] = attribute
    return payload


def _plain(value: object) -> object:
    if isinstance(value, list):
        return [_plain(entry) for entry in value]  # pyright: ignore[reportUnknownVariableType]
    if is_dataclass(value) and not isinstance(value, type):
        return asdict(value)
    return value
