"""Build typed content item trees from raw CMS records."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import UTC, datetime
from logging import getLogger
from typing import TYPE_CHECKING, Final, cast

from cockpitgraph.domain.model import (
    AssetField,
    CollectionLinkField,
    ContentItem,
    ContentSource,
    FieldType,
    GalleryField,
    ImageField,
    LayoutField,
    MarkdownField,
    ObjectField,
    RawField,
    SourceKind,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

    from cockpitgraph.domain.model import FieldValue, TypedField
    from cockpitgraph.domain.ports.fetching import FetchSuccess

log = getLogger(__name__)

type RawRecord = Mapping[str, object]

CHILDREN_KEY: Final[str] = "_children"
METADATA_KEYS: Final[frozenset[str]] = frozenset(
    {"_id", "_created", "_modified", "_by", "_cby", "_mby", "_pid", "_state", CHILDREN_KEY}
)


def build_field(raw: object) -> FieldValue | None:
    """Wrap one raw value.

    ``None``, ``""`` and ``[]`` produce no field. Non-composite values come back
    as bare scalars. Composites become typed fields: the tag comes from a
    ``{"type", "value"}`` envelope, else the composite is treated as an ``object``.
    """

    if _is_empty(raw):
        return None

    if not _is_composite(raw):
        return cast("FieldValue", raw)

    envelope = _envelope(raw)
    if envelope is None:
        return ObjectField(value=raw)
    tag, payload = envelope
    if _is_empty(payload):
        return None
    return _typed_field(tag, payload)


def build_collection_item(
    name: str,
    record: RawRecord,
    *,
    depth: int = 1,
) -> ContentItem:
    """Build a collection item. Nested ``_children`` are not recursed into."""

    item = _new_item(name, SourceKind.COLLECTION, record)
    item.depth = depth
    item.fields = _build_fields(record)
    return item


def build_tree_item(name: str, record: RawRecord) -> ContentItem:
    """Build a tree item and, recursively, its ``_children``."""

    item = _new_item(name, SourceKind.TREE, record)
    item.fields = _build_fields(record)

    raw_children = record.get(CHILDREN_KEY)
    if isinstance(raw_children, list) and raw_children:
        children: list[ContentItem] = []
        for raw_child in cast("list[object]", raw_children):
            if not isinstance(raw_child, Mapping):
                log.warning("Skipping non-record child in tree %s item %s", name, item.id)
                continue
            child = build_tree_item(name, cast("RawRecord", raw_child))
            if child.parent_id is None:
                child.parent_id = item.id
            children.append(child)
        item.children = children
    return item


def build_source(
    name: str,
    kind: SourceKind,
    records: Iterable[RawRecord],
    *,
    published_name: str | None = None,
) -> ContentSource:
    if kind is SourceKind.COLLECTION:
        items = [build_collection_item(name, r) for r in records]
    else:
        items = [build_tree_item(name, r) for r in records]
    return ContentSource(name=name, kind=kind, items=items, published_name=published_name)


def build_sources(
    results: Iterable[FetchSuccess],
    *,
    aliases: Mapping[str, str] | None = None,
) -> list[ContentSource]:
    """Build one source per successful fetch, keeping fetch order."""

    aliases = aliases or {}
    sources: list[ContentSource] = []
    for result in results:
        source = build_source(
            result.name,
            result.kind,
            result.records,
            published_name=aliases.get(result.name),
        )
        log.debug("Built %s %s: %d top-level items", source.kind, source.name, len(source.items))
        sources.append(source)
    return sources


def _new_item(name: str, kind: SourceKind, record: RawRecord) -> ContentItem:
    record_id = record.get("_id")
    if not isinstance(record_id, str) or not record_id:
        raise ValueError(f"Record in {kind} {name!r} has no _id")
    return ContentItem(
        id=record_id,
        source=name,
        kind=kind,
        created_at=_from_epoch(record.get("_created")),
        modified_at=_from_epoch(record.get("_modified")),
        last_touched_by=_opt_str(record.get("_by")),
        created_by=_opt_str(record.get("_cby")),
        modified_by=_opt_str(record.get("_mby")),
        parent_id=_opt_str(record.get("_pid")),
    )


def _build_fields(record: RawRecord) -> dict[str, FieldValue]:
    fields: dict[str, FieldValue] = {}
    for field_name, raw in record.items():
        if field_name in METADATA_KEYS:
            continue
        built = build_field(raw)
        if built is not None:
            fields[field_name] = built
    return fields


def _typed_field(tag: str, payload: object) -> TypedField:
    if tag == FieldType.IMAGE:
        return ImageField(value=payload)
    if tag == FieldType.GALLERY:
        entries = cast("list[object]", payload) if isinstance(payload, list) else [payload]
        return GalleryField(value=list(entries))
    if tag == FieldType.ASSET:
        return AssetField(value=payload)
    if tag == FieldType.MARKDOWN:
        return MarkdownField(value=payload if isinstance(payload, str) else str(payload))
    if tag in (FieldType.LAYOUT, FieldType.LAYOUT_GRID):
        return LayoutField(value=payload, layout_type=FieldType(tag))
    if tag == FieldType.COLLECTION_LINK:
        return CollectionLinkField(value=payload)
    if tag == FieldType.OBJECT:
        return ObjectField(value=payload)
    return RawField(tag=tag, value=payload)


def _envelope(raw: object) -> tuple[str, object] | None:
    if not isinstance(raw, Mapping):
        return None
    mapping = cast("Mapping[str, object]", raw)
    tag = mapping.get("type")
    if isinstance(tag, str) and "value" in mapping:
        return tag, mapping["value"]
    return None


def _is_empty(raw: object) -> bool:
    return raw is None or raw == "" or (isinstance(raw, list) and not raw)


def _is_composite(raw: object) -> bool:
    if isinstance(raw, Mapping):
        return True
    if isinstance(raw, list):
        return any(isinstance(entry, Mapping) for entry in cast("list[object]", raw))
    return False


def _from_epoch(value: object) -> datetime | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        return datetime.fromtimestamp(value, tz=UTC)
    if isinstance(value, str) and value.strip().lstrip("-").isdigit():
        return datetime.fromtimestamp(int(value), tz=UTC)
    return None


def _opt_str(value: object) -> str | None:
    if value is None or value == "":
        return None
    return str(value)
