"""Linking phase: replace field payloads with references to materialized nodes."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING, assert_never, cast

from cockpitgraph.domain.ids import content_hash, node_id
from cockpitgraph.domain.model import (
    AssetField,
    CollectionLinkField,
    GalleryField,
    GalleryImage,
    ImageField,
    LayoutField,
    MarkdownField,
    ObjectField,
    RawField,
    ResourceCategory,
)

from .errors import StructuralInvariantError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from cockpitgraph.domain.model import ContentItem, ContentSource, NodeId, TypedField
    from cockpitgraph.domain.ports.nodes import ObjectNodeFactory

    from .context import ContentGraph, PipelineContext
    from .registry import MaterializedRegistry

log = getLogger(__name__)


@dataclass(slots=True)
class LinkStats:
    linked: int = 0
    missing_media: int = 0


class ReferenceLinker:
    """Second pass over the forest. Accepts only a sealed registry."""

    def __init__(self, registry: MaterializedRegistry, object_factory: ObjectNodeFactory) -> None:
        self.registry = registry
        self.object_factory = object_factory
        self.stats = LinkStats()

    def link_sources(self, sources: Iterable[ContentSource]) -> LinkStats:
        for source in sources:
            for item in source.walk():
                self.link_item(item)
        return self.stats

    def link_item(self, item: ContentItem) -> None:
        """Link the fields of ``item`` only; callers walk the children."""

        for name, field in item.typed_fields():
            if field.linked or isinstance(field, RawField):
                continue
            self.link_field(item, name, field)
            field.linked = True
            self.stats.linked += 1

    def link_field(self, item: ContentItem, name: str, field: TypedField) -> None:
        if isinstance(field, ImageField):
            self._link_media(field, ResourceCategory.IMAGE)
        elif isinstance(field, GalleryField):
            self._link_gallery(field)
        elif isinstance(field, AssetField):
            self._link_media(field, ResourceCategory.ASSET)
        elif isinstance(field, MarkdownField):
            field.reference = self.registry.require(ResourceCategory.MARKDOWN, field.value or "")
            field.value = None
        elif isinstance(field, LayoutField):
            key = content_hash(field.value)
            field.reference = self.registry.require(ResourceCategory.LAYOUT, key)
            field.value = None
        elif isinstance(field, CollectionLinkField):
            field.reference = self._collection_link_reference(item, name, field.value)
            field.value = None
        elif isinstance(field, ObjectField):
            field.reference = self.object_factory.create(field.value)
            field.value = None
        elif isinstance(field, RawField):
            return
        else:
            assert_never(field)

    def _link_media(self, field: ImageField | AssetField, category: ResourceCategory) -> None:
        url = field.value if isinstance(field.value, str) else None
        reference = self.registry.lookup(category, url) if url is not None else None
        if reference is None:
            self.stats.missing_media += 1
            log.debug("No %s node for %s; leaving the reference empty", category, url)
        field.reference = reference
        field.value = None

    def _link_gallery(self, field: GalleryField) -> None:
        references: list[NodeId] = []
        for entry in field.value or []:
            url = entry.value if isinstance(entry, GalleryImage) else None
            reference = self.registry.lookup(ResourceCategory.IMAGE, url) if url else None
            if reference is None:
                self.stats.missing_media += 1
                continue
            references.append(reference)
        field.reference = references
        field.value = None

    def _collection_link_reference(
        self,
        item: ContentItem,
        name: str,
        value: object,
    ) -> NodeId | list[NodeId]:
        if isinstance(value, list):
            targets = [_link_target(entry, name, item) for entry in cast("list[object]", value)]
            collections = {collection for collection, _record_id in targets}
            if len(collections) > 1:
                raise StructuralInvariantError(
                    "One to many Collection-Links must refer to entries from a single "
                    f"collection, found {sorted(collections)}",
                    field_name=name,
                    item_id=item.id,
                )
            locale = item.locale
            return [node_id(collection, record_id, locale) for collection, record_id in targets]

        collection, record_id = _link_target(value, name, item)
        return node_id(collection, record_id, item.locale)


def _link_target(value: object, name: str, item: ContentItem) -> tuple[str, str]:
    if isinstance(value, Mapping):
        link = cast("Mapping[str, object]", value)
        collection = link.get("link")
        record_id = link.get("_id")
        if isinstance(collection, str) and collection and isinstance(record_id, str) and record_id:
            return collection, record_id
    raise StructuralInvariantError(
        "Collection-Link entries need a 'link' collection name and an '_id'",
        field_name=name,
        item_id=item.id,
    )


def link_sources(
    sources: Iterable[ContentSource],
    registry: MaterializedRegistry,
    *,
    object_factory: ObjectNodeFactory,
) -> LinkStats:
    """Run the linking pass over ``sources`` against a sealed registry."""

    return ReferenceLinker(registry, object_factory).link_sources(sources)


class LinkingPhase:
    """Coordinates linking once every registry entry has been materialized."""

    name: str = "linking"

    def __init__(self, object_factory: ObjectNodeFactory) -> None:
        self.object_factory = object_factory

    def run(self, graph: ContentGraph, *, context: PipelineContext) -> None:
        registry = context.materialized
        if registry is None:
            raise RuntimeError("Materialization must run before linking")

        stats = link_sources(graph.sources, registry, object_factory=self.object_factory)
        context.counters.fields_linked += stats.linked
        context.counters.missing_media += stats.missing_media
        log.info("Linked %d fields (%d missing media)", stats.linked, stats.missing_media)
