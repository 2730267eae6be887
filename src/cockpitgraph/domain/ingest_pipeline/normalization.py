"""Normalization phase: absolutize, flatten and register embedded resources."""

from __future__ import annotations

import re
from collections.abc import Mapping
from logging import getLogger
from typing import TYPE_CHECKING, Final, assert_never, cast

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
)

from .markdown import scan_markdown
from .registry import ResourceRegistry

if TYPE_CHECKING:
    from collections.abc import Iterable

    from cockpitgraph.domain.model import ContentItem, ContentSource, TypedField

    from .context import ContentGraph, PipelineContext

log = getLogger(__name__)

ASSET_STORAGE_PATH: Final[str] = "/storage/uploads"
# CMS bookkeeping on asset payloads; anything else is kept on the field
ASSET_INTERNAL_ATTRIBUTES: Final[frozenset[str]] = frozenset(
    {
        "_id",
        "path",
        "title",
        "mime",
        "size",
        "image",
        "video",
        "audio",
        "archive",
        "document",
        "code",
        "created",
        "modified",
        "_by",
    }
)
GALLERY_DROPPED_META: Final[frozenset[str]] = frozenset({"asset"})

_SCHEME: Final = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*:")


def resolve_url(path: str, base_url: str) -> str:
    """Absolute URL for ``path``: untouched if it has a scheme, else joined to ``base_url``."""

    if _SCHEME.match(path):
        return path
    if path.startswith("/"):
        return f"{base_url}{path}"
    return f"{base_url}/{path}"


def asset_url(path: str, base_url: str) -> str:
    if _SCHEME.match(path):
        return path
    if not path.startswith("/"):
        path = f"/{path}"
    return f"{base_url}{ASSET_STORAGE_PATH}{path}"


class ResourceNormalizer:
    """Walks content items and fills a ``ResourceRegistry``.

    The registry is passed in rather than owned so that one instance covers
    every source of a run. Fields are rewritten in place.
    """

    def __init__(self, base_url: str, registry: ResourceRegistry) -> None:
        self.base_url = base_url.rstrip("/")
        self.registry = registry
        self.items_seen = 0
        self.fields_seen = 0

    def normalize_sources(self, sources: Iterable[ContentSource]) -> ResourceRegistry:
        for source in sources:
            for item in source.walk():
                self.normalize_item(item)
        return self.registry

    def normalize_item(self, item: ContentItem) -> None:
        """Normalize the fields of ``item`` only; callers walk the children."""

        self.items_seen += 1
        for _name, field in item.typed_fields():
            if self.normalize_field(field):
                self.fields_seen += 1

    def normalize_field(self, field: TypedField) -> bool:
        """Apply the rule for the field's category; False if the category has none."""

        if isinstance(field, ImageField):
            self._normalize_image(field)
        elif isinstance(field, GalleryField):
            self._normalize_gallery(field)
        elif isinstance(field, AssetField):
            self._normalize_asset(field)
        elif isinstance(field, MarkdownField):
            self._normalize_markdown(field)
        elif isinstance(field, LayoutField):
            self.registry.register_layout(field.value)
        elif isinstance(field, CollectionLinkField | ObjectField | RawField):
            return False
        else:
            assert_never(field)
        return True

    def _normalize_image(self, field: ImageField) -> None:
        path = field.path
        if path is None:
            return
        url = resolve_url(path, self.base_url)
        field.value = url
        self.registry.register_image(url)

    def _normalize_gallery(self, field: GalleryField) -> None:
        images: list[object] = []
        for entry in field.value or []:
            image = self._gallery_image(entry)
            if image.value is not None:
                image.value = resolve_url(image.value, self.base_url)
                self.registry.register_image(image.value)
            images.append(image)
        field.value = images

    def _gallery_image(self, entry: object) -> GalleryImage:
        if isinstance(entry, GalleryImage):
            return entry
        if not isinstance(entry, Mapping):
            return GalleryImage(value=entry if isinstance(entry, str) and entry else None)
        raw = cast("Mapping[str, object]", entry)
        path = raw.get("path")
        meta = raw.get("meta")
        kept_meta: dict[str, object] = {}
        if isinstance(meta, Mapping):
            kept_meta = {
                key: value
                for key, value in cast("Mapping[str, object]", meta).items()
                if key not in GALLERY_DROPPED_META
            }
        return GalleryImage(value=path if isinstance(path, str) and path else None, meta=kept_meta)

    def _normalize_asset(self, field: AssetField) -> None:
        value = field.value
        if isinstance(value, str):
            path: object = value
        elif isinstance(value, Mapping):
            payload = cast("Mapping[str, object]", value)
            path = payload.get("path")
            for key, attribute in payload.items():
                if key not in ASSET_INTERNAL_ATTRIBUTES:
                    field.attributes[key] = attribute
        else:
            path = None

        if not isinstance(path, str) or not path:
            log.debug("Asset field without a path left as-is")
            return
        url = asset_url(path, self.base_url)
        field.value = url
        self.registry.register_asset(url)

    def _normalize_markdown(self, field: MarkdownField) -> None:
        text = field.value
        if not text:
            return
        self.registry.register_markdown(text)
        references = scan_markdown(text)
        for target in references.images:
            self.registry.register_image(resolve_url(target, self.base_url))
        for target in references.assets:
            self.registry.register_asset(resolve_url(target, self.base_url))


def normalize_sources(
    sources: Iterable[ContentSource],
    *,
    base_url: str,
    registry: ResourceRegistry | None = None,
) -> ResourceRegistry:
    """Run one normalization pass over ``sources`` and return the filled registry."""

    active_registry = registry if registry is not None else ResourceRegistry()
    normalizer = ResourceNormalizer(base_url, active_registry)
    return normalizer.normalize_sources(sources)


class NormalizationPhase:
    """Coordinates normalization across every source in the content graph."""

    name: str = "normalization"

    def run(self, graph: ContentGraph, *, context: PipelineContext) -> None:
        registry = context.registry if context.registry is not None else ResourceRegistry()
        context.registry = registry

        normalizer = ResourceNormalizer(context.base_url, registry)
        normalizer.normalize_sources(graph.sources)

        context.counters.items_normalized += normalizer.items_seen
        context.counters.fields_normalized += normalizer.fields_seen
        sizes = registry.sizes()
        log.info(
            "Normalized %d items: %s",
            normalizer.items_seen,
            ", ".join(f"{category}={count}" for category, count in sizes.items()),
        )
