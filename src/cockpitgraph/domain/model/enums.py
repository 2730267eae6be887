"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum

ANY_LOCALE = "any"


class SourceKind(StrEnum):
    COLLECTION = "collection"
    TREE = "tree"


class FieldType(StrEnum):
    """Field type tags recognized in CMS payloads."""

    IMAGE = "image"
    GALLERY = "gallery"
    ASSET = "asset"
    MARKDOWN = "markdown"
    LAYOUT = "layout"
    LAYOUT_GRID = "layout-grid"
    COLLECTION_LINK = "collectionlink"
    OBJECT = "object"


class ResourceCategory(StrEnum):
    """The four registries filled during normalization."""

    IMAGE = "image"
    ASSET = "asset"
    MARKDOWN = "markdown"
    LAYOUT = "layout"


class NodeType(StrEnum):
    IMAGE = "CockpitImage"
    ASSET = "CockpitAsset"
    MARKDOWN = "CockpitMarkdown"
    LAYOUT = "CockpitLayout"
    OBJECT = "CockpitObject"

    @classmethod
    def for_category(cls, category: ResourceCategory) -> NodeType:
        return _NODE_TYPE_BY_CATEGORY[category]


_NODE_TYPE_BY_CATEGORY: dict[ResourceCategory, NodeType] = {
    ResourceCategory.IMAGE: NodeType.IMAGE,
    ResourceCategory.ASSET: NodeType.ASSET,
    ResourceCategory.MARKDOWN: NodeType.MARKDOWN,
    ResourceCategory.LAYOUT: NodeType.LAYOUT,
}
