"""Domain model for fetched CMS content."""

from __future__ import annotations

from .content import ContentItem, ContentSource
from .enums import ANY_LOCALE, FieldType, NodeType, ResourceCategory, SourceKind
from .fields import (
    AssetField,
    CollectionLinkField,
    Field,
    FieldValue,
    GalleryField,
    GalleryImage,
    ImageField,
    LayoutField,
    MarkdownField,
    NodeId,
    ObjectField,
    RawField,
    Scalar,
    TypedField,
)
from .nodes import Node

__all__ = [
    "ANY_LOCALE",
    "AssetField",
    "CollectionLinkField",
    "ContentItem",
    "ContentSource",
    "Field",
    "FieldType",
    "FieldValue",
    "GalleryField",
    "GalleryImage",
    "ImageField",
    "LayoutField",
    "MarkdownField",
    "Node",
    "NodeId",
    "NodeType",
    "ObjectField",
    "RawField",
    "ResourceCategory",
    "Scalar",
    "SourceKind",
    "TypedField",
]
