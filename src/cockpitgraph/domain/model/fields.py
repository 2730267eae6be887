"""Field model: a closed set of typed field classes plus bare scalars.

Scalars are stored on the owning item as-is. Every other field carries the CMS
payload in ``value`` until the linking pass swaps it for ``reference``, the
identifier of the node the payload was materialized into.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import ClassVar

from .enums import FieldType

type NodeId = str
type Scalar = str | int | float | bool | list[str | int | float | bool]


@dataclass(eq=False, kw_only=True)
class Field(ABC):
    """Base for tagged fields."""

    value: object = None
    reference: NodeId | list[NodeId] | None = None
    linked: bool = False

    @property
    @abstractmethod
    def type_tag(self) -> str:
        """Tag written to the node payload."""


@dataclass(eq=False, kw_only=True)
class KnownField(Field, ABC):
    """Field whose tag is one of ``FieldType``. Subclasses pin ``FIELD_TYPE``."""

    FIELD_TYPE: ClassVar[FieldType]

    @property
    def type_tag(self) -> str:
        return self.FIELD_TYPE.value


@dataclass(eq=False, kw_only=True)
class ImageField(KnownField):
    """Single image. Raw value is a mapping with ``path``; normalized value is a URL."""

    FIELD_TYPE: ClassVar[FieldType] = FieldType.IMAGE

    @property
    def path(self) -> str | None:
        if isinstance(self.value, str):
            return self.value
        if isinstance(self.value, dict):
            path = self.value.get("path")
            return path if isinstance(path, str) and path else None
        return None


@dataclass(eq=False, kw_only=True)
class GalleryImage:
    """One flattened gallery element, re-tagged as an image."""

    value: str | None
    meta: dict[str, object] = field(default_factory=dict[str, object])
    type: str = FieldType.IMAGE.value


@dataclass(eq=False, kw_only=True)
class GalleryField(KnownField):
    """Ordered images. Normalization turns raw entries into ``GalleryImage``."""

    FIELD_TYPE: ClassVar[FieldType] = FieldType.GALLERY

    value: list[object] | None = None


@dataclass(eq=False, kw_only=True)
class AssetField(KnownField):
    FIELD_TYPE: ClassVar[FieldType] = FieldType.ASSET

    # attributes left over after the CMS bookkeeping keys were stripped
    attributes: dict[str, object] = field(default_factory=dict[str, object])


@dataclass(eq=False, kw_only=True)
class MarkdownField(KnownField):
    FIELD_TYPE: ClassVar[FieldType] = FieldType.MARKDOWN

    value: str | None = None


@dataclass(eq=False, kw_only=True)
class LayoutField(KnownField):
    """``layout`` and ``layout-grid`` share one class; ``layout_type`` keeps the tag."""

    FIELD_TYPE: ClassVar[FieldType] = FieldType.LAYOUT

    layout_type: FieldType = FieldType.LAYOUT

    @property
    def type_tag(self) -> str:
        return self.layout_type.value


@dataclass(eq=False, kw_only=True)
class CollectionLinkField(KnownField):
    """Link to one record (mapping) or to many records of one collection (list)."""

    FIELD_TYPE: ClassVar[FieldType] = FieldType.COLLECTION_LINK


@dataclass(eq=False, kw_only=True)
class ObjectField(KnownField):
    FIELD_TYPE: ClassVar[FieldType] = FieldType.OBJECT


@dataclass(eq=False, kw_only=True)
class RawField(Field):
    """Envelope with a tag we do not recognize. Passed through untouched."""

    tag: str

    @property
    def type_tag(self) -> str:
        return self.tag


type TypedField = (
    ImageField
    | GalleryField
    | AssetField
    | MarkdownField
    | LayoutField
    | CollectionLinkField
    | ObjectField
    | RawField
)
type FieldValue = Scalar | TypedField