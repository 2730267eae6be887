"""Content items and the sources (forests) they belong to."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .enums import ANY_LOCALE, SourceKind
from .fields import Field

if TYPE_CHECKING:
    from collections.abc import Iterator
    from datetime import datetime

    from .fields import FieldValue, TypedField


@dataclass(eq=False, kw_only=True)
class ContentItem:
    """One CMS record. Tree records may own ``children``; collection records never do."""

    id: str
    source: str
    kind: SourceKind
    created_at: datetime | None = None
    modified_at: datetime | None = None
    # opaque user ids, not resolved to user nodes
    created_by: str | None = None
    modified_by: str | None = None
    last_touched_by: str | None = None
    parent_id: str | None = None
    depth: int | None = None
    locale: str = ANY_LOCALE
    fields: dict[str, FieldValue] = field(default_factory=dict[str, "FieldValue"])
    children: list[ContentItem] | None = None

    def typed_fields(self) -> Iterator[tuple[str, TypedField]]:
        for name, value in self.fields.items():
            if isinstance(value, Field):
                yield name, value  # pyright: ignore[reportReturnType]

    def walk(self) -> Iterator[ContentItem]:
        """Yield this item and all descendants, depth-first, children in order."""

        stack: list[ContentItem] = [self]
        while stack:
            item = stack.pop()
            yield item
            if item.children:
                stack.extend(reversed(item.children))


@dataclass(eq=False, kw_only=True)
class ContentSource:
    """All items fetched for one collection or tree name."""

    name: str
    kind: SourceKind
    items: list[ContentItem] = field(default_factory=list[ContentItem])
    published_name: str | None = None

    @property
    def node_type_name(self) -> str:
        return self.published_name or self.name

    def walk(self) -> Iterator[ContentItem]:
        for item in self.items:
            yield from item.walk()
