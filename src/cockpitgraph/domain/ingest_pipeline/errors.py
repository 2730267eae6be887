"""Errors raised by the ingest pipeline."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from cockpitgraph.domain.model import ResourceCategory


class IngestError(RuntimeError):
    """Base class for pipeline failures."""


class StructuralInvariantError(IngestError):
    """Content violates a shape the graph cannot represent."""

    def __init__(self, message: str, *, field_name: str, item_id: str | None = None) -> None:
        super().__init__(f"{message} (concerned field: {field_name})")
        self.field_name = field_name
        self.item_id = item_id


class RegistryConsistencyError(IngestError):
    """A resource that normalization always registers is missing at link time."""

    def __init__(self, category: ResourceCategory, key: str) -> None:
        preview = key if len(key) <= 60 else f"{key[:57]}..."
        super().__init__(
            f"{category} resource {preview!r} is not materialized; "
            "linking ran before normalization and materialization completed"
        )
        self.category = category
        self.key = key


class UnsealedRegistryError(IngestError):
    """Sealing was attempted while some registered keys have no node id."""

    def __init__(self, missing: Sequence[tuple[ResourceCategory, str]]) -> None:
        sample = ", ".join(f"{category}:{key[:40]}" for category, key in missing[:5])
        super().__init__(f"{len(missing)} registry entries were never materialized ({sample})")
        self.missing = tuple(missing)
