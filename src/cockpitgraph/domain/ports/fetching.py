"""Ports for fetching raw CMS content."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from cockpitgraph.domain.model import SourceKind


@dataclass(slots=True, frozen=True)
class FetchSuccess:
    """Raw records for one collection or tree."""

    name: str
    kind: SourceKind
    records: Sequence[Mapping[str, object]]

    @property
    def ok(self) -> bool:
        return True


@dataclass(slots=True, frozen=True)
class FetchFailure:
    name: str
    kind: SourceKind
    reason: str
    error: BaseException | None = field(default=None, compare=False)

    @property
    def ok(self) -> bool:
        return False


type FetchResult = FetchSuccess | FetchFailure


@runtime_checkable
class ContentFetcher(Protocol):
    """Callable port returning one result per requested name, never raising for one name."""

    def __call__(
        self,
        *,
        collections: Sequence[str] = (),
        trees: Sequence[str] = (),
    ) -> list[FetchResult]: ...


__all__ = ["ContentFetcher", "FetchFailure", "FetchResult", "FetchSuccess"]
