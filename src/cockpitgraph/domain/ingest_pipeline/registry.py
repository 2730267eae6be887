"""Resource registries shared by the normalization and linking passes.

``ResourceRegistry`` is the writable side: normalization appends to it and
nothing ever removes from it. ``MaterializedRegistry`` is the read-only side the
linker consumes; the only way to get one is ``ResourceRegistry.seal`` with a
node id (or an explicit ``None`` placeholder) for every registered key.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

from cockpitgraph.domain.ids import content_hash
from cockpitgraph.domain.model import ResourceCategory

from .errors import RegistryConsistencyError, UnsealedRegistryError

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

    from cockpitgraph.domain.model import NodeId


@dataclass(slots=True)
class ResourceRegistry:
    """Dedup key -> raw value, one mapping per resource category."""

    images: dict[str, str] = field(default_factory=dict[str, str])
    assets: dict[str, str] = field(default_factory=dict[str, str])
    markdowns: dict[str, str] = field(default_factory=dict[str, str])
    layouts: dict[str, object] = field(default_factory=dict[str, object])

    def register_image(self, url: str) -> str:
        self.images.setdefault(url, url)
        return url

    def register_asset(self, url: str) -> str:
        self.assets.setdefault(url, url)
        return url

    def register_markdown(self, text: str) -> str:
        self.markdowns.setdefault(text, text)
        return text

    def register_layout(self, layout: object) -> str:
        key = content_hash(layout)
        self.layouts.setdefault(key, layout)
        return key

    def bucket(self, category: ResourceCategory) -> Mapping[str, object]:
        if category is ResourceCategory.IMAGE:
            return self.images
        if category is ResourceCategory.ASSET:
            return self.assets
        if category is ResourceCategory.MARKDOWN:
            return self.markdowns
        return self.layouts

    def entries(self) -> Iterator[tuple[ResourceCategory, str, object]]:
        for category in ResourceCategory:
            for key, value in self.bucket(category).items():
                yield category, key, value

    def sizes(self) -> dict[ResourceCategory, int]:
        return {category: len(self.bucket(category)) for category in ResourceCategory}

    def __len__(self) -> int:
        return sum(self.sizes().values())

    def seal(
        self,
        node_ids: Mapping[ResourceCategory, Mapping[str, NodeId | None]],
    ) -> MaterializedRegistry:
        """Freeze the registry against the ids assigned by materialization."""

        missing: list[tuple[ResourceCategory, str]] = []
        sealed: dict[ResourceCategory, Mapping[str, NodeId | None]] = {}
        for category in ResourceCategory:
            assigned = node_ids.get(category, {})
            resolved: dict[str, NodeId | None] = {}
            for key in self.bucket(category):
                if key not in assigned:
                    missing.append((category, key))
                    continue
                resolved[key] = assigned[key]
            sealed[category] = MappingProxyType(resolved)
        if missing:
            raise UnsealedRegistryError(missing)

        return MaterializedRegistry(
            images=sealed[ResourceCategory.IMAGE],
            assets=sealed[ResourceCategory.ASSET],
            markdowns=sealed[ResourceCategory.MARKDOWN],
            layouts=sealed[ResourceCategory.LAYOUT],
        )


@dataclass(frozen=True, slots=True)
class MaterializedRegistry:
    """Dedup key -> node id. ``None`` marks a resource the store could not create."""

    images: Mapping[str, NodeId | None]
    assets: Mapping[str, NodeId | None]
    markdowns: Mapping[str, NodeId | None]
    layouts: Mapping[str, NodeId | None]

    def bucket(self, category: ResourceCategory) -> Mapping[str, NodeId | None]:
        if category is ResourceCategory.IMAGE:
            return self.images
        if category is ResourceCategory.ASSET:
            return self.assets
        if category is ResourceCategory.MARKDOWN:
            return self.markdowns
        return self.layouts

    def lookup(self, category: ResourceCategory, key: str) -> NodeId | None:
        """Node id for ``key``; ``None`` when unknown or unmaterialized."""

        return self.bucket(category).get(key)

    def require(self, category: ResourceCategory, key: str) -> NodeId:
        """Node id for ``key``; raise if normalization should have registered it."""

        node = self.lookup(category, key)
        if node is None:
            raise RegistryConsistencyError(category, key)
        return node
