from __future__ import annotations

import logging
from dataclasses import replace
from functools import partial
from typing import TYPE_CHECKING

import pytest

from cockpitgraph.adapters.memory import InMemoryNodeRepository, InMemoryNodeUnitOfWork
from cockpitgraph.app import PartialFetchError, sync_cockpit_content
from cockpitgraph.domain.ids import node_id
from cockpitgraph.domain.ingest_pipeline import StructuralInvariantError
from cockpitgraph.domain.model import NodeType, SourceKind
from cockpitgraph.domain.ports.fetching import FetchFailure, FetchResult, FetchSuccess
from tests.helpers.content import image, link, make_record, markdown, typed

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from cockpitgraph.adapters.sqlalchemy.unit_of_work import SqlAlchemyNodeUnitOfWork
    from cockpitgraph.config.cockpit import CockpitConfig


class FakeFetcher:
    def __init__(self, results: list[FetchResult]) -> None:
        self.results = results
        self.requested: tuple[Sequence[str], Sequence[str]] | None = None

    def __call__(
        self,
        *,
        collections: Sequence[str] = (),
        trees: Sequence[str] = (),
    ) -> list[FetchResult]:
        self.requested = (collections, trees)
        return self.results


def _results() -> list[FetchResult]:
    return [
        FetchSuccess(
            name="posts",
            kind=SourceKind.COLLECTION,
            records=[
                make_record(
                    "p1",
                    title="Hello",
                    cover=image("/img/a.png"),
                    body=markdown("![inline](/img/b.png)"),
                    author=typed("collectionlink", link("authors", "a1")),
                )
            ],
        ),
        FetchSuccess(
            name="authors",
            kind=SourceKind.COLLECTION,
            records=[make_record("a1", name="Ada", avatar=image("/img/a.png"))],
        ),
        FetchSuccess(
            name="navigation",
            kind=SourceKind.TREE,
            records=[make_record("home", _children=[make_record("about")])],
        ),
    ]


def test_sync_stores_linked_graph(cockpit_config: CockpitConfig) -> None:
    repository = InMemoryNodeRepository()
    fetcher = FakeFetcher(_results())

    result = sync_cockpit_content(
        config=cockpit_config,
        fetcher=fetcher,
        unit_of_work_factory=partial(InMemoryNodeUnitOfWork, repository),
    )

    assert fetcher.requested == (("posts", "authors"), ("navigation",))
    assert result.sources == 3
    assert result.content_nodes == 4
    assert result.failures == []
    assert result.counters.nodes_materialized == 3

    post = repository.get(node_id("posts", "p1"))
    assert post is not None
    assert post.node_type == "BlogPost"
    fields = post.payload["fields"]
    assert isinstance(fields, dict)
    assert fields["title"] == "Hello"
    assert fields["author"] == {"type": "collectionlink", "reference": node_id("authors", "a1")}
    assert repository.get(node_id("authors", "a1")) is not None

    about = repository.get(node_id("navigation", "about"))
    assert about is not None
    assert about.parent_id == node_id("navigation", "home")
    images = list(repository.iter_nodes(node_type=NodeType.IMAGE))
    assert len(images) == 2


def test_sync_persists_through_sqlalchemy(
    cockpit_config: CockpitConfig,
    sqlite_unit_of_work: Callable[[], SqlAlchemyNodeUnitOfWork],
) -> None:
    sync_cockpit_content(
        config=cockpit_config,
        fetcher=FakeFetcher(_results()),
        unit_of_work_factory=sqlite_unit_of_work,
    )

    with sqlite_unit_of_work() as uow:
        nodes = list(uow.repositories.nodes.iter_nodes())
        markdown_nodes = list(uow.repositories.nodes.iter_nodes(node_type=NodeType.MARKDOWN))

    assert len(nodes) == 7
    assert [node.payload for node in markdown_nodes] == [{"content": "![inline](/img/b.png)"}]


def test_failed_sources_are_skipped(
    cockpit_config: CockpitConfig,
    caplog: pytest.LogCaptureFixture,
) -> None:
    results = [
        *_results()[:2],
        FetchFailure(name="navigation", kind=SourceKind.TREE, reason="HTTP 500"),
    ]
    repository = InMemoryNodeRepository()

    with caplog.at_level(logging.WARNING, logger="cockpitgraph.app"):
        result = sync_cockpit_content(
            config=cockpit_config,
            fetcher=FakeFetcher(results),
            unit_of_work_factory=partial(InMemoryNodeUnitOfWork, repository),
        )

    assert result.sources == 2
    assert [failure.name for failure in result.failures] == ["navigation"]
    assert "Skipping tree navigation" in caplog.text
    assert repository.get(node_id("navigation", "home")) is None


def test_strict_mode_aborts_on_failed_source(cockpit_config: CockpitConfig) -> None:
    repository = InMemoryNodeRepository()
    results: list[FetchResult] = [
        FetchFailure(name="posts", kind=SourceKind.COLLECTION, reason="HTTP 404"),
    ]

    with pytest.raises(PartialFetchError, match="collection posts") as exc:
        sync_cockpit_content(
            config=cockpit_config,
            fetcher=FakeFetcher(results),
            unit_of_work_factory=partial(InMemoryNodeUnitOfWork, repository),
            strict=True,
        )

    assert [failure.name for failure in exc.value.failures] == ["posts"]
    assert len(repository) == 0


def test_structural_errors_leave_store_untouched(cockpit_config: CockpitConfig) -> None:
    repository = InMemoryNodeRepository()
    links = [link("tags", "t1"), link("authors", "a1")]
    results: list[FetchResult] = [
        FetchSuccess(
            name="posts",
            kind=SourceKind.COLLECTION,
            records=[make_record("p1", cover=image("/a.png"), rel=typed("collectionlink", links))],
        ),
    ]

    with pytest.raises(StructuralInvariantError, match="rel"):
        sync_cockpit_content(
            config=cockpit_config,
            fetcher=FakeFetcher(results),
            unit_of_work_factory=partial(InMemoryNodeUnitOfWork, repository),
        )

    assert len(repository) == 0


def test_configured_locales_are_reported(
    cockpit_config: CockpitConfig,
    caplog: pytest.LogCaptureFixture,
) -> None:
    config = replace(cockpit_config, locales=("de",))

    with caplog.at_level(logging.WARNING, logger="cockpitgraph.app"):
        sync_cockpit_content(
            config=config,
            fetcher=FakeFetcher([]),
            unit_of_work_factory=partial(InMemoryNodeUnitOfWork, InMemoryNodeRepository()),
        )

    assert "multi-locale fetching is not implemented" in caplog.text
