from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
import pytest

from cockpitgraph.adapters.cockpit import CockpitAPIError, CockpitFetcher, InvalidTokenError
from cockpitgraph.domain.model import SourceKind
from cockpitgraph.domain.ports.fetching import ContentFetcher, FetchFailure, FetchSuccess
from tests.helpers.http import make_client_factory, routes

if TYPE_CHECKING:
    from cockpitgraph.config.cockpit import CockpitConfig
    from tests.helpers.http import Route

HEALTHY: dict[str, Route] = {"/api/system/healthcheck": (200, {"status": "ok"})}


def _fetcher(config: CockpitConfig, responses: dict[str, Route]) -> CockpitFetcher:
    handler = routes({**HEALTHY, **responses})
    return CockpitFetcher(config=config, client_factory=make_client_factory(handler))


def test_fetcher_satisfies_port(cockpit_config: CockpitConfig) -> None:
    assert isinstance(_fetcher(cockpit_config, {}), ContentFetcher)


def test_fetches_collections_and_trees_in_request_order(cockpit_config: CockpitConfig) -> None:
    fetcher = _fetcher(
        cockpit_config,
        {
            "/api/content/items/posts": (200, [{"_id": "p1", "title": "Hello", "_created": 5}]),
            "/api/content/tree/navigation": (
                200,
                [{"_id": "n1", "_children": [{"_id": "n2", "_pid": "n1"}]}],
            ),
        },
    )

    results = fetcher(collections=["posts"], trees=["navigation"])

    assert [(result.kind, result.name) for result in results] == [
        (SourceKind.COLLECTION, "posts"),
        (SourceKind.TREE, "navigation"),
    ]
    posts, navigation = results
    assert isinstance(posts, FetchSuccess)
    assert isinstance(navigation, FetchSuccess)
    assert posts.records == [{"_id": "p1", "title": "Hello", "_created": 5}]
    assert navigation.records[0]["_children"] == [{"_id": "n2", "_pid": "n1"}]


def test_failed_source_is_reported_not_raised(cockpit_config: CockpitConfig) -> None:
    fetcher = _fetcher(
        cockpit_config,
        {
            "/api/content/items/posts": (200, [{"_id": "p1"}]),
            "/api/content/items/authors": (500, {"error": "boom"}),
        },
    )

    results = fetcher(collections=["posts", "authors"])

    posts, authors = results
    assert posts.ok
    assert isinstance(authors, FetchFailure)
    assert authors.name == "authors"
    assert isinstance(authors.error, CockpitAPIError)
    assert "boom" in authors.reason


def test_transport_errors_become_failures(cockpit_config: CockpitConfig) -> None:
    fetcher = _fetcher(
        cockpit_config,
        {"/api/content/items/posts": httpx.ReadTimeout("too slow")},
    )

    (result,) = fetcher(collections=["posts"])

    assert isinstance(result, FetchFailure)
    assert isinstance(result.error, httpx.ReadTimeout)


def test_invalid_token_aborts_before_fetching(cockpit_config: CockpitConfig) -> None:
    seen: list[httpx.Request] = []
    handler = routes({"/api/system/healthcheck": (403, {"error": "forbidden"})}, seen=seen)
    fetcher = CockpitFetcher(config=cockpit_config, client_factory=make_client_factory(handler))

    with pytest.raises(InvalidTokenError):
        fetcher(collections=["posts"])

    assert [request.url.path for request in seen] == ["/api/system/healthcheck"]
