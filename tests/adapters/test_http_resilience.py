from __future__ import annotations

import asyncio

import httpx
import pytest

from cockpitgraph.adapters.http_resilience import ResilientClient, build_retry
from cockpitgraph.config.http_resilience import (
    CacheConfig,
    ResilienceConfig,
    RetryPolicy,
    cockpit_resilience,
)
from tests.helpers.http import make_client_factory, routes


def test_build_retry_uses_policy_total() -> None:
    retry = build_retry(RetryPolicy(total=2))

    assert retry.total == 2


def test_cockpit_resilience_defaults() -> None:
    config = cockpit_resilience("https://cms.example/", "secret-token")

    assert config.base_url == "https://cms.example/api"
    assert config.default_headers == {"api-key": "secret-token"}
    assert config.ratelimit is not None
    assert config.cache is None
    assert config.retry.allowed_methods == frozenset({"GET", "HEAD"})
    assert 500 not in config.retry.status_forcelist


def test_unknown_cache_backend_is_rejected() -> None:
    cache = CacheConfig(backend="redis")  # type: ignore[arg-type]
    config = ResilienceConfig(name="test", cache=cache)

    with pytest.raises(ValueError, match="Unsupported cache backend"):
        ResilientClient(config)


def test_requests_pass_through_rate_limiter() -> None:
    config = cockpit_resilience("https://cms.example", "secret-token")
    factory = make_client_factory(routes({"/api/ping": (200, {"pong": True})}))

    async def run() -> httpx.Response:
        async with factory(config) as client:
            return await client.get("/ping")

    response = asyncio.run(run())

    assert response.json() == {"pong": True}
