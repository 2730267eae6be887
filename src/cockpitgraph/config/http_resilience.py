"""HTTP resilience settings and the profile used against the Cockpit API.

Cockpit answers every content read with a plain GET, so only idempotent methods
are retried, the cache is opt-in and the request rate stays well under what a
small self-hosted instance tolerates.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Final, Literal

import httpx

from .errors import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Mapping

type CacheBackend = Literal["sqlite", "memory"]

COCKPIT_API_PREFIX: Final[str] = "/api"
COCKPIT_TOKEN_HEADER: Final[str] = "api-key"
COCKPIT_TIMEOUT_SECONDS: Final[float] = 30.0
COCKPIT_RETRY_STATUSES: Final[frozenset[int]] = frozenset({429, 502, 503, 504})
CACHE_SETTINGS: Final[tuple[str, ...]] = ("off", "memory", "sqlite")


@dataclass(slots=True, frozen=True)
class RetryPolicy:
    total: int = 3
    backoff_factor: float = 0.5
    max_backoff_wait: float = 30.0
    respect_retry_after_header: bool = True
    allowed_methods: frozenset[str] = field(default_factory=lambda: frozenset({"GET", "HEAD"}))
    status_forcelist: frozenset[int] = COCKPIT_RETRY_STATUSES
    retry_on_exceptions: tuple[type[httpx.HTTPError], ...] = (
        httpx.TimeoutException,
        httpx.NetworkError,
    )
    backoff_jitter: float = 1.0


@dataclass(slots=True, frozen=True)
class RateLimit:
    max_calls: int
    per_seconds: float


@dataclass(slots=True, frozen=True)
class CacheConfig:
    backend: CacheBackend = "memory"
    # overrides the data directory default for the sqlite backend
    sqlite_path: str | None = None
    ttl_seconds: float | None = None


@dataclass(slots=True, frozen=True)
class ResilienceConfig:
    name: str
    base_url: str | None = None
    timeout_seconds: float = COCKPIT_TIMEOUT_SECONDS
    retry: RetryPolicy = field(default_factory=RetryPolicy)
    ratelimit: RateLimit | None = None
    cache: CacheConfig | None = None
    default_headers: Mapping[str, str] | None = None


def cockpit_resilience(
    base_url: str,
    token: str,
    *,
    cache: CacheConfig | None = None,
) -> ResilienceConfig:
    """Client settings for one Cockpit instance, authenticated with its API key."""

    return ResilienceConfig(
        name="cockpit",
        base_url=f"{base_url.rstrip('/')}{COCKPIT_API_PREFIX}",
        ratelimit=RateLimit(max_calls=10, per_seconds=1.0),
        cache=cache,
        default_headers={COCKPIT_TOKEN_HEADER: token},
    )


def cache_from_environment() -> CacheConfig | None:
    """Read ``COCKPIT_HTTP_CACHE`` (off, memory or sqlite) and ``COCKPIT_HTTP_CACHE_TTL``."""

    backend = (os.getenv("COCKPIT_HTTP_CACHE") or "off").strip().lower()
    if backend not in CACHE_SETTINGS:
        raise ConfigurationError(
            f"Invalid COCKPIT_HTTP_CACHE value {backend!r}; expected off, memory or sqlite"
        )
    if backend == "off":
        return None

    raw_ttl = (os.getenv("COCKPIT_HTTP_CACHE_TTL") or "").strip()
    try:
        ttl = float(raw_ttl) if raw_ttl else None
    except ValueError as exc:
        raise ConfigurationError(
            f"Invalid COCKPIT_HTTP_CACHE_TTL value {raw_ttl!r}; expected seconds"
        ) from exc
    return CacheConfig(backend="sqlite" if backend == "sqlite" else "memory", ttl_seconds=ttl)
