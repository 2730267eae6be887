"""Application configuration helpers."""

from __future__ import annotations

from .cockpit import CockpitConfig, get_cockpit_config
from .env import env_list, env_mapping, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import (
    CacheConfig,
    RateLimit,
    ResilienceConfig,
    RetryPolicy,
    cache_from_environment,
    cockpit_resilience,
)

__all__ = [
    "CacheConfig",
    "CockpitConfig",
    "ConfigurationError",
    "MissingConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "cache_from_environment",
    "cockpit_resilience",
    "env_list",
    "env_mapping",
    "get_cockpit_config",
    "require_env_vars",
]
