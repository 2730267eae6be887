"""Cockpit CMS configuration values."""

from __future__ import annotations

from dataclasses import dataclass, field

from .env import env_list, env_mapping, require_env_vars
from .errors import ConfigurationError
from .http_resilience import ResilienceConfig, cache_from_environment, cockpit_resilience


@dataclass(frozen=True, slots=True)
class CockpitConfig:
    """Connection and content selection settings for one Cockpit instance."""

    base_url: str
    token: str
    collections: tuple[str, ...] = ()
    trees: tuple[str, ...] = ()
    aliases: dict[str, str] = field(default_factory=dict[str, str])
    locales: tuple[str, ...] = ()
    resilience: ResilienceConfig | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))
        if self.resilience is None:
            object.__setattr__(
                self, "resilience", cockpit_resilience(self.base_url, self.token)
            )


def get_cockpit_config() -> CockpitConfig:
    values = require_env_vars(("COCKPIT_BASE_URL", "COCKPIT_TOKEN"))
    base_url = values["COCKPIT_BASE_URL"]
    token = values["COCKPIT_TOKEN"]
    collections = env_list("COCKPIT_COLLECTIONS")
    trees = env_list("COCKPIT_TREES")
    if not collections and not trees:
        raise ConfigurationError("Configure at least one of COCKPIT_COLLECTIONS or COCKPIT_TREES")

    return CockpitConfig(
        base_url=base_url,
        token=token,
        collections=collections,
        trees=trees,
        aliases=env_mapping("COCKPIT_ALIASES"),
        locales=env_list("COCKPIT_LOCALES"),
        resilience=cockpit_resilience(base_url, token, cache=cache_from_environment()),
    )
