"""Environment variable loaders for configuration."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

from .errors import ConfigurationError, MissingConfigurationError

if TYPE_CHECKING:
    from collections.abc import Sequence


def require_env_vars(names: Sequence[str]) -> dict[str, str]:
    """Return the given environment variables or raise if any are missing/blank."""

    missing: list[str] = []
    values: dict[str, str] = {}
    for name in names:
        value = os.getenv(name)
        if value is None or not value.strip():
            missing.append(name)
            continue
        values[name] = value.strip()

    if missing:
        missing_list = ", ".join(sorted(missing))
        raise MissingConfigurationError(f"Missing configuration for: {missing_list}")

    return values


def env_list(name: str) -> tuple[str, ...]:
    """Split a comma separated variable, dropping blanks. Unset means empty."""

    raw = os.getenv(name) or ""
    return tuple(part.strip() for part in raw.split(",") if part.strip())


def env_mapping(name: str) -> dict[str, str]:
    """Parse ``key=value`` pairs from a comma separated variable."""

    mapping: dict[str, str] = {}
    for entry in env_list(name):
        key, sep, value = entry.partition("=")
        if not sep or not key.strip() or not value.strip():
            raise ConfigurationError(f"Invalid entry {entry!r} in {name}; expected key=value")
        mapping[key.strip()] = value.strip()
    return mapping
