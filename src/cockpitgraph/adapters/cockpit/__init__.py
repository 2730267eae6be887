"""Public interface for the Cockpit adapter."""

from __future__ import annotations

from .client import (
    CockpitAPIError,
    CockpitClient,
    CockpitConfigurationError,
    ConnectivityError,
    InvalidTokenError,
)
from .fetcher import CockpitFetcher
from .schema import CockpitRecord, parse_records

__all__ = [
    "CockpitAPIError",
    "CockpitClient",
    "CockpitConfigurationError",
    "CockpitFetcher",
    "CockpitRecord",
    "ConnectivityError",
    "InvalidTokenError",
    "parse_records",
]
