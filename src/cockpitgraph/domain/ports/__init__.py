"""Ports (protocols) between the domain and its adapters."""

from __future__ import annotations

from .fetching import ContentFetcher, FetchFailure, FetchResult, FetchSuccess
from .nodes import NodeMaterializer, NodeRepository, ObjectNodeFactory
from .unit_of_work import NodeRepositories, NodeUnitOfWork, RepositoryCollection, UnitOfWork

__all__ = [
    "ContentFetcher",
    "FetchFailure",
    "FetchResult",
    "FetchSuccess",
    "NodeMaterializer",
    "NodeRepositories",
    "NodeRepository",
    "NodeUnitOfWork",
    "ObjectNodeFactory",
    "RepositoryCollection",
    "UnitOfWork",
]
