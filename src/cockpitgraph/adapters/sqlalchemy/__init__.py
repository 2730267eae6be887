"""SQLAlchemy adapter package for cockpitgraph."""

from __future__ import annotations

from .mappings import content_node_table, create_all_tables, metadata
from .repositories import SqlAlchemyNodeRepository
from .unit_of_work import SqlAlchemyNodeUnitOfWork, StartupError, is_started, shutdown, startup

__all__ = [
    "SqlAlchemyNodeRepository",
    "SqlAlchemyNodeUnitOfWork",
    "StartupError",
    "content_node_table",
    "create_all_tables",
    "is_started",
    "metadata",
    "shutdown",
    "startup",
]
