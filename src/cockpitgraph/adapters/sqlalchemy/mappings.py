"""SQLAlchemy table metadata for stored graph nodes."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from sqlalchemy import JSON, Column, Index, MetaData, String, Table

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

log = getLogger(__name__)

metadata = MetaData()

content_node_table = Table(
    "content_node",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("node_type", String, nullable=False),
    Column("parent_id", String(36), nullable=True),
    Column("payload", JSON, nullable=False),
    Index("ix_content_node_type", "node_type"),
)


def create_all_tables(engine: Engine) -> None:
    log.info("Creating all tables")
    metadata.create_all(engine)
