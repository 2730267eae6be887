from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine  # noqa: TC002
from sqlalchemy.orm import Session, sessionmaker

from cockpitgraph.adapters.memory import InMemoryNodeRepository
from cockpitgraph.adapters.sqlalchemy.mappings import create_all_tables
from cockpitgraph.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyNodeUnitOfWork,
    shutdown,
    startup,
)
from cockpitgraph.config.cockpit import CockpitConfig
from cockpitgraph.domain.ingest_pipeline import NodeStore

os.environ.setdefault("DATABASE_URI", "sqlite+pysqlite:///:memory:")

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator
    from pathlib import Path

BASE_URL = "https://cms.example"


@pytest.fixture
def base_url() -> str:
    return BASE_URL


@pytest.fixture
def cockpit_config() -> CockpitConfig:
    return CockpitConfig(
        base_url=BASE_URL,
        token="secret-token",
        collections=("posts", "authors"),
        trees=("navigation",),
        aliases={"posts": "BlogPost"},
    )


@pytest.fixture
def node_repository() -> InMemoryNodeRepository:
    return InMemoryNodeRepository()


@pytest.fixture
def node_store(node_repository: InMemoryNodeRepository) -> NodeStore:
    return NodeStore(node_repository)


@pytest.fixture
def sqlite_engine(tmp_path: Path) -> Iterator[Engine]:
    engine = create_engine(f"sqlite+pysqlite:///{tmp_path / 'nodes.db'}", future=True)
    create_all_tables(engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def sqlite_session(sqlite_engine: Engine) -> Iterator[Session]:
    session_factory = sessionmaker(bind=sqlite_engine, future=True)
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def sqlite_unit_of_work(
    sqlite_engine: Engine,
) -> Iterator[Callable[[], SqlAlchemyNodeUnitOfWork]]:
    startup(engine=sqlite_engine, force=True)

    def factory() -> SqlAlchemyNodeUnitOfWork:
        return SqlAlchemyNodeUnitOfWork()

    try:
        yield factory
    finally:
        shutdown()
