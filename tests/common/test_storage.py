from __future__ import annotations

import os
from pathlib import Path  # noqa: TC003

import pytest

from cockpitgraph.common import storage


def test_get_data_dir_prefers_explicit_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    custom = tmp_path / "custom-data"
    monkeypatch.setenv("COCKPIT_DATA_DIR", str(custom))
    result = storage.get_data_dir()

    assert result == custom.resolve()


@pytest.mark.skipif(os.name == "nt", reason="XDG lookup applies to POSIX only")
def test_get_data_dir_falls_back_to_xdg(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.delenv("COCKPIT_DATA_DIR", raising=False)
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "xdg"))

    assert storage.get_data_dir() == (tmp_path / "xdg" / storage.APP_DIR_NAME).resolve()


def test_get_database_uri_uses_env_override(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URI", "sqlite:///override.db")

    uri = storage.get_database_uri()

    assert uri == "sqlite:///override.db"


def test_get_database_uri_creates_data_dir(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.delenv("DATABASE_URI", raising=False)
    monkeypatch.setenv("COCKPIT_DATA_DIR", str(tmp_path / "data-dir"))

    uri = storage.get_database_uri()

    expected_path = (tmp_path / "data-dir" / storage.DEFAULT_DB_FILENAME).resolve()
    assert uri == f"sqlite+pysqlite:///{expected_path}"
    assert expected_path.parent.exists()


def test_http_cache_path_lives_in_data_dir(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("COCKPIT_DATA_DIR", str(tmp_path))

    assert storage.get_http_cache_path() == tmp_path.resolve() / storage.DEFAULT_HTTP_CACHE_FILENAME
