from __future__ import annotations

import pytest

from cockpitgraph import main as main_module
from cockpitgraph.adapters.memory import InMemoryNodeUnitOfWork
from cockpitgraph.app import SyncContentResult
from cockpitgraph.config.errors import MissingConfigurationError


@pytest.fixture(autouse=True)
def _no_dotenv(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(main_module, "load_dotenv", lambda: None)


def test_main_cli_defaults(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    captured: dict[str, object] = {}

    def fake_sync(**kwargs: object) -> SyncContentResult:
        captured.update(kwargs)
        return SyncContentResult(sources=2, content_nodes=5)

    monkeypatch.setattr(main_module, "sync_cockpit_content", fake_sync)

    main_module.main([])

    assert captured["strict"] is False
    assert captured["unit_of_work_factory"] is None
    assert "Stored 5 content nodes" in capsys.readouterr().out


def test_main_cli_with_flags(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, object] = {}

    def fake_sync(**kwargs: object) -> SyncContentResult:
        captured.update(kwargs)
        return SyncContentResult()

    monkeypatch.setattr(main_module, "sync_cockpit_content", fake_sync)

    main_module.main(["--strict", "--in-memory", "--verbose"])

    assert captured["strict"] is True
    factory = captured["unit_of_work_factory"]
    assert callable(factory)
    assert isinstance(factory(), InMemoryNodeUnitOfWork)


def test_main_cli_configuration_error(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    def fake_sync(**_: object) -> SyncContentResult:
        raise MissingConfigurationError("Missing configuration for: COCKPIT_TOKEN")

    monkeypatch.setattr(main_module, "sync_cockpit_content", fake_sync)

    with pytest.raises(SystemExit) as exc:
        main_module.main([])

    assert exc.value.code == 2
    assert "COCKPIT_TOKEN" in capsys.readouterr().err


def test_main_cli_runtime_error(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_sync(**_: object) -> SyncContentResult:
        raise RuntimeError("boom")

    monkeypatch.setattr(main_module, "sync_cockpit_content", fake_sync)

    with pytest.raises(SystemExit) as exc:
        main_module.main([])

    assert exc.value.code == 1
