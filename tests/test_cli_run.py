"""Tests for routekit.cli._run: ``routekit run`` subcommand."""

import types
from unittest.mock import MagicMock, patch

import pytest

from routekit.app import App
from routekit.cli import main
from routekit.config import AppConfig


@pytest.fixture
def fake_app(monkeypatch: pytest.MonkeyPatch) -> App:
    """Register a fake module with a routekit App instance."""
    app = App(config=AppConfig(host="127.0.0.1", port=8000, debug=True))
    mod = types.ModuleType("_run_test_app")
    mod.app = app  # type: ignore[attr-defined]
    monkeypatch.setitem(__import__("sys").modules, "_run_test_app", mod)
    return app


class TestRouteKitRun:
    @patch("routekit.server.dev.run_dev_server")
    def test_default_host_and_port(self, mock_server: MagicMock, fake_app: App) -> None:
        """run uses app config defaults when --host/--port are omitted."""
        main(["run", "_run_test_app:app"])
        mock_server.assert_called_once()
        args = mock_server.call_args[0]
        assert args[0] is fake_app
        assert args[1] == "127.0.0.1"
        assert args[2] == 8000

    @patch("routekit.server.dev.run_dev_server")
    def test_host_and_port_override(self, mock_server: MagicMock, fake_app: App) -> None:
        main(["run", "_run_test_app:app", "--host", "0.0.0.0", "--port", "3000"])
        args = mock_server.call_args[0]
        assert args[1] == "0.0.0.0"
        assert args[2] == 3000

    @patch("routekit.server.dev.run_dev_server")
    def test_app_path_and_reload(self, mock_server: MagicMock, fake_app: App) -> None:
        """The import string is forwarded for reload; reload follows config.debug."""
        main(["run", "_run_test_app:app"])
        kwargs = mock_server.call_args[1]
        assert kwargs["app_path"] == "_run_test_app:app"
        assert kwargs["reload"] is True

    @patch("routekit.server.dev.run_dev_server")
    def test_no_reload_flag(self, mock_server: MagicMock, fake_app: App) -> None:
        main(["run", "_run_test_app:app", "--no-reload"])
        assert mock_server.call_args[1]["reload"] is False

    def test_invalid_import_string(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["run", "nonexistent_module_xyz:app"])
        assert exc_info.value.code == 1
        assert "Error:" in capsys.readouterr().err


class TestDevServer:
    def test_builds_pounce_server(self, monkeypatch: pytest.MonkeyPatch) -> None:
        created: dict[str, object] = {}

        class FakeConfig:
            def __init__(self, **kwargs: object) -> None:
                created["config"] = kwargs

        class FakeServer:
            def __init__(self, config: object, app: object, *, app_path: str | None = None) -> None:
                created["app"] = app
                created["app_path"] = app_path

            def run(self) -> None:
                created["ran"] = True

        config_mod = types.ModuleType("pounce.config")
        config_mod.ServerConfig = FakeConfig  # type: ignore[attr-defined]
        server_mod = types.ModuleType("pounce.server")
        server_mod.Server = FakeServer  # type: ignore[attr-defined]
        monkeypatch.setitem(__import__("sys").modules, "pounce", types.ModuleType("pounce"))
        monkeypatch.setitem(__import__("sys").modules, "pounce.config", config_mod)
        monkeypatch.setitem(__import__("sys").modules, "pounce.server", server_mod)

        from routekit.server.dev import run_dev_server

        app = App()
        run_dev_server(app, "0.0.0.0", 9000, reload=False, log_level="debug", app_path="x:app")
        assert created["config"] == {
            "host": "0.0.0.0",
            "port": 9000,
            "workers": 1,
            "reload": False,
            "log_level": "debug",
        }
        assert created["app"] is app
        assert created["app_path"] == "x:app"
        assert created["ran"] is True
