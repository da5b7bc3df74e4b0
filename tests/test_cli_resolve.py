"""Tests for routekit.cli._resolve: App import resolution."""

import types

import pytest

from routekit.app import App
from routekit.cli._resolve import resolve_app


@pytest.fixture
def _fake_app_module(monkeypatch: pytest.MonkeyPatch) -> None:
    """Register a fake module with a routekit App on sys.modules."""
    mod = types.ModuleType("_fake_routekit_app")
    mod.app = App()  # type: ignore[attr-defined]
    mod.custom = App()  # type: ignore[attr-defined]
    mod.not_an_app = "just a string"  # type: ignore[attr-defined]
    mod.create_app = App  # type: ignore[attr-defined]
    mod.bad_factory = lambda: 1 / 0  # type: ignore[attr-defined]
    monkeypatch.setitem(__import__("sys").modules, "_fake_routekit_app", mod)


@pytest.mark.usefixtures("_fake_app_module")
class TestResolveApp:
    def test_explicit_attribute(self) -> None:
        assert isinstance(resolve_app("_fake_routekit_app:app"), App)

    def test_custom_attribute(self) -> None:
        assert isinstance(resolve_app("_fake_routekit_app:custom"), App)

    def test_default_attribute(self) -> None:
        """Omitting :attr defaults to 'app'."""
        assert isinstance(resolve_app("_fake_routekit_app"), App)

    def test_factory(self) -> None:
        assert isinstance(resolve_app("_fake_routekit_app:create_app"), App)

    def test_failing_factory(self) -> None:
        with pytest.raises(TypeError, match="raised an error"):
            resolve_app("_fake_routekit_app:bad_factory")

    def test_missing_module(self) -> None:
        with pytest.raises(ModuleNotFoundError):
            resolve_app("nonexistent_module_xyz:app")

    def test_missing_attribute(self) -> None:
        with pytest.raises(AttributeError):
            resolve_app("_fake_routekit_app:does_not_exist")

    def test_wrong_type(self) -> None:
        with pytest.raises(TypeError, match=r"not a routekit\.App instance"):
            resolve_app("_fake_routekit_app:not_an_app")
