"""Tests for routekit.routing.handlers: handler reference resolution."""

import collections
import os.path
import types

import pytest

from routekit.errors import CallbackNotFound
from routekit.routing.handlers import find_controller, load_object, resolve_handler


class Greeter:
    def index(self, ctx: object) -> str:
        return "index"

    def hello(self, ctx: object, name: str) -> str:
        return f"hello {name}"


@pytest.fixture
def _fake_controllers(monkeypatch: pytest.MonkeyPatch) -> None:
    """Register a fake controller module on sys.modules."""
    mod = types.ModuleType("_fake_routekit_controllers")
    mod.Greeter = Greeter  # type: ignore[attr-defined]
    monkeypatch.setitem(__import__("sys").modules, "_fake_routekit_controllers", mod)


class TestLoadObject:
    def test_colon_form(self) -> None:
        assert load_object("os.path:join") is os.path.join

    def test_dotted_form(self) -> None:
        assert load_object("os.path.join") is os.path.join

    def test_not_a_path(self) -> None:
        with pytest.raises(ImportError):
            load_object("join")


class TestFindController:
    def test_class_passes_through(self) -> None:
        assert find_controller(Greeter, {}) is Greeter

    def test_registry(self) -> None:
        assert find_controller("Greeter", {"Greeter": Greeter}) is Greeter

    def test_namespace(self) -> None:
        assert find_controller("OrderedDict", {}, namespace="collections") is collections.OrderedDict

    def test_missing(self) -> None:
        assert find_controller("Nope", {}) is None

    def test_non_class_rejected(self) -> None:
        assert find_controller("os.path.join", {}) is None


class TestResolveHandler:
    def test_callable(self) -> None:
        def handler(ctx: object) -> str:
            return "ok"

        assert resolve_handler(handler) is handler

    def test_class_method_pair_instantiates(self) -> None:
        method = resolve_handler((Greeter, "hello"))
        assert method(None, "bob") == "hello bob"

    def test_instance_method_pair(self) -> None:
        greeter = Greeter()
        assert resolve_handler((greeter, "hello")).__self__ is greeter

    def test_at_string_from_registry(self) -> None:
        method = resolve_handler("Greeter@hello", {"Greeter": Greeter})
        assert method(None, "ann") == "hello ann"

    def test_at_string_defaults_to_index(self) -> None:
        assert resolve_handler("Greeter@", {"Greeter": Greeter})(None) == "index"
        assert resolve_handler("Greeter@index", {"Greeter": Greeter})(None) == "index"

    @pytest.mark.usefixtures("_fake_controllers")
    def test_at_string_with_namespace(self) -> None:
        method = resolve_handler("Greeter@hello", namespace="_fake_routekit_controllers")
        assert method(None, "zed") == "hello zed"

    @pytest.mark.usefixtures("_fake_controllers")
    def test_at_string_dotted_class(self) -> None:
        assert resolve_handler("_fake_routekit_controllers.Greeter@index")(None) == "index"

    def test_dotted_function(self) -> None:
        assert resolve_handler("os.path.join") is os.path.join

    def test_unknown_class(self) -> None:
        with pytest.raises(CallbackNotFound, match="Missing"):
            resolve_handler("Missing@show")

    def test_unknown_method(self) -> None:
        with pytest.raises(CallbackNotFound, match="no method 'nope'"):
            resolve_handler((Greeter, "nope"))

    def test_unknown_module(self) -> None:
        with pytest.raises(CallbackNotFound):
            resolve_handler("nonexistent_module_xyz.handler")

    def test_not_callable(self) -> None:
        with pytest.raises(CallbackNotFound):
            resolve_handler(42)  # type: ignore[arg-type]
