"""Tests for routekit.errors."""

import pytest

from routekit.errors import (
    CallbackNotFound,
    ConfigurationError,
    ControllerNotFound,
    HTTPError,
    NotFound,
    RouteKitError,
    RouteNotFound,
)


class TestHierarchy:
    @pytest.mark.parametrize("cls", [ConfigurationError, CallbackNotFound, RouteNotFound, HTTPError])
    def test_base(self, cls: type) -> None:
        assert issubclass(cls, RouteKitError)

    def test_controller_not_found_is_configuration_error(self) -> None:
        assert issubclass(ControllerNotFound, ConfigurationError)

    def test_route_not_found_is_lookup_error(self) -> None:
        assert issubclass(RouteNotFound, LookupError)


class TestMessages:
    def test_controller_not_found(self) -> None:
        exc = ControllerNotFound("Users")
        assert exc.controller == "Users"
        assert "'Users'" in str(exc)

    def test_callback_not_found_detail(self) -> None:
        exc = CallbackNotFound("Users@show", "class 'Users' not found")
        assert exc.reference == "Users@show"
        assert str(exc) == "Callable not found: 'Users@show' (class 'Users' not found)"

    def test_route_not_found(self) -> None:
        assert RouteNotFound("home").name == "home"


class TestHTTPError:
    def test_str(self) -> None:
        assert str(HTTPError(status=403, detail="Forbidden")) == "403: Forbidden"
        assert str(HTTPError(status=500)) == "500"

    def test_not_found(self) -> None:
        exc = NotFound()
        assert exc.status == 404
        assert exc.detail == "Not Found"
