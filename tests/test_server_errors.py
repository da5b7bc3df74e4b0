"""Tests for routekit.server.errors: mapping exceptions to responses."""

from routekit.errors import HTTPError, NotFound
from routekit.http.request import Request
from routekit.http.response import Response
from routekit.server.errors import (
    call_error_handler,
    find_error_handler,
    handle_http_error,
    handle_internal_error,
)

_REQUEST = Request.build("GET", "/x")


class TestFindErrorHandler:
    def test_exact_type_first(self) -> None:
        handlers = {NotFound: "exact", HTTPError: "base", 404: "status"}
        assert find_error_handler(handlers, NotFound(), 404) == "exact"

    def test_base_class(self) -> None:
        handlers = {HTTPError: "base", 404: "status"}
        assert find_error_handler(handlers, NotFound(), 404) == "base"

    def test_status_fallback(self) -> None:
        assert find_error_handler({404: "status"}, NotFound(), 404) == "status"

    def test_none(self) -> None:
        assert find_error_handler({}, NotFound(), 404) is None


class TestCallErrorHandler:
    def test_zero_args(self) -> None:
        assert call_error_handler(lambda: "oops", _REQUEST, ValueError()).text == "oops"

    def test_request_arg(self) -> None:
        assert call_error_handler(lambda r: r.path, _REQUEST, ValueError()).text == "/x/"

    def test_request_and_exception(self) -> None:
        response = call_error_handler(lambda r, e: str(e), _REQUEST, ValueError("bad"))
        assert response.text == "bad"

    def test_response_passthrough(self) -> None:
        original = Response("x", status=418)
        assert call_error_handler(lambda: original, _REQUEST, ValueError()) is original

    def test_none_is_empty(self) -> None:
        assert call_error_handler(lambda: None, _REQUEST, ValueError()).text == ""


class TestHandleHTTPError:
    def test_default_body_and_headers(self) -> None:
        exc = HTTPError(status=401, detail="Login required", headers=(("WWW-Authenticate", "Basic"),))
        response = handle_http_error(exc, _REQUEST, {}, debug=False)
        assert response.status == 401
        assert response.text == "Login required"
        assert response.header("www-authenticate") == "Basic"

    def test_no_detail(self) -> None:
        assert handle_http_error(HTTPError(status=418), _REQUEST, {}, debug=False).text == "Error 418"

    def test_debug_prefixes_status(self) -> None:
        response = handle_http_error(NotFound(), _REQUEST, {}, debug=True)
        assert response.text == "404: Not Found"

    def test_handler_status_kept(self) -> None:
        handlers = {404: lambda: Response("teapot", status=418)}
        assert handle_http_error(NotFound(), _REQUEST, handlers, debug=False).status == 418


class TestHandleInternalError:
    def test_hidden_without_debug(self) -> None:
        response = handle_internal_error(RuntimeError("secret"), _REQUEST, {}, debug=False)
        assert response.status == 500
        assert "secret" not in response.text

    def test_handler_forced_to_500(self) -> None:
        handlers = {500: lambda: "custom"}
        response = handle_internal_error(RuntimeError(), _REQUEST, handlers, debug=False)
        assert response.status == 500
        assert response.text == "custom"
