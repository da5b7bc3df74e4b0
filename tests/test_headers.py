"""Tests for routekit.http.headers."""

from routekit.http.headers import Headers


class TestHeaders:
    def test_case_insensitive(self) -> None:
        headers = Headers([(b"Content-Type", b"text/html")])
        assert headers["content-type"] == "text/html"
        assert headers["CONTENT-TYPE"] == "text/html"
        assert "Content-Type" in headers

    def test_first_value_wins(self) -> None:
        headers = Headers([(b"accept", b"a"), (b"accept", b"b")])
        assert headers["accept"] == "a"
        assert headers.get_list("Accept") == ["a", "b"]

    def test_missing(self) -> None:
        headers = Headers()
        assert headers.get("x-missing") is None
        assert headers.get_list("x-missing") == []
        assert len(headers) == 0

    def test_from_dict(self) -> None:
        headers = Headers.from_dict({"X-Requested-With": "XMLHttpRequest"})
        assert headers["x-requested-with"] == "XMLHttpRequest"
        assert list(headers) == ["x-requested-with"]

    def test_non_string_key(self) -> None:
        assert 42 not in Headers()
