"""Tests for routekit.testing.client: scope building and response decoding."""

import pytest

from routekit.app import App
from routekit.context import Context
from routekit.testing import TestClient
from routekit.testing.client import build_scope


class TestBuildScope:
    def test_splits_query(self) -> None:
        scope = build_scope("get", "/search?q=a&b=1", {})
        assert scope["method"] == "GET"
        assert scope["path"] == "/search"
        assert scope["query_string"] == b"q=a&b=1"

    def test_host_and_lowercased_headers(self) -> None:
        scope = build_scope("POST", "/", {"X-Token": "abc"})
        assert scope["headers"] == [(b"host", b"testserver"), (b"x-token", b"abc")]
        assert scope["server"] == ("testserver", 80)


class TestClientRequests:
    @pytest.mark.asyncio
    async def test_content_headers_are_folded(self) -> None:
        app = App()
        app.get("/data")(lambda ctx: {"ok": True})
        async with TestClient(app) as client:
            response = await client.get("/data")
        assert response.content_type.startswith("application/json")
        assert all(name not in {"content-type", "content-length"} for name, _ in response.headers)

    @pytest.mark.asyncio
    async def test_ajax_keeps_caller_headers(self) -> None:
        app = App()

        @app.post("/echo")
        def echo(ctx: Context) -> str:
            return f"{ctx.request.ajax}:{ctx.request.headers.get('x-extra')}"

        async with TestClient(app) as client:
            response = await client.ajax("/echo", method="POST", headers={"X-Extra": "1"})
        assert response.text == "True:1"
