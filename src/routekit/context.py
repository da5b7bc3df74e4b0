"""Per-dispatch context handed to every handler and middleware.

One ``Context`` is created by ``Router.dispatch()`` for each matched
request and discarded when the response is built. It replaces implicit
instance state: a handler reads its arguments, the request and the
owning app from here, and writes its output here.

Output accumulates in a buffer until the dispatcher turns it into a
``Response``::

    def show(ctx, user_id):
        ctx.set_header("X-User", user_id)
        ctx.write(f"<h1>{user_id}</h1>")
"""

from __future__ import annotations

import json as json_module
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from routekit.http.request import Request
from routekit.http.response import JSON_CONTENT_TYPE, Response
from routekit.routing.binding import EMPTY_ARGS, BoundArgs

if TYPE_CHECKING:
    from routekit.app import App
    from routekit.routing.router import Router


@dataclass(slots=True)
class Context:
    """Mutable, request-scoped output buffer plus the dispatch inputs."""

    request: Request
    args: BoundArgs = EMPTY_ARGS
    router: Router | None = None
    app: App | None = None
    status: int = 200
    content_type: str = "text/html; charset=utf-8"
    headers: list[tuple[str, str]] = field(default_factory=list)
    _chunks: list[bytes] = field(default_factory=list, repr=False)

    def write(self, data: str | bytes) -> None:
        """Append *data* to the output buffer."""
        self._chunks.append(data.encode("utf-8") if isinstance(data, str) else data)

    def json(self, data: Any, status: int | None = None) -> None:
        """Write *data* as JSON and switch the content type."""
        self.content_type = JSON_CONTENT_TYPE
        if status is not None:
            self.status = status
        self.write(json_module.dumps(data))

    def set_header(self, name: str, value: str) -> None:
        self.headers.append((name, value))

    def clear(self) -> None:
        """Drop everything written so far."""
        self._chunks.clear()

    @property
    def output(self) -> bytes:
        return b"".join(self._chunks)

    def absorb(self, result: Any) -> None:
        """Fold a handler's return value into the buffer.

        ``None`` and booleans add nothing, strings and bytes are written,
        dicts and lists are written as JSON, and a ``Response`` replaces
        the output (status, content type, body) and adds its headers.
        """
        if result is None or isinstance(result, bool):
            return
        if isinstance(result, Response):
            self._chunks = [result.body_bytes]
            self.status = result.status
            self.content_type = result.content_type
            self.headers.extend(result.headers)
        elif isinstance(result, (str, bytes)):
            self.write(result)
        elif isinstance(result, (dict, list)):
            self.json(result)
        else:
            self.write(str(result))

    def to_response(self) -> Response:
        return Response(
            body=self.output,
            status=self.status,
            content_type=self.content_type,
            headers=tuple(self.headers),
        )


# -- Request context --

request_var: ContextVar[Request] = ContextVar("routekit_request")
"""The request being handled. Set by ``App.handle()`` around dispatch."""


def get_request() -> Request:
    """Return the current request.

    Raises ``LookupError`` if called outside a request context.
    """
    return request_var.get()
