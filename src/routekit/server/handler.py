"""ASGI handler: translates ASGI scope/messages to routekit types.

The only component that touches raw ASGI directly. Reads the body,
builds a Request, dispatches it through the router and sends the
Response back through ASGI send().
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from routekit._internal.asgi import Receive, Scope, Send
from routekit.errors import HTTPError
from routekit.http.request import Request
from routekit.server.errors import handle_http_error, handle_internal_error
from routekit.server.sender import send_response

if TYPE_CHECKING:
    from routekit.app import App


async def read_body(receive: Receive) -> bytes:
    """Consume every ``http.request`` message and join their bodies."""
    chunks: list[bytes] = []
    while True:
        message = await receive()
        if message["type"] == "http.disconnect":
            break
        body = message.get("body", b"")
        if body:
            chunks.append(body)
        if not message.get("more_body", False):
            break
    return b"".join(chunks)


async def handle_request(scope: Scope, receive: Receive, send: Send, *, app: App) -> None:
    """Process a single HTTP request through the full pipeline."""
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope, await read_body(receive))

    try:
        response = app.handle(request)
    except HTTPError as exc:
        response = handle_http_error(exc, request, app.error_handlers, app.config.debug)
    except Exception as exc:
        response = handle_internal_error(exc, request, app.error_handlers, app.config.debug)

    await send_response(response, send, head=request.method == "HEAD")
