"""Turn exceptions raised during dispatch into responses.

Handlers registered with ``App.error`` are looked up by exception type
(walking the MRO) and then by status code. Without one, a plain-text
body is produced; ``debug`` adds the status prefix or the traceback.
"""

import inspect
import logging
import traceback
from collections.abc import Callable
from typing import Any, TypeAlias

from routekit.errors import HTTPError
from routekit.http.request import Request
from routekit.http.response import PLAIN_CONTENT_TYPE, Response

logger = logging.getLogger("routekit.server")

ErrorHandlers: TypeAlias = dict[int | type[BaseException], Callable[..., Any]]


def _as_response(result: Any) -> Response:
    if isinstance(result, Response):
        return result
    if isinstance(result, (dict, list)):
        return Response.json(result)
    return Response("" if result is None else str(result))


def call_error_handler(handler: Callable[..., Any], request: Request, exc: Exception) -> Response:
    """Call *handler* with as many of ``(request, exc)`` as it accepts."""
    arity = len(inspect.signature(handler).parameters)
    return _as_response(handler(*(request, exc)[: min(arity, 2)]))


def find_error_handler(handlers: ErrorHandlers, exc: Exception, status: int) -> Callable[..., Any] | None:
    for cls in type(exc).__mro__:
        if cls in handlers:
            return handlers[cls]
    return handlers.get(status)


def handle_http_error(exc: HTTPError, request: Request, handlers: ErrorHandlers, debug: bool) -> Response:
    """Response for an HTTPError raised by a handler or middleware."""
    logger.debug("%d %s %s: %s", exc.status, request.method, request.path, exc.detail)

    handler = find_error_handler(handlers, exc, exc.status)
    if handler is not None:
        response = call_error_handler(handler, request, exc)
        # A handler that left the status at 200 inherits the error's
        return response.with_status(exc.status) if response.status == 200 else response

    if not exc.detail:
        body = f"Error {exc.status}"
    elif debug:
        body = f"{exc.status}: {exc.detail}"
    else:
        body = exc.detail
    return Response(body, exc.status, PLAIN_CONTENT_TYPE, tuple(exc.headers))


def handle_internal_error(exc: Exception, request: Request, handlers: ErrorHandlers, debug: bool) -> Response:
    """Response for any other exception; always a 500."""
    logger.exception("500 %s %s", request.method, request.path)

    handler = find_error_handler(handlers, exc, 500)
    if handler is not None:
        return call_error_handler(handler, request, exc).with_status(500)
    body = "".join(traceback.format_exception(exc)) if debug else "Internal Server Error"
    return Response.plain(body, 500)
