"""Response emission: one ``Response`` becomes two ASGI messages.

The buffered body is always sent whole, with an exact ``content-length``.
"""

from routekit._internal.asgi import Send
from routekit.http.response import Response

# 1xx, 204 and 304 never carry a body
_BODYLESS = frozenset({204, 304})


def _encode(name: str, value: str) -> tuple[bytes, bytes]:
    return name.lower().encode("latin-1"), value.encode("latin-1")


def response_body(response: Response, *, head: bool = False) -> bytes:
    """Bytes to put on the wire for *response*.

    Empty for bodyless statuses and for HEAD requests.
    """
    if head or response.status < 200 or response.status in _BODYLESS:
        return b""
    return response.body_bytes


async def send_response(response: Response, send: Send, *, head: bool = False) -> None:
    """Send ``http.response.start`` and a single ``http.response.body``.

    For HEAD requests ``content-length`` still reports the full body size.
    """
    body = response_body(response, head=head)
    length = len(response.body_bytes) if head and response.status not in _BODYLESS else len(body)

    headers = [_encode("content-type", response.content_type)]
    headers.extend(_encode(name, value) for name, value in response.headers)
    headers.append(_encode("content-length", str(length)))

    await send({"type": "http.response.start", "status": response.status, "headers": headers})
    await send({"type": "http.response.body", "body": body})
