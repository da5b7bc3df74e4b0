"""Query string parameters."""

import re
from urllib.parse import parse_qsl

from routekit._internal.multimap import MultiValueMapping

_SLASHES = re.compile(r"/+")


def sanitize_value(value: str) -> str:
    """Strip path-traversal sequences from a query value.

    ``..`` is removed, ``./`` becomes ``/`` and slash runs collapse.
    """
    return _SLASHES.sub("/", value.replace("..", "").replace("./", "/"))


class QueryParams(MultiValueMapping):
    """Parsed query string; blank values are kept. ``raw`` is the undecoded text."""

    __slots__ = ("raw",)

    def __init__(self, query_string: bytes | str = b"") -> None:
        if isinstance(query_string, bytes):
            query_string = query_string.decode("latin-1")
        self.raw = query_string
        super().__init__(parse_qsl(query_string, keep_blank_values=True))

    def __repr__(self) -> str:
        return f"QueryParams({self.raw!r})"

    def safe(self, key: str, default: str | None = None) -> str | None:
        """First value for *key* with traversal sequences removed."""
        value = self.get(key)
        return default if value is None else sanitize_value(value)
