"""Immutable HTTP request.

Frozen metadata plus the fully read body. The router only needs the
normalized ``path``, the ``method`` and the ``ajax`` flag; everything
else is here for handlers.

The dispatcher attaches the bound route arguments and the permission
payload with ``dataclasses.replace``, so a request is never mutated.
"""

from __future__ import annotations

import ipaddress
import json
import posixpath
import re
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import parse_qs

from routekit.http.headers import Headers
from routekit.http.query import QueryParams
from routekit.routing.binding import EMPTY_ARGS, BoundArgs
from routekit.routing.compiler import normalize_path

# Checked in order; the first present header wins
_IP_HEADERS = (
    "client-ip",
    "x-forwarded-for",
    "x-forwarded",
    "forwarded-for",
    "forwarded",
)

_BROWSERS = (
    (("opera", "opr/"), "Opera"),
    (("edge",), "Edge"),
    (("chrome",), "Chrome"),
    (("safari",), "Safari"),
    (("firefox",), "Firefox"),
    (("msie", "trident/7"), "Internet Explorer"),
)

_PLATFORMS = (
    (re.compile(r"linux", re.IGNORECASE), "linux"),
    (re.compile(r"macintosh|mac os x", re.IGNORECASE), "mac"),
    (re.compile(r"windows|win32", re.IGNORECASE), "windows"),
)

_MOBILE = re.compile(r"iphone|ipod|ipad|android|blackberry|webos", re.IGNORECASE)


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request."""

    method: str
    path: str
    headers: Headers = field(default_factory=Headers)
    query: QueryParams = field(default_factory=QueryParams)
    body: bytes = b""
    scheme: str = "http"
    server: tuple[str, int] | None = None
    client: tuple[str, int] | None = None

    # Attached by the dispatcher
    args: BoundArgs = EMPTY_ARGS
    permissions: Any = None

    # Parsed body cache (the dict is mutable, the field reference is not)
    _cache: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    # -- Computed properties --

    @property
    def ajax(self) -> bool:
        """True for ``X-Requested-With: XMLHttpRequest`` requests."""
        return self.headers.get("x-requested-with") == "XMLHttpRequest"

    @property
    def secure(self) -> bool:
        return self.scheme == "https" or self.headers.get("x-forwarded-proto") == "https"

    @property
    def hostname(self) -> str:
        """Host header without its port, falling back to the server name."""
        host = self.headers.get("host")
        if host:
            return re.sub(r":\d+$", "", host)
        if self.server:
            return self.server[0]
        return ""

    @property
    def url(self) -> str:
        """Base origin, e.g. ``https://example.com``."""
        protocol = "https" if self.secure else "http"
        return f"{protocol}://{self.hostname}".lower()

    @property
    def full_url(self) -> str:
        """Origin plus the normalized path."""
        return self.url + self.path

    @property
    def content_type(self) -> str | None:
        return self.headers.get("content-type")

    @property
    def extension(self) -> str:
        """Extension of the last path segment, without the dot."""
        return posixpath.splitext(self.path.rstrip("/"))[1].lstrip(".")

    @property
    def data(self) -> dict[str, Any]:
        """Body as a dict: URL-encoded form or JSON object, else empty."""
        if "data" in self._cache:
            return self._cache["data"]
        result: dict[str, Any] = {}
        content_type = (self.content_type or "").split(";")[0].strip().lower()
        if content_type == "application/x-www-form-urlencoded":
            parsed = parse_qs(self.body.decode("utf-8", errors="replace"), keep_blank_values=True)
            result = {k: v[0] if len(v) == 1 else v for k, v in parsed.items()}
        elif self.body:
            try:
                decoded = json.loads(self.body)
            except ValueError:
                decoded = None
            if isinstance(decoded, dict):
                result = decoded
        self._cache["data"] = result
        return result

    def text(self) -> str:
        """The body decoded as UTF-8."""
        return self.body.decode("utf-8")

    # -- Client metadata --

    def ip(self) -> str:
        """Best-effort client address, or ``"unknown"`` if it isn't a valid IP."""
        candidate = None
        for name in _IP_HEADERS:
            candidate = self.headers.get(name)
            if candidate:
                break
        if not candidate and self.client:
            candidate = self.client[0]
        if not candidate:
            return "unknown"
        candidate = candidate.split(",")[0].strip()
        try:
            ipaddress.ip_address(candidate)
        except ValueError:
            return "unknown"
        return candidate

    def browser(self) -> str:
        agent = self.headers.get("user-agent", "").lower()
        for needles, name in _BROWSERS:
            if any(needle in agent for needle in needles):
                return name
        return "unknown"

    def platform(self) -> str:
        agent = self.headers.get("user-agent", "")
        for pattern, name in _PLATFORMS:
            if pattern.search(agent):
                return name
        return "unknown"

    def is_mobile(self) -> bool:
        return bool(_MOBILE.search(self.headers.get("user-agent", "")))

    # -- Factory --

    @classmethod
    def from_asgi(cls, scope: dict[str, Any], body: bytes = b"") -> Request:
        """Create a Request from an ASGI scope and the already-read body.

        The path loses its ``root_path`` prefix (the mount point) and is
        normalized to the ``/a/b/`` form.
        """
        path = scope.get("path", "/")
        root_path = scope.get("root_path", "").rstrip("/")
        if root_path and path.lower().startswith(root_path.lower()):
            path = path[len(root_path) :]
        server = scope.get("server")
        client = scope.get("client")
        return cls(
            method=scope.get("method", "GET").upper(),
            path=normalize_path(path),
            headers=Headers(scope.get("headers", ())),
            query=QueryParams(scope.get("query_string", b"")),
            body=body,
            scheme=scope.get("scheme", "http"),
            server=tuple(server) if server else None,
            client=tuple(client) if client else None,
        )

    @classmethod
    def build(
        cls,
        method: str,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        query: str = "",
        body: bytes = b"",
    ) -> Request:
        """Create a Request directly (scripts and tests)."""
        return cls(
            method=method.upper(),
            path=normalize_path(path),
            headers=Headers.from_dict(headers or {}),
            query=QueryParams(query),
            body=body,
        )
