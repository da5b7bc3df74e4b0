"""Frozen HTTP response.

Handlers may return one directly, or ``Context`` builds one from the
output buffer. Every ``with_*()`` call copies; nothing mutates in place::

    Response("Created").with_status(201).with_header("Location", "/photos/7")
"""

from __future__ import annotations

import json as json_module
from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Any

HTML_CONTENT_TYPE = "text/html; charset=utf-8"
JSON_CONTENT_TYPE = "application/json; charset=utf-8"
PLAIN_CONTENT_TYPE = "text/plain; charset=utf-8"


@dataclass(frozen=True, slots=True)
class Response:
    """Status, content type, extra headers and a str or bytes body.

    ``headers`` keeps insertion order and allows repeats; the content
    type and length are sent separately.
    """

    body: str | bytes = ""
    status: int = 200
    content_type: str = HTML_CONTENT_TYPE
    headers: tuple[tuple[str, str], ...] = ()

    @classmethod
    def json(cls, data: Any, status: int = 200) -> Response:
        return cls(json_module.dumps(data), status, JSON_CONTENT_TYPE)

    @classmethod
    def plain(cls, text: str, status: int = 200) -> Response:
        return cls(text, status, PLAIN_CONTENT_TYPE)

    def with_status(self, status: int) -> Response:
        return replace(self, status=status)

    def with_content_type(self, content_type: str) -> Response:
        return replace(self, content_type=content_type)

    def with_header(self, name: str, value: str) -> Response:
        """Append one header; an existing header of that name is kept."""
        return replace(self, headers=(*self.headers, (name, value)))

    def with_headers(self, headers: Mapping[str, str]) -> Response:
        return replace(self, headers=self.headers + tuple(headers.items()))

    @property
    def body_bytes(self) -> bytes:
        """The body, UTF-8 encoded when it is a str."""
        return self.body.encode("utf-8") if isinstance(self.body, str) else self.body

    @property
    def text(self) -> str:
        return self.body.decode("utf-8") if isinstance(self.body, bytes) else self.body

    def header(self, name: str) -> str | None:
        """First value of *name*, compared case-insensitively."""
        wanted = name.lower()
        return next((value for key, value in self.headers if key.lower() == wanted), None)
