"""Absolute URL building."""


def build_url(base: str, path: str | None = None) -> str:
    """Join *base* and *path* with exactly one slash between them.

    The path loses surrounding whitespace and slashes; no path gives the
    base with a trailing slash::

        build_url("https://example.com", "/users/42/")  ->  "https://example.com/users/42"
        build_url("https://example.com/")                ->  "https://example.com/"
    """
    root = base.rstrip("/") + "/"
    if path is None:
        return root
    return root + path.strip().strip("/")
