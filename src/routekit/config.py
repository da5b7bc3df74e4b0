"""Application settings read by App, the dev server and URL helpers."""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Frozen application settings.

    Every field has a default; pass only what differs::

        config = AppConfig(debug=True, base_url="https://example.com")
    """

    # Dev server bind address; ``debug`` also turns on reload and tracebacks
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False

    # Prefix for App.url(); empty means the origin of the current request
    base_url: str = ""

    # Body for unmatched requests other than OPTIONS
    not_found_body: str = "<h1>404 Not Found</h1>"

    log_level: str = "info"
