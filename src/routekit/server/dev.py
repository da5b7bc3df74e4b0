"""Development server: serve a live App with pounce.

pounce is an optional dependency (``pip install routekit[server]``) and
is imported only when a server is actually started.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import TypeAlias

from routekit._internal.asgi import Receive, Scope, Send

logger = logging.getLogger("routekit.server")

ASGIApp: TypeAlias = Callable[[Scope, Receive, Send], Awaitable[None]]


def run_dev_server(
    app: ASGIApp,
    host: str,
    port: int,
    *,
    reload: bool = True,
    log_level: str = "info",
    app_path: str | None = None,
) -> None:
    """Serve *app* on ``host:port`` in a single pounce worker.

    With *app_path* (``"module:attribute"``) a reload re-imports the app
    from disk; without it the live object keeps being served.
    """
    from pounce.config import ServerConfig
    from pounce.server import Server

    logger.info("Serving routekit on http://%s:%d (reload=%s)", host, port, reload)
    config = ServerConfig(host=host, port=port, workers=1, reload=reload, log_level=log_level)
    Server(config, app, app_path=app_path).run()
