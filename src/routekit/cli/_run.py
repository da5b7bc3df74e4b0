"""``routekit run``: serve an app with the pounce development server."""

import argparse
import sys

from routekit.cli._resolve import resolve_app


def run_server(args: argparse.Namespace) -> None:
    """Resolve ``args.app`` and serve it.

    Command-line ``--host``, ``--port`` and ``--reload`` win over the
    app's ``AppConfig``. The import string is handed to the server so a
    reload can re-import the app.
    """
    try:
        app = resolve_app(args.app)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    from routekit.server.dev import run_dev_server

    config = app.config
    reload = config.debug if args.reload is None else args.reload
    run_dev_server(
        app,
        args.host or config.host,
        args.port or config.port,
        reload=reload,
        log_level=config.log_level,
        app_path=args.app,
    )
