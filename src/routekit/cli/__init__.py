"""The ``routekit`` command: inspect an app's routes or serve it.

Registered in ``pyproject.toml``::

    [project.scripts]
    routekit = "routekit.cli:main"

Subcommand modules are imported only once their command is chosen, so
``routekit routes`` never imports the server.
"""

import argparse
import sys

_APP_HELP = "Import string, module[:attribute] (default attribute: app)"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="routekit",
        description="routekit: regex route tables with groups, names and middleware.",
    )
    commands = parser.add_subparsers(dest="command")

    routes = commands.add_parser("routes", help="List registered and named routes")
    routes.add_argument("app", help=_APP_HELP)

    run = commands.add_parser("run", help="Start the development server")
    run.add_argument("app", help=_APP_HELP)
    run.add_argument("--host", default=None, help="Bind host address (default: config.host)")
    run.add_argument("--port", type=int, default=None, help="Bind port number (default: config.port)")
    run.add_argument(
        "--reload",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Reload on source changes (default: config.debug)",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Entry point for the ``routekit`` command."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command == "routes":
        from routekit.cli._routes import run_routes

        run_routes(args)
    elif args.command == "run":
        from routekit.cli._run import run_server

        run_server(args)
    else:
        parser.print_help()
        sys.exit(0)
