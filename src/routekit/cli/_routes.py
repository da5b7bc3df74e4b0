"""``routekit routes``: list registered and named routes.

Resolves an import string to a routekit App and prints the route table
(method, path, handler) followed by the name table (name, template).
"""

import argparse
import sys
from collections.abc import Sequence

from routekit._internal.types import HandlerRef
from routekit.cli._resolve import resolve_app


def describe_handler(handler: HandlerRef) -> str:
    """Readable label for a handler reference."""
    if isinstance(handler, str):
        return handler
    if isinstance(handler, (tuple, list)) and len(handler) == 2:
        target, action = handler
        owner = target if isinstance(target, (str, type)) else type(target)
        owner_name = owner if isinstance(owner, str) else owner.__name__
        return f"{owner_name}.{action}"
    return getattr(handler, "__qualname__", None) or getattr(handler, "__name__", repr(handler))


def format_table(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> list[str]:
    """Left-aligned columns sized to their widest cell."""
    widths = [len(h) for h in headers]
    for row in rows:
        widths = [max(w, len(cell)) for w, cell in zip(widths, row, strict=True)]
    fmt = "  ".join(f"{{:<{w}}}" for w in widths[:-1]) + "  {}"
    lines = [fmt.format(*headers), "-" * min(sum(widths) + 2 * (len(widths) - 1), 80)]
    lines.extend(fmt.format(*row) for row in rows)
    return lines


def run_routes(args: argparse.Namespace) -> None:
    """List registered routes for a routekit app."""
    try:
        app = resolve_app(args.app)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    router = app.router
    if not router.routes:
        print("No routes registered.")
        return

    rows = [
        (", ".join(sorted(route.methods)) or "ANY", route.path, describe_handler(route.handler))
        for route in router.routes
    ]
    for line in format_table(("METHOD", "PATH", "HANDLER"), rows):
        print(line)

    if router.names:
        print()
        named = [(name, router.names[name]) for name in sorted(router.names)]
        for line in format_table(("NAME", "TEMPLATE"), named):
            print(line)
