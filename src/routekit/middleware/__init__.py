"""Middleware: path-scoped before/after callbacks.

A middleware is any callable matching:
    def mw(ctx: Context) -> object

Returning ``False`` halts the remaining callbacks in the same chain.
"""

from routekit.middleware.chain import MiddlewareChain, MiddlewareEntry

__all__ = [
    "MiddlewareChain",
    "MiddlewareEntry",
]
