"""Shared type aliases used across routekit modules."""

from collections.abc import Callable
from typing import Any, TypeAlias

# Route handler, called as handler(ctx, *args)
Handler: TypeAlias = Callable[..., Any]

# Anything the router can turn into a handler: a callable,
# a (class-or-instance, method-name) pair, or a "Class@method" string
HandlerRef: TypeAlias = Handler | tuple[Any, str] | list[Any] | str

# Middleware, called as middleware(ctx); returning False halts the chain
Middleware: TypeAlias = Callable[..., Any]
