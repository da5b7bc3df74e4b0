"""Middleware chain: path-scoped before/after callbacks.

Each entry pairs a scope with a callback. A scope is one or more
``|``-separated path globs, matched as non-strict prefixes against the
request path::

    /admin                     /admin/ and everything under it
    /api/*|/hooks/*            either subtree
    /*                         every request
    /*!/login|/static          every request except those two subtrees

A callback is called as ``callback(ctx)``. Returning ``False`` halts
the rest of the chain it belongs to; any other value continues.
"""

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from routekit._internal.types import HandlerRef, Middleware
from routekit.context import Context
from routekit.routing.compiler import collapse_slashes, compile_pattern
from routekit.routing.patterns import WILDCARD_REST, PatternRegistry

logger = logging.getLogger("routekit.router")

NEGATION_MARKER = "/*!"


@dataclass(frozen=True, slots=True)
class MiddlewareEntry:
    """One registered callback and its compiled scope."""

    scope: str
    callback: HandlerRef
    matchers: tuple[re.Pattern[str], ...] = ()
    negated: bool = False
    universal: bool = False

    def applies(self, path: str) -> bool:
        """True if the callback should run for *path*."""
        if self.negated:
            return not any(matcher.match(path) for matcher in self.matchers)
        if self.universal:
            return True
        return any(matcher.match(path) for matcher in self.matchers)


@dataclass(slots=True)
class MiddlewareChain:
    """Ordered before/after lists sharing one pattern registry."""

    patterns: PatternRegistry
    before_entries: list[MiddlewareEntry] = field(default_factory=list)
    after_entries: list[MiddlewareEntry] = field(default_factory=list)

    def compile_entry(self, scope: str, callback: HandlerRef) -> MiddlewareEntry:
        raw = scope.strip().lower()
        negated = raw.startswith(NEGATION_MARKER)
        if negated:
            raw = raw[len(NEGATION_MARKER) :]
        alternatives = [collapse_slashes(item.strip()) for item in raw.split("|") if item.strip()]
        universal = not negated and (not alternatives or alternatives[0] == WILDCARD_REST)
        matchers = tuple(compile_pattern(item, self.patterns, strict=False) for item in alternatives)
        return MiddlewareEntry(
            scope=scope,
            callback=callback,
            matchers=matchers,
            negated=negated,
            universal=universal,
        )

    def before(self, scope: str, callback: HandlerRef) -> MiddlewareEntry:
        entry = self.compile_entry(scope, callback)
        self.before_entries.append(entry)
        return entry

    def after(self, scope: str, callback: HandlerRef) -> MiddlewareEntry:
        entry = self.compile_entry(scope, callback)
        self.after_entries.append(entry)
        return entry

    def use(self, callback: HandlerRef, event: str = "before") -> MiddlewareEntry:
        """Register *callback* for every request.

        ``event`` is ``"before"`` (case-insensitive); anything else
        registers an after-callback.
        """
        if event.lower() == "before":
            return self.before(WILDCARD_REST, callback)
        return self.after(WILDCARD_REST, callback)

    def emit(
        self,
        entries: list[MiddlewareEntry],
        ctx: Context,
        resolve: Callable[[HandlerRef], Callable[..., Any]],
    ) -> bool:
        """Run *entries* in order. Returns ``False`` if a callback halted the chain."""
        path = ctx.request.path
        for entry in entries:
            if not entry.applies(path):
                continue
            callback: Middleware = resolve(entry.callback)
            if callback(ctx) is False:
                logger.debug("Middleware %r halted the chain for %s", entry.scope, path)
                return False
        return True
