"""Route, GroupFrame, RouteOptions and MatchResult frozen dataclasses."""

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from routekit._internal.types import HandlerRef


@dataclass(frozen=True, slots=True)
class RouteOptions:
    """Per-route option bag.

    ``ajax_only``: only attempt the route for AJAX requests.
    ``continue_matching``: keep testing later routes after this one matches.
    ``extra``: any other option, kept for extensions.
    """

    ajax_only: bool = False
    continue_matching: bool = False
    extra: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any] | None = None) -> "RouteOptions":
        """Build options from a plain mapping.

        Accepts ``continue`` as an alias of ``continue_matching``, since the
        keyword cannot be passed as a Python argument name, and ``ajaxOnly``
        as an alias of ``ajax_only``.
        """
        opts = dict(options or {})
        ajax_only = bool(opts.pop("ajax_only", False))
        ajax_only = bool(opts.pop("ajaxOnly", ajax_only))
        continue_matching = bool(opts.pop("continue_matching", False))
        continue_matching = bool(opts.pop("continue", continue_matching))
        return cls(ajax_only=ajax_only, continue_matching=continue_matching, extra=opts)


@dataclass(frozen=True, slots=True)
class GroupFrame:
    """One level of the group stack.

    Pushed when entering ``Router.group()`` and popped on exit.
    ``matcher`` is the cumulative, non-strict prefix check for every
    route registered while this frame is on top.
    """

    prefix: str
    params: tuple[str, ...]
    fragments: tuple[str, ...]
    name: str
    namespace: str
    matcher: re.Pattern[str]


@dataclass(frozen=True, slots=True)
class Route:
    """A compiled route. Immutable after registration.

    ``path`` is the group-prefixed compiled path before wildcard
    expansion; it is what reverse routing rewrites into a template.
    ``params`` and ``fragments`` list group-level entries first.
    """

    uri: str
    path: str
    pattern: re.Pattern[str]
    methods: frozenset[str]
    handler: HandlerRef
    params: tuple[str, ...] = ()
    fragments: tuple[str, ...] = ()
    options: RouteOptions = field(default_factory=RouteOptions)
    group_matcher: re.Pattern[str] | None = None
    namespace: str = ""

    def allows(self, method: str) -> bool:
        """True if *method* is accepted. An empty method set accepts any."""
        return not self.methods or method in self.methods


@dataclass(frozen=True, slots=True)
class MatchResult:
    """Outcome of one match attempt.

    ``values`` holds the captured groups, slash-trimmed, in order.
    Unmatched optional groups are captured as ``""``.
    """

    matched: bool
    values: tuple[str, ...] = ()


NO_MATCH = MatchResult(matched=False)
