"""Matcher: test a compiled pattern against a request path."""

import re

from routekit.routing.route import NO_MATCH, MatchResult


def match_path(pattern: re.Pattern[str], path: str) -> MatchResult:
    """Match *path* and return the slash-trimmed captures.

    The pattern is expected to come from ``compile_pattern()``, so it is
    already anchored and case-insensitive.
    """
    found = pattern.match(path)
    if found is None:
        return NO_MATCH
    return MatchResult(matched=True, values=tuple(value.strip("/") for value in found.groups("")))
