"""HTTP verbs and verb-combination parsing.

Multi-verb spellings join verbs with ``_`` (``"get_post"``). They are
resolved against a closed set of verbs; anything else is ignored.
"""

import re
from collections.abc import Iterable
from enum import StrEnum

_CAMEL_BOUNDARY = re.compile(r"(?<=\w)(?=[A-Z])")


class HTTPMethod(StrEnum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"


def normalize_methods(methods: Iterable[str] | str | None) -> frozenset[str]:
    """Uppercase an explicit method list. ``None`` or empty means any.

    A string is parsed as a verb combination (see :func:`parse_verbs`).
    """
    if methods is None:
        return frozenset()
    if isinstance(methods, str):
        return parse_verbs(methods)
    return frozenset(str(m).strip().upper() for m in methods if str(m).strip())


def parse_verbs(combination: str) -> frozenset[str]:
    """Parse ``"get_post"``-style verb combinations.

    Examples::

        parse_verbs("get")        -> {"GET"}
        parse_verbs("put_patch")  -> {"PUT", "PATCH"}
        parse_verbs("any")        -> set()   (any method)
        parse_verbs("helper")     -> set()
    """
    verbs = set()
    for token in combination.split("_"):
        token = token.strip().upper()
        if token in HTTPMethod.__members__:
            verbs.add(HTTPMethod[token].value)
    return frozenset(verbs)


def split_camel(name: str) -> list[str]:
    """Split a camel-case identifier at its capital letters.

    ``"getUserList"`` -> ``["get", "User", "List"]``
    """
    return [part for part in _CAMEL_BOUNDARY.split(name) if part]


def action_verbs(token: str) -> frozenset[str] | None:
    """Verbs named by a controller method prefix.

    ``"any"`` gives the empty set (any method). A prefix with any token
    that is not a verb (``"index"``, ``"get_user"``) gives ``None`` and
    the method is not routed.
    """
    if token.lower() == "any":
        return frozenset()
    if not all(part.upper() in HTTPMethod.__members__ for part in token.split("_")):
        return None
    return parse_verbs(token)
