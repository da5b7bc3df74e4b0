"""Name registry: dotted route names and reverse routing.

Names are lowercase and dotted (``admin.users.show``). Each one maps to
a template where every compiled parameter fragment has been turned back
into a ``:name`` placeholder::

    /users/{id}:int/edit  ->  /users/:id/edit

Registering a name twice keeps the last template.
"""

import logging
import re
from collections.abc import Iterator, Mapping, Sequence
from typing import Any

from routekit.routing.compiler import collapse_slashes, tokenize
from routekit.routing.patterns import WILDCARD_REST, WILDCARD_SEGMENT

logger = logging.getLogger("routekit.router")

_PARAM_MARKUP = re.compile(r"[{}?:()*]")


def dotted_name(name: str) -> str:
    """Lowercase *name*, trim slashes and turn the rest into dots."""
    return name.strip().strip("/").lower().replace("/", ".").strip(".")


def clean_name(name: str) -> str:
    """Dotted *name*, or ``""`` when it still carries parameter or regex syntax."""
    if _PARAM_MARKUP.search(name):
        return ""
    return dotted_name(name)


def literal_name(template: str) -> str:
    """Dotted name from the literal parts of *template*.

    Parameter tokens and the ``/?`` ``/*`` wildcards are dropped, so a
    group prefix such as ``/users/{id}/posts`` names as ``users.posts``.
    """
    literal = "".join(token for token in tokenize(template) if isinstance(token, str))
    literal = literal.replace(WILDCARD_REST, "/").replace(WILDCARD_SEGMENT, "/")
    return clean_name(collapse_slashes(literal))


def build_template(path: str, params: Sequence[str], fragments: Sequence[str]) -> str:
    """Rewrite each fragment occurrence in *path* back into ``/:param``.

    Fragments are replaced left to right, one occurrence each, in the
    order their parameters were declared.
    """
    for param, fragment in zip(params, fragments, strict=False):
        pos = path.find(fragment)
        if pos != -1:
            path = f"{path[:pos]}/:{param}{path[pos + len(fragment) :]}"
    template = collapse_slashes(path.lower())
    if template != "/":
        template = template.rstrip("/")
    return template


class NameRegistry(Mapping[str, str]):
    """Dotted name -> URI template."""

    __slots__ = ("_templates",)

    def __init__(self) -> None:
        self._templates: dict[str, str] = {}

    def __getitem__(self, name: str) -> str:
        return self._templates[name.lower()]

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._templates

    def __iter__(self) -> Iterator[str]:
        return iter(self._templates)

    def __len__(self) -> int:
        return len(self._templates)

    def add(self, name: str, template: str) -> None:
        """Register *template* under *name*, replacing any previous entry."""
        name = name.lower()
        previous = self._templates.get(name)
        if previous is not None and previous != template:
            logger.debug("Route name %r rebound: %s -> %s", name, previous, template)
        self._templates[name] = template

    def resolve(self, name: str, args: Mapping[str, Any] | None = None) -> str | None:
        """Template for *name* with ``:key`` placeholders filled from *args*.

        Returns ``None`` for an unknown name. Placeholders without a
        matching key are left in place.
        """
        template = self._templates.get(name.lower())
        if template is None:
            return None
        for key, value in (args or {}).items():
            placeholder = re.compile(rf":{re.escape(str(key).lower())}(?![a-z0-9-])")
            template = placeholder.sub(lambda _m, v=str(value): v, template)
        return template
