"""Pattern registry: short names for path-segment regex fragments.

A fragment always carries its leading slash and exactly one capture
group, e.g. ``/([0-9]+)``. Template tokens select a fragment by name::

    /users/{id}:int         -> /users/([0-9]+)
    /tags/{names}:multi_key -> /tags/([a-z0-9_,]+)

A name that is not registered is embedded as a literal regex, which
lets a template carry an ad-hoc expression: ``{year}:([0-9]{4})``.
"""

from collections.abc import Iterator, Mapping

# Positional wildcards, substituted after named parameters are compiled
WILDCARD_SEGMENT = "/?"
WILDCARD_REST = "/*"

DEFAULT_PATTERNS: dict[str, str] = {
    WILDCARD_REST: "/(.*)",
    WILDCARD_SEGMENT: "/([^/]+)",
    "int": "/([0-9]+)",
    "multi_int": "/([0-9,]+)",
    "title": "/([a-z_-]+)",
    "key": "/([a-z0-9_]+)",
    "multi_key": "/([a-z0-9_,]+)",
    "iso_code2": "/([a-z]{2})",
    "iso_code3": "/([a-z]{3})",
    "multi_iso_code2": "/([a-z,]{2,})",
    "multi_iso_code3": "/([a-z,]{3,})",
}


class PatternRegistry(Mapping[str, str]):
    """Name -> fragment table. Merge-only: entries are never removed.

    Each router owns one registry; there is no process-wide table.
    """

    __slots__ = ("_patterns",)

    def __init__(self, patterns: Mapping[str, str] | None = None) -> None:
        self._patterns: dict[str, str] = dict(DEFAULT_PATTERNS)
        if patterns:
            self.add(patterns)

    def __getitem__(self, name: str) -> str:
        return self._patterns[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._patterns)

    def __len__(self) -> int:
        return len(self._patterns)

    def __repr__(self) -> str:
        return f"PatternRegistry({len(self)} patterns)"

    def add(self, patterns: Mapping[str, str]) -> None:
        """Merge *patterns* into the table; later names override earlier ones."""
        self._patterns.update(patterns)

    def resolve(self, token: str) -> str:
        """Return the fragment for *token*, or *token* as a literal regex."""
        return self._patterns.get(token, f"/{token}")

    @property
    def segment(self) -> str:
        """Fragment used for ``/?`` and for ``{name}`` without a pattern."""
        return self._patterns[WILDCARD_SEGMENT]

    @property
    def rest(self) -> str:
        """Fragment used for the ``/*`` catch-all."""
        return self._patterns[WILDCARD_REST]
