"""Argument binding: pair captured values with parameter names.

When the counts line up, values are zipped onto names. When they don't
(typically a trailing ``/*`` captured a value no name claims), names are
served first from the front of the captures, and the leftovers become
positional entries keyed by ``int``::

    bind_args(("user",), ("bob", "docs/a.txt"))
    # {"user": "bob", 0: "docs/a.txt", 1: "docs", 2: "a.txt"}

A single leftover is the full catch-all value: it sits at ``0`` followed
by its ``/``-separated segments, so a handler can read either.
"""

from collections.abc import Iterator, Mapping, Sequence
from typing import TypeAlias

ArgKey: TypeAlias = str | int


class BoundArgs(Mapping[ArgKey, str | None]):
    """Immutable name/position -> value mapping handed to handlers.

    Iteration order is binding order: names first, then positions.
    """

    __slots__ = ("_values", "catch_all")

    def __init__(
        self,
        values: Mapping[ArgKey, str | None] | None = None,
        catch_all: str | None = None,
    ) -> None:
        self._values: dict[ArgKey, str | None] = dict(values or {})
        self.catch_all = catch_all

    def __getitem__(self, key: ArgKey) -> str | None:
        return self._values[key]

    def __iter__(self) -> Iterator[ArgKey]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __hash__(self) -> int:
        return hash(frozenset(self._values.items()))

    def __repr__(self) -> str:
        return f"BoundArgs({self._values!r})"

    @property
    def named(self) -> dict[str, str | None]:
        """Only the entries bound to declared parameter names."""
        return {k: v for k, v in self._values.items() if isinstance(k, str)}

    def positional(self) -> list[str | None]:
        """Values in binding order, as passed to a handler.

        The full catch-all value at position ``0`` is left out; its
        segments already follow it.
        """
        return [
            value
            for key, value in self._values.items()
            if not (key == 0 and self.catch_all is not None and value == self.catch_all)
        ]


EMPTY_ARGS = BoundArgs()


def bind_args(names: Sequence[str], values: Sequence[str]) -> BoundArgs:
    """Bind captured *values* to parameter *names*."""
    if len(names) == len(values):
        return BoundArgs(dict(zip(names, values, strict=True)))

    bound: dict[ArgKey, str | None] = {}
    leftover = list(values)
    for name in names:
        bound[name] = leftover.pop(0) if leftover else None

    if len(leftover) == 1:
        catch_all = leftover[0]
        bound[0] = catch_all
        for index, segment in enumerate(catch_all.split("/"), start=1):
            bound[index] = segment
        return BoundArgs(bound, catch_all)

    for index, value in enumerate(leftover):
        bound[index] = value
    return BoundArgs(bound)
