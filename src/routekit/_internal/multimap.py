"""Read-only ``str -> str`` mapping where a key may carry several values.

Lookups by item return the first value and ``get_list`` returns all of
them. Subclasses decide how keys are normalized.
"""

from collections.abc import Iterable, Iterator, Mapping


class MultiValueMapping(Mapping[str, str]):
    __slots__ = ("_values",)

    def __init__(self, pairs: Iterable[tuple[str, str]] = ()) -> None:
        self._values: dict[str, list[str]] = {}
        for key, value in pairs:
            self._values.setdefault(self._key(key), []).append(value)

    @staticmethod
    def _key(key: str) -> str:
        return key

    def __getitem__(self, key: str) -> str:
        return self._values[self._key(key)][0]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self._key(key) in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def get_list(self, key: str) -> list[str]:
        return list(self._values.get(self._key(key), ()))
