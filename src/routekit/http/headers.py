"""Request headers, decoded once from the raw ASGI byte pairs."""

from collections.abc import Iterable, Mapping

from routekit._internal.multimap import MultiValueMapping


class Headers(MultiValueMapping):
    """Case-insensitive header mapping; values are latin-1 decoded.

    ``headers["X-Requested-With"]`` and ``headers["x-requested-with"]``
    are the same lookup. Names are stored lowercased.
    """

    __slots__ = ()

    def __init__(self, raw: Iterable[tuple[bytes, bytes]] = ()) -> None:
        super().__init__((name.decode("latin-1"), value.decode("latin-1")) for name, value in raw)

    @staticmethod
    def _key(key: str) -> str:
        return key.lower()

    @classmethod
    def from_dict(cls, headers: Mapping[str, str]) -> "Headers":
        return cls((name.encode("latin-1"), value.encode("latin-1")) for name, value in headers.items())

    def __repr__(self) -> str:
        first = {name: values[0] for name, values in self._values.items()}
        return f"Headers({first!r})"
