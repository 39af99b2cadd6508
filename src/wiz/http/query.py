"""Decoded query string parameters.

Keys may repeat (``?tag=a&tag=b``). Mapping access gives the first
value of a key; ``get_list`` gives all of them in request order.
"""

from collections.abc import Iterator, Mapping
from urllib.parse import parse_qsl


class QueryParams(Mapping[str, str]):
    """Query parameters of one request. Read-only after construction.

    Blank values are kept, so ``?flag`` and ``?flag=`` are present with
    the value ``""`` while a key that never appears is missing.
    """

    __slots__ = ("_index", "_raw")

    def __init__(self, query_string: bytes = b"") -> None:
        self._raw = query_string.decode("latin-1")
        index: dict[str, list[str]] = {}
        for key, value in parse_qsl(self._raw, keep_blank_values=True):
            index.setdefault(key, []).append(value)
        self._index = index

    def __getitem__(self, key: str) -> str:
        return self._index[key][0]

    def __contains__(self, key: object) -> bool:
        return key in self._index

    def __iter__(self) -> Iterator[str]:
        return iter(self._index)

    def __len__(self) -> int:
        return len(self._index)

    def __repr__(self) -> str:
        return f"QueryParams({self._raw!r})"

    def get(self, key: str, default: str | None = None) -> str | None:  # type: ignore[override]
        values = self._index.get(key)
        return values[0] if values else default

    def get_list(self, key: str) -> list[str]:
        """All values of *key* (a fresh list; empty when missing)."""
        return list(self._index.get(key, ()))

    @property
    def raw(self) -> str:
        """The undecoded query string, without the leading ``?``."""
        return self._raw
