"""Immutable, case-insensitive request headers.

Implements ``Mapping[str, str]``. Stores raw byte pairs from the ASGI
scope; decodes on access.
"""

from collections.abc import Iterator, Mapping


class Headers(Mapping[str, str]):
    """Immutable, case-insensitive HTTP headers.

    ``__getitem__`` returns every value for a header joined with ``,``,
    the way repeated header lines fold into one field value.
    ``get_list`` returns the values separately.
    """

    __slots__ = ("_raw",)

    def __init__(self, raw: tuple[tuple[bytes, bytes], ...] = ()) -> None:
        object.__setattr__(self, "_raw", raw)

    def __getitem__(self, key: str) -> str:
        values = self.get_list(key)
        if not values:
            raise KeyError(key)
        return ",".join(values)

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False
        key_lower = key.lower().encode("latin-1")
        return any(name.lower() == key_lower for name, _ in self._raw)

    def __iter__(self) -> Iterator[str]:
        seen: set[str] = set()
        for name, _ in self._raw:
            key = name.decode("latin-1").lower()
            if key not in seen:
                seen.add(key)
                yield key

    def __len__(self) -> int:
        return len(set(self))

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {self[k]!r}" for k in self)
        return f"Headers({{{items}}})"

    def get(self, key: str, default: str | None = None) -> str | None:  # type: ignore[override]
        """Return the folded value for *key*, or *default* if missing."""
        try:
            return self[key]
        except KeyError:
            return default

    def get_list(self, key: str) -> list[str]:
        """Return all values for *key*."""
        key_lower = key.lower().encode("latin-1")
        return [value.decode("latin-1") for name, value in self._raw if name.lower() == key_lower]

    @property
    def raw(self) -> tuple[tuple[bytes, bytes], ...]:
        """Access raw header byte pairs for ASGI compatibility."""
        return self._raw


class MutableHeaders:
    """Ordered, case-insensitive response headers.

    Backs the Context's ``set_header`` / ``append_header`` /
    ``remove_header`` writes. Names keep the case they were written
    with and are lowercased only when encoded for ASGI.
    """

    __slots__ = ("_items",)

    def __init__(self) -> None:
        self._items: list[tuple[str, str]] = []

    def set(self, name: str, value: str) -> None:
        """Replace every value of *name* with *value*."""
        self.remove(name)
        self._items.append((name, value))

    def append(self, name: str, value: str) -> None:
        """Add *value* without touching existing values of *name*."""
        self._items.append((name, value))

    def remove(self, name: str) -> None:
        lower = name.lower()
        self._items = [(k, v) for k, v in self._items if k.lower() != lower]

    def get(self, name: str) -> str | None:
        """Return the first value of *name*, or ``None``."""
        lower = name.lower()
        for k, v in self._items:
            if k.lower() == lower:
                return v
        return None

    def get_list(self, name: str) -> list[str]:
        lower = name.lower()
        return [v for k, v in self._items if k.lower() == lower]

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.get(name) is not None

    def __iter__(self) -> Iterator[tuple[str, str]]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"MutableHeaders({self._items!r})"

    def encode(self) -> list[tuple[bytes, bytes]]:
        """Raw ASGI header pairs, names lowercased."""
        return [(k.lower().encode("latin-1"), v.encode("latin-1")) for k, v in self._items]
