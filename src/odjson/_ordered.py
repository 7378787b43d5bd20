"""
Insertion-ordered mapping that tolerates duplicate keys.

``OrderedJsonDict`` is the default container for parsed JSON objects. Every
insertion is appended to the backing storage; a repeated key shadows the
earlier entries for lookup but both entries stay visible to iteration, so an
object parsed with a duplicate key is written back with that key repeated.
"""

from collections.abc import Callable
from collections.abc import ItemsView
from collections.abc import Iterable
from collections.abc import Iterator
from collections.abc import Mapping
from collections.abc import MutableMapping
from collections.abc import ValuesView
from typing import Any
from typing import TypeVar

V = TypeVar("V")


class _EntriesView(ItemsView[str, V]):
    """Items view yielding every stored entry, shadowed ones included."""

    _mapping: "OrderedJsonDict[V]"

    def __iter__(self) -> Iterator[tuple[str, V]]:
        yield from self._mapping._entries()

    def __contains__(self, item: object) -> bool:
        if not isinstance(item, tuple) or len(item) != 2:
            return False
        key, value = item
        return self._mapping.contains_item(key, value)


class _StoredValuesView(ValuesView[V]):
    """Values view yielding the value of every stored entry."""

    _mapping: "OrderedJsonDict[V]"

    def __iter__(self) -> Iterator[V]:
        for _, value in self._mapping._entries():
            yield value

    def __contains__(self, value: object) -> bool:
        return any(stored is value or stored == value for stored in self)


class OrderedJsonDict(MutableMapping[str, V]):
    """
    Mutable mapping over string keys that remembers insertion order.

    Lookup scans a lazily extended index of key hashes from the newest entry
    backwards, so the most recent insertion of a key wins. The index is
    valid exactly when its length equals the entry count; it is extended
    rather than rebuilt after appends and truncated after removals.
    """

    __slots__ = ("_hashes", "_keys", "_values")

    def __init__(
        self,
        entries: Mapping[str, V] | Iterable[tuple[str, V]] | None = None,
        **kwargs: V,
    ) -> None:
        self._hashes: list[int] = []
        self._keys: list[str] = []
        self._values: list[V] = []
        if entries is not None:
            pairs = entries.items() if isinstance(entries, Mapping) else entries
            for key, value in pairs:
                self.add(key, value)
        for key, value in kwargs.items():
            self.add(key, value)

    # Storage

    def add(self, key: str, value: V) -> None:
        """Appends an entry; an existing entry with the same key is kept."""
        self._keys.append(key)
        self._values.append(value)

    def _entries(self) -> Iterator[tuple[str, V]]:
        return zip(self._keys, self._values, strict=True)

    def _ensure_index(self) -> None:
        count = len(self._keys)
        if len(self._hashes) == count:
            return
        for i in range(len(self._hashes), count):
            self._hashes.append(hash(self._keys[i]))

    def _find(self, key: str) -> int:
        self._ensure_index()
        key_hash = hash(key)
        for i in range(len(self._hashes) - 1, -1, -1):
            if self._hashes[i] == key_hash and self._keys[i] == key:
                return i
        return -1

    def _compact(self, start: int, drop: Callable[[int], bool]) -> None:
        """Removes entries from ``start`` on for which ``drop(i)`` holds."""
        kept = start
        for i in range(start, len(self._keys)):
            if drop(i):
                continue
            self._hashes[kept] = self._hashes[i]
            self._keys[kept] = self._keys[i]
            self._values[kept] = self._values[i]
            kept += 1
        del self._hashes[kept:]
        del self._keys[kept:]
        del self._values[kept:]

    # Lookup

    def get(self, key: str, default: Any = None) -> Any:
        index = self._find(key)
        return self._values[index] if index >= 0 else default

    def __getitem__(self, key: str) -> V:
        index = self._find(key)
        if index < 0:
            raise KeyError(key)
        return self._values[index]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self._find(key) >= 0

    def contains_item(self, key: str, value: object) -> bool:
        """Returns True if some stored entry equals ``(key, value)``."""
        self._ensure_index()
        key_hash = hash(key)
        return any(
            self._hashes[i] == key_hash
            and self._keys[i] == key
            and self._values[i] == value
            for i in range(len(self._keys))
        )

    # Mutation

    def __setitem__(self, key: str, value: V) -> None:
        self.add(key, value)

    def remove(self, key: str) -> bool:
        """
        Removes every entry stored under ``key``.

        Returns False when the key was not present.
        """
        self._ensure_index()
        key_hash = hash(key)
        for first, stored in enumerate(self._keys):
            if self._hashes[first] == key_hash and stored == key:
                self._compact(
                    first,
                    lambda i: self._hashes[i] == key_hash
                    and self._keys[i] == key,
                )
                return True
        return False

    def remove_item(self, key: str, value: object) -> bool:
        """Removes every entry equal to ``(key, value)``."""
        self._ensure_index()
        key_hash = hash(key)

        def matches(i: int) -> bool:
            return (
                self._hashes[i] == key_hash
                and self._keys[i] == key
                and self._values[i] == value
            )

        for first in range(len(self._keys)):
            if matches(first):
                self._compact(first, matches)
                return True
        return False

    def __delitem__(self, key: str) -> None:
        if not self.remove(key):
            raise KeyError(key)

    def clear(self) -> None:
        self._hashes.clear()
        self._keys.clear()
        self._values.clear()

    def copy(self) -> "OrderedJsonDict[V]":
        return OrderedJsonDict(self._entries())

    # Enumeration

    def __len__(self) -> int:
        return len(self._keys)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._keys))

    def items(self) -> _EntriesView[V]:  # type: ignore[override]
        return _EntriesView(self)

    def values(self) -> _StoredValuesView[V]:  # type: ignore[override]
        return _StoredValuesView(self)

    def __repr__(self) -> str:
        body = ", ".join(f"{k!r}: {v!r}" for k, v in self._entries())
        return f"{type(self).__name__}({{{body}}})"
