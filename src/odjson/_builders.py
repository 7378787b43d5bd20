"""
Container construction strategies for the parser.

An array builder receives a lazy iterator over parsed elements and a dict
builder a lazy iterator over ``(key, value)`` pairs; each returns the
container the caller wants. The parser never inspects what they return.

Only ``as_ordered`` keeps repeated keys; the other dict builders reject
them with ``DuplicateKeyError``.
"""

from collections.abc import Callable
from collections.abc import Iterator
from collections.abc import Mapping
from collections.abc import Sequence
from types import MappingProxyType
from typing import Any

from ._errors import DuplicateKeyError
from ._ordered import OrderedJsonDict

type ArrayItems = Iterator[Any]
type DictItems = Iterator[tuple[str, Any]]
type ArrayBuilder = Callable[[ArrayItems], Any]
type DictBuilder = Callable[[DictItems], Any]


def as_list(items: ArrayItems) -> list[Any]:
    """Default array builder: a mutable list in document order."""
    return list(items)


def as_tuple(items: ArrayItems) -> Sequence[Any]:
    """Immutable array snapshot."""
    return tuple(items)


def _unique(items: DictItems) -> DictItems:
    seen: set[str] = set()
    for key, value in items:
        if key in seen:
            raise DuplicateKeyError(key)
        seen.add(key)
        yield key, value


def as_ordered(items: DictItems) -> OrderedJsonDict[Any]:
    """Default dict builder; keeps duplicates and document order."""
    return OrderedJsonDict(items)


def as_dict(items: DictItems) -> dict[str, Any]:
    """Plain dict; a repeated key raises ``DuplicateKeyError``."""
    return dict(_unique(items))


def as_sorted(items: DictItems) -> dict[str, Any]:
    """Dict whose iteration order is ascending key order."""
    return dict(sorted(_unique(items)))


def as_immutable(items: DictItems) -> Mapping[str, Any]:
    return MappingProxyType(as_dict(items))


def as_immutable_sorted(items: DictItems) -> Mapping[str, Any]:
    return MappingProxyType(as_sorted(items))

