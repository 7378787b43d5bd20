"""Helpers that turn loosely typed parsed values into typed containers."""

from collections.abc import Callable
from collections.abc import Iterable
from collections.abc import Mapping
from typing import Any
from typing import TypeVar
from typing import overload

from ._ordered import OrderedJsonDict
from ._value import NON_ARRAY_TYPES
from ._value import JsonConvertible

T = TypeVar("T")


@overload
def as_json_dict(value: Any, convert: None = None) -> Mapping[str, Any]: ...


@overload
def as_json_dict(value: Any, convert: Callable[[Any], T]) -> dict[str, T]: ...


def as_json_dict(
    value: Any, convert: Callable[[Any], T] | None = None
) -> Mapping[str, Any] | dict[str, T]:
    """
    Casts a parsed value to a string-keyed mapping.

    Without ``convert`` a mapping whose keys are already strings is returned
    as is; other mappings are copied with ``str`` keys. With ``convert`` a
    new dict is built from ``convert(value)`` of every item, where a
    duplicated key keeps its most recent value.
    """
    if not isinstance(value, Mapping):
        raise TypeError(f"Can't cast to JSON dict: {value!r}")
    if convert is None:
        if all(isinstance(key, str) for key in value):
            return value
        return {str(key): item for key, item in value.items()}
    return {str(key): convert(item) for key, item in value.items()}


@overload
def as_json_array(value: Any, convert: None = None) -> list[Any]: ...


@overload
def as_json_array(value: Any, convert: Callable[[Any], T]) -> list[T]: ...


def as_json_array(
    value: Any, convert: Callable[[Any], T] | None = None
) -> list[Any] | list[T]:
    """
    Casts a parsed value to a list, optionally converting every element.

    Strings and bytes are not treated as arrays.
    """
    if isinstance(value, NON_ARRAY_TYPES) or not isinstance(value, Iterable):
        raise TypeError(f"Can't cast to JSON array: {value!r}")
    if convert is None:
        return value if isinstance(value, list) else list(value)
    return [convert(item) for item in value]


def to_json_values(
    items: Iterable[JsonConvertible] | Mapping[str, JsonConvertible],
) -> list[Any] | OrderedJsonDict[Any]:
    """Replaces every convertible in a list or mapping with its JSON value."""
    if isinstance(items, Mapping):
        return OrderedJsonDict(
            (key, item.to_json_value()) for key, item in items.items()
        )
    return [item.to_json_value() for item in items]
