"""
Tagged representation of JSON values.

Parsed documents are plain Python containers. Before emission the writer
turns an arbitrary Python value into one of the node types below with
``to_node``, so emission itself only ever sees a closed set of shapes.
"""

import decimal
import enum
import math
import numbers
from collections.abc import ItemsView
from collections.abc import Iterable
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any
from typing import Protocol
from typing import runtime_checkable

from ._errors import WriteError
from ._errors import WriteErrorKind

# Recursive definition of the values the parser produces by default
JsonValue = (
    str
    | int
    | float
    | bool
    | None
    | Mapping[str, "JsonValue"]
    | list["JsonValue"]
)


@runtime_checkable
class JsonConvertible(Protocol):
    """
    Capability of objects that supply their own JSON representation.

    ``to_json_value`` returns a plain value the writer knows how to emit;
    it is called once per object during serialization.
    """

    def to_json_value(self) -> Any: ...


@dataclass(frozen=True, slots=True)
class JsonNull:
    pass


@dataclass(frozen=True, slots=True)
class JsonBool:
    value: bool


@dataclass(frozen=True, slots=True)
class JsonInt:
    value: int


@dataclass(frozen=True, slots=True)
class JsonFloat:
    value: float


@dataclass(frozen=True, slots=True)
class JsonStr:
    value: str


@dataclass(frozen=True, slots=True)
class JsonArray:
    items: tuple["JsonNode", ...]


@dataclass(frozen=True, slots=True)
class JsonObject:
    """Object entries in source enumeration order; keys may repeat."""

    entries: tuple[tuple[str, "JsonNode"], ...]


JsonNode = (
    JsonNull
    | JsonBool
    | JsonInt
    | JsonFloat
    | JsonStr
    | JsonArray
    | JsonObject
)

_NODE_TYPES = (
    JsonNull,
    JsonBool,
    JsonInt,
    JsonFloat,
    JsonStr,
    JsonArray,
    JsonObject,
)
NON_ARRAY_TYPES = (str, bytes, bytearray, memoryview)
NULL = JsonNull()


def _array_node(items: Iterable[Any], type_name: str) -> JsonArray:
    nodes = []
    for index, item in enumerate(items):
        try:
            nodes.append(to_node(item))
        except WriteError as e:
            e.add_note(f"when serializing {type_name} item {index}")
            raise
    return JsonArray(tuple(nodes))


def _object_node(
    pairs: Iterable[tuple[Any, Any]], type_name: str
) -> JsonObject:
    entries = []
    for key, value in pairs:
        if not isinstance(key, str):
            msg = f"keys must be str, not {type(key).__name__}"
            raise WriteError(WriteErrorKind.NON_STRING_KEY, msg)
        try:
            entries.append((key, to_node(value)))
        except WriteError as e:
            e.add_note(f"when serializing {type_name} item {key!r}")
            raise
    return JsonObject(tuple(entries))


def float_node(value: float) -> JsonFloat:
    if math.isnan(value) or math.isinf(value):
        msg = "Out of range float values are not JSON compliant"
        raise WriteError(WriteErrorKind.NON_FINITE_FLOAT, msg)
    return JsonFloat(value)


def to_node(obj: Any) -> JsonNode:  # noqa: PLR0911
    """
    Converts an arbitrary Python value into a ``JsonNode`` tree.

    The first matching shape wins: convertible objects, existing nodes,
    ``None``, ``str``, ``bool``, integral numbers, enums with an integral
    value, real and decimal numbers, mappings with ``str`` keys, items views
    such as ``dict.items()`` and finally any other iterable as an array.
    A sequence of pairs is an array of arrays; only an items view is read
    as object entries.
    ``bool`` is tested before integers because it is an ``int`` subclass.
    """
    if isinstance(obj, JsonConvertible):
        obj = obj.to_json_value()

    if isinstance(obj, _NODE_TYPES):
        return obj
    elif obj is None:
        return NULL
    elif isinstance(obj, str):
        return JsonStr(obj)
    elif isinstance(obj, bool):
        return JsonBool(obj)
    elif isinstance(obj, numbers.Integral):
        return JsonInt(int(obj))
    elif isinstance(obj, enum.Enum):
        if isinstance(obj.value, numbers.Integral) and not isinstance(
            obj.value, bool
        ):
            return JsonInt(int(obj.value))
        msg = f"enum member {obj!r} has no integer value"
        raise WriteError(WriteErrorKind.UNSUPPORTED_TYPE, msg)
    elif isinstance(obj, numbers.Real | decimal.Decimal):
        return float_node(float(obj))
    elif isinstance(obj, Mapping):
        return _object_node(obj.items(), type(obj).__name__)
    elif isinstance(obj, ItemsView):
        return _object_node(obj, type(obj).__name__)
    elif isinstance(obj, Iterable) and not isinstance(obj, NON_ARRAY_TYPES):
        return _array_node(obj, type(obj).__name__)
    else:
        msg = f"Object of type {type(obj).__name__} is not JSON serializable"
        raise WriteError(WriteErrorKind.UNSUPPORTED_TYPE, msg)
