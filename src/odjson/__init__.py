"""
Strict JSON codec with an order-preserving, duplicate-tolerant object type.

Parsing is a single-pass recursive descent over strings, text streams or
UTF-8 byte streams, with pluggable array and object construction. Writing
always produces compact JSON and keeps the ``int``/``float`` distinction
across a round trip: ``1`` stays an integer and ``1.0`` stays a float.
"""

import dataclasses
import logging
from typing import IO
from typing import Any

from ._builders import ArrayBuilder
from ._builders import DictBuilder
from ._builders import as_dict
from ._builders import as_immutable
from ._builders import as_immutable_sorted
from ._builders import as_list
from ._builders import as_ordered
from ._builders import as_sorted
from ._builders import as_tuple
from ._coerce import as_json_array
from ._coerce import as_json_dict
from ._coerce import to_json_values
from ._errors import DuplicateKeyError
from ._errors import JsonError
from ._errors import ParseError
from ._errors import ParseErrorKind
from ._errors import WriteError
from ._errors import WriteErrorKind
from ._ordered import OrderedJsonDict
from ._profile import HotPathStats
from ._profile import clear_hot_path_stats
from ._profile import get_hot_path_stats
from ._reader import JsonCursor
from ._reader import JsonParser
from ._reader import ParseConfig
from ._reader import parse_source
from ._streams import text_sink
from ._streams import text_source
from ._value import JsonConvertible
from ._value import JsonNode
from ._value import JsonValue
from ._value import to_node
from ._writer import JsonWriter
from ._writer import encode

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())


def _resolve_config(
    config: ParseConfig | None,
    array_builder: ArrayBuilder | None,
    dict_builder: DictBuilder | None,
) -> ParseConfig:
    config = config if config is not None else ParseConfig()
    overrides: dict[str, Any] = {}
    if array_builder is not None:
        overrides["array_builder"] = array_builder
    if dict_builder is not None:
        overrides["dict_builder"] = dict_builder
    return dataclasses.replace(config, **overrides) if overrides else config


def loads(
    s: str,
    *,
    array_builder: ArrayBuilder | None = None,
    dict_builder: DictBuilder | None = None,
    config: ParseConfig | None = None,
) -> Any:
    """
    Parses a JSON document held in a string.

    Arrays become lists and objects ``OrderedJsonDict`` unless other
    builders are given, directly or through ``config``.
    """
    if not isinstance(s, str):
        raise TypeError(
            f"the JSON object must be str, not {type(s).__name__}"
        )

    config = _resolve_config(config, array_builder, dict_builder)
    return parse_source(s, config)


def load(
    fp: IO[str] | IO[bytes],
    *,
    leave_open: bool = False,
    array_builder: ArrayBuilder | None = None,
    dict_builder: DictBuilder | None = None,
    config: ParseConfig | None = None,
) -> Any:
    """
    Parses a JSON document from a text or UTF-8 byte stream.

    A leading byte order mark on a byte stream is skipped. The stream is
    closed afterwards, on success and on error, unless ``leave_open`` is
    true.
    """
    config = _resolve_config(config, array_builder, dict_builder)
    with text_source(fp, leave_open=leave_open) as source:
        return parse_source(source, config)


def dumps(obj: Any) -> str:
    """Serializes ``obj`` to a compact JSON string."""
    return encode(obj)


def dump(
    obj: Any, fp: IO[str] | IO[bytes], *, leave_open: bool = False
) -> None:
    """
    Serializes ``obj`` to a text or byte stream; bytes are UTF-8, no BOM.

    The stream is closed afterwards unless ``leave_open`` is true.
    """
    with text_sink(fp, leave_open=leave_open) as sink:
        JsonWriter(sink.write).write_value(obj)


__all__ = [
    "ArrayBuilder",
    "DictBuilder",
    "DuplicateKeyError",
    "HotPathStats",
    "JsonConvertible",
    "JsonCursor",
    "JsonError",
    "JsonNode",
    "JsonParser",
    "JsonValue",
    "JsonWriter",
    "OrderedJsonDict",
    "ParseConfig",
    "ParseError",
    "ParseErrorKind",
    "WriteError",
    "WriteErrorKind",
    "as_dict",
    "as_immutable",
    "as_immutable_sorted",
    "as_json_array",
    "as_json_dict",
    "as_list",
    "as_ordered",
    "as_sorted",
    "as_tuple",
    "clear_hot_path_stats",
    "dump",
    "dumps",
    "get_hot_path_stats",
    "load",
    "loads",
    "to_json_values",
    "to_node",
]
