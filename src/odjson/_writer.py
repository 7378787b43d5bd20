"""
Compact JSON emission.

``JsonWriter`` converts a value to a ``JsonNode`` tree once and then emits
it through a ``write`` callable, so the same code serves ``dumps`` (list
append) and ``dump`` (a stream's ``write``).
"""

import re
from collections.abc import Callable
from typing import Any
from typing import assert_never

from ._profile import ProfileContext
from ._value import JsonArray
from ._value import JsonBool
from ._value import JsonFloat
from ._value import JsonInt
from ._value import JsonNode
from ._value import JsonNull
from ._value import JsonObject
from ._value import JsonStr
from ._value import float_node
from ._value import to_node

_ESCAPE_PATTERN = re.compile(r'["\\\x00-\x1f]')
_ESCAPES = {chr(code): f"\\u{code:04X}" for code in range(0x20)}
_ESCAPES.update(
    {
        '"': '\\"',
        "\\": "\\\\",
        "\b": "\\b",
        "\f": "\\f",
        "\n": "\\n",
        "\r": "\\r",
        "\t": "\\t",
    }
)
_FLOAT_MARKERS = (".", "e", "E")


def _escape(match: re.Match[str]) -> str:
    return _ESCAPES[match.group()]


def _encode_string(s: str) -> str:
    """
    Quotes a string, escaping only what JSON requires.

    Non-ASCII text and surrogate halves pass through; encoding to bytes is
    the sink's business. Forward slash is not escaped.
    """
    return '"' + _ESCAPE_PATTERN.sub(_escape, s) + '"'


def _encode_int(n: int) -> str:
    return str(n)


def _encode_float(f: float) -> str:
    """
    Shortest round-trip text for ``f``, always marked as a float.

    ``.0`` is appended when the text would otherwise read back as an
    integer.
    """
    text = repr(float_node(f).value)
    if not any(marker in text for marker in _FLOAT_MARKERS):
        text += ".0"
    return text


class JsonWriter:
    """Writes values as compact JSON text through a ``write`` callable."""

    def __init__(self, write: Callable[[str], Any]) -> None:
        self._write = write

    def write_value(self, obj: Any) -> None:
        """Converts ``obj`` to nodes and emits it; raises ``WriteError``."""
        node = to_node(obj)
        with ProfileContext("write_value"):
            self.write_node(node)

    def write_node(self, node: JsonNode) -> None:  # noqa: PLR0912
        write = self._write
        if isinstance(node, JsonNull):
            write("null")
        elif isinstance(node, JsonBool):
            write("true" if node.value else "false")
        elif isinstance(node, JsonInt):
            write(_encode_int(node.value))
        elif isinstance(node, JsonFloat):
            write(_encode_float(node.value))
        elif isinstance(node, JsonStr):
            write(_encode_string(node.value))
        elif isinstance(node, JsonArray):
            write("[")
            for index, item in enumerate(node.items):
                if index:
                    write(",")
                self.write_node(item)
            write("]")
        elif isinstance(node, JsonObject):
            write("{")
            for index, (key, value) in enumerate(node.entries):
                if index:
                    write(",")
                write(_encode_string(key))
                write(":")
                self.write_node(value)
            write("}")
        else:
            assert_never(node)


def encode(obj: Any) -> str:
    """Serializes ``obj`` to a JSON string."""
    chunks: list[str] = []
    JsonWriter(chunks.append).write_value(obj)
    return "".join(chunks)
