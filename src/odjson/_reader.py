"""
Recursive-descent JSON parser over a buffered character cursor.

The parser reads already-decoded characters, one token of lookahead, no
backtracking. Container construction is delegated to the builders held by
``ParseConfig`` so the grammar code never knows what type it produces.
"""

import math
import re
from collections.abc import Iterator
from dataclasses import dataclass
from typing import IO
from typing import Any

from ._builders import ArrayBuilder
from ._builders import DictBuilder
from ._builders import as_list
from ._builders import as_ordered
from ._errors import ParseError
from ._errors import ParseErrorKind
from ._errors import Position
from ._profile import ProfileContext

_WHITESPACE = re.compile(r"[ \t\n\r]+")
_DIGITS = re.compile(r"[0-9]+")
_STRING_RUN = re.compile(r'[^"\\]+')
_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")
_ESCAPES = {
    '"': '"',
    "\\": "\\",
    "/": "/",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
}
_LITERALS: dict[str, tuple[str, Any]] = {
    "t": ("true", True),
    "f": ("false", False),
    "n": ("null", None),
}
_INT_WIDTHS = (8, 16, 32, 64)

type Mark = tuple[Position, int, int]


@dataclass(frozen=True)
class ParseConfig:
    """
    Configures JSON parsing with immutable settings.

    ``array_builder`` and ``dict_builder`` are the construction strategies
    for containers, ``int_bits`` the signed width integer literals must fit,
    and ``buffer_size`` how many characters are pulled from a stream per
    read.
    """

    array_builder: ArrayBuilder = as_list
    dict_builder: DictBuilder = as_ordered
    int_bits: int = 32
    buffer_size: int = 4096

    def __post_init__(self) -> None:
        if not callable(self.array_builder):
            raise TypeError("array builder must be callable")
        if not callable(self.dict_builder):
            raise TypeError("dict builder must be callable")
        if self.int_bits not in _INT_WIDTHS:
            raise ValueError(f"int_bits must be one of {_INT_WIDTHS}")
        if not isinstance(self.buffer_size, int) or self.buffer_size <= 0:
            raise ValueError("buffer_size must be a positive integer")

    @property
    def int_range(self) -> tuple[int, int]:
        bound = 1 << (self.int_bits - 1)
        return -bound, bound - 1


class JsonCursor:
    """
    Character cursor over a string or a text stream.

    Streams are pulled in ``buffer_size`` chunks; ``pos`` is the absolute
    character offset and ``lineno``/``colno`` follow it. An empty string
    from ``peek`` or ``advance`` means end of input.
    """

    def __init__(self, source: str | IO[str], buffer_size: int = 4096) -> None:
        self._stream: IO[str] | None
        if isinstance(source, str):
            self._buffer = source
            self._stream = None
        else:
            self._buffer = ""
            self._stream = source
        self._buffer_size = buffer_size
        self._index = 0
        self._offset = 0
        self._line_start = 0
        self.lineno = 1

    @property
    def pos(self) -> Position:
        return self._offset + self._index

    @property
    def colno(self) -> int:
        return self.pos - self._line_start + 1

    def mark(self) -> Mark:
        return self.pos, self.lineno, self.colno

    def _fill(self) -> bool:
        """Ensures a character is buffered; False at end of input."""
        if self._index < len(self._buffer):
            return True
        if self._stream is None:
            return False
        chunk = self._stream.read(self._buffer_size)
        if not chunk:
            self._stream = None
            return False
        self._offset += len(self._buffer)
        self._buffer = chunk
        self._index = 0
        return True

    def peek(self) -> str:
        """Returns current character without advancing."""
        return self._buffer[self._index] if self._fill() else ""

    def advance(self) -> str:
        """Returns current character and advances position."""
        char = self.peek()
        if char:
            self._index += 1
            if char == "\n":
                self.lineno += 1
                self._line_start = self.pos
        return char

    def skip_whitespace(self) -> None:
        """Skips JSON whitespace: space, tab, line feed, carriage return."""
        self.take_run(_WHITESPACE)

    def take_run(self, pattern: re.Pattern[str]) -> str:
        """Consumes the longest run matching ``pattern``, across refills."""
        parts = []
        while self._fill():
            match = pattern.match(self._buffer, self._index)
            if not match:
                break
            run = match.group()
            newlines = run.count("\n")
            if newlines:
                self.lineno += newlines
                self._line_start = self.pos + run.rfind("\n") + 1
            self._index = match.end()
            parts.append(run)
            if self._index < len(self._buffer):
                break
        return "".join(parts)


class JsonParser:
    """
    Recursive-descent parser producing one JSON value per ``parse`` call.

    Raises ``ParseError`` on the first grammar violation; there is no
    recovery and no partial result.
    """

    def __init__(self, cursor: JsonCursor, config: ParseConfig) -> None:
        self.cursor = cursor
        self.config = config
        self._int_min, self._int_max = config.int_range
        self._key_cache: dict[str, str] = {}

    def error(
        self, kind: ParseErrorKind, msg: str, at: Mark | None = None
    ) -> ParseError:
        pos, lineno, colno = at if at is not None else self.cursor.mark()
        return ParseError(kind, msg, pos, lineno, colno)

    def _unexpected(self, expected: str) -> ParseError:
        char = self.cursor.peek()
        if not char:
            return self.error(
                ParseErrorKind.UNEXPECTED_END,
                f"unexpected end of input, expected {expected}",
            )
        return self.error(
            ParseErrorKind.UNEXPECTED_CHARACTER,
            f"unexpected char {char!r}, expected {expected}",
        )

    def _expect(
        self,
        expected: str,
        kind: ParseErrorKind = ParseErrorKind.UNEXPECTED_CHARACTER,
    ) -> None:
        char = self.cursor.peek()
        if char != expected:
            if not char:
                raise self._unexpected(repr(expected))
            raise self.error(
                kind, f"expected {expected!r}, found {char!r}"
            )
        self.cursor.advance()

    def parse(self) -> Any:
        """Parses a complete document: one value, then only whitespace."""
        if self.cursor.peek() == "\ufeff":
            raise self.error(
                ParseErrorKind.UNEXPECTED_CHARACTER,
                "JSON input should not contain BOM (Byte Order Mark)",
            )
        value = self.parse_value()
        self.cursor.skip_whitespace()
        if self.cursor.peek():
            raise self.error(ParseErrorKind.EXTRA_DATA, "Extra data")
        return value

    def parse_value(self) -> Any:
        """Skips whitespace and parses any JSON value."""
        self.cursor.skip_whitespace()
        char = self.cursor.peek()
        if char == '"':
            return self.parse_string()
        elif char == "[":
            return self.parse_array()
        elif char == "{":
            return self.parse_object()
        elif char == "-" or "0" <= char <= "9":
            return self.parse_number()
        elif char in _LITERALS:
            word, value = _LITERALS[char]
            self._parse_literal(word)
            return value
        else:
            raise self._unexpected("a value")

    def _parse_literal(self, word: str) -> None:
        for expected in word:
            char = self.cursor.peek()
            if char != expected:
                if not char:
                    raise self._unexpected(f"literal {word!r}")
                raise self.error(
                    ParseErrorKind.UNEXPECTED_CHARACTER,
                    f"unexpected char {char!r} in literal {word!r}",
                )
            self.cursor.advance()

    # Numbers

    def _require_digits(self) -> str:
        digits = self.cursor.take_run(_DIGITS)
        if not digits:
            raise self._unexpected("a digit")
        return digits

    def parse_number(self) -> int | float:
        """
        Parses a number; its lexical form alone picks ``int`` or ``float``.

        Integers must fit the configured signed width. Overflow is an error,
        never a silent promotion to float.
        """
        start = self.cursor.mark()
        parts = []
        if self.cursor.peek() == "-":
            parts.append(self.cursor.advance())

        if self.cursor.peek() == "0":
            parts.append(self.cursor.advance())
            if "0" <= self.cursor.peek() <= "9":
                raise self.error(
                    ParseErrorKind.UNEXPECTED_CHARACTER,
                    "leading zeros are not allowed",
                )
        else:
            parts.append(self._require_digits())

        is_int = True
        if self.cursor.peek() == ".":
            is_int = False
            parts.append(self.cursor.advance())
            parts.append(self._require_digits())

        if self.cursor.peek() in ("e", "E"):
            is_int = False
            parts.append(self.cursor.advance())
            if self.cursor.peek() in ("+", "-"):
                parts.append(self.cursor.advance())
            parts.append(self._require_digits())

        literal = "".join(parts)
        with ProfileContext("parse_number", len(literal)):
            if is_int:
                return self._to_int(literal, start)
            return self._to_float(literal, start)

    def _to_int(self, literal: str, start: Mark) -> int:
        try:
            value = int(literal)
        except ValueError as e:
            # Python refuses int() on very long digit strings
            raise self.error(
                ParseErrorKind.NUMBER_OVERFLOW, "Number too large", start
            ) from e
        if not self._int_min <= value <= self._int_max:
            raise self.error(
                ParseErrorKind.NUMBER_OVERFLOW,
                f"integer {literal} does not fit in "
                f"{self.config.int_bits} bits",
                start,
            )
        return value

    def _to_float(self, literal: str, start: Mark) -> float:
        value = float(literal)
        if math.isinf(value):
            raise self.error(
                ParseErrorKind.NUMBER_OVERFLOW,
                f"number {literal} is out of float range",
                start,
            )
        return value

    # Strings

    def parse_string(self) -> str:
        """Parses a quoted string, decoding escape sequences."""
        start = self.cursor.mark()
        self._expect('"')
        parts = []
        with ProfileContext("parse_string"):
            while True:
                parts.append(self.cursor.take_run(_STRING_RUN))
                char = self.cursor.advance()
                if char == '"':
                    return "".join(parts)
                if not char:
                    raise self.error(
                        ParseErrorKind.UNTERMINATED_STRING,
                        "Unterminated string starting at",
                        start,
                    )
                parts.append(self._parse_escape(start))

    def _parse_escape(self, start: Mark) -> str:
        """Decodes the escape following a consumed backslash."""
        char = self.cursor.advance()
        if not char:
            raise self.error(
                ParseErrorKind.UNTERMINATED_STRING,
                "Unterminated string starting at",
                start,
            )
        if char == "u":
            return self._join_surrogates(self._read_hex4(start), start)
        try:
            return _ESCAPES[char]
        except KeyError:
            raise self.error(
                ParseErrorKind.INVALID_ESCAPE,
                f"Invalid escape sequence: \\{char}",
            ) from None

    def _read_hex4(self, start: Mark) -> int:
        digits = []
        for _ in range(4):
            char = self.cursor.advance()
            if not char:
                raise self.error(
                    ParseErrorKind.UNTERMINATED_STRING,
                    "Unterminated unicode escape in string starting at",
                    start,
                )
            if char not in _HEX_DIGITS:
                raise self.error(
                    ParseErrorKind.INVALID_UNICODE_ESCAPE,
                    f"Invalid unicode escape: expected hex digit, "
                    f"found {char!r}",
                )
            digits.append(char)
        return int("".join(digits), 16)

    def _join_surrogates(self, code: int, start: Mark) -> str:
        """
        Joins an escaped high surrogate with an escaped low one that follows.

        Lone or mismatched halves are returned unchanged.
        """
        if not 0xD800 <= code <= 0xDBFF or self.cursor.peek() != "\\":
            return chr(code)
        self.cursor.advance()
        if self.cursor.peek() != "u":
            return chr(code) + self._parse_escape(start)
        self.cursor.advance()
        low = self._read_hex4(start)
        if 0xDC00 <= low <= 0xDFFF:
            return chr(0x10000 + ((code - 0xD800) << 10) + (low - 0xDC00))
        return chr(code) + self._join_surrogates(low, start)

    # Containers

    def _end_of_sequence(self, close: str) -> bool:
        """
        Consumes the separator after a container element.

        Returns True when ``close`` ended the container and False when a
        comma announced another element.
        """
        self.cursor.skip_whitespace()
        char = self.cursor.peek()
        if char == close:
            self.cursor.advance()
            return True
        if char == ",":
            self.cursor.advance()
            self.cursor.skip_whitespace()
            if self.cursor.peek() == close:
                raise self.error(
                    ParseErrorKind.TRAILING_COMMA,
                    f"Illegal trailing comma before {close!r}",
                )
            return False
        if not char:
            raise self._unexpected(f"',' or {close!r}")
        raise self.error(
            ParseErrorKind.MISSING_SEPARATOR,
            f"Expecting ',' delimiter, found {char!r}",
        )

    def _array_items(self) -> Iterator[Any]:
        while True:
            yield self.parse_value()
            if self._end_of_sequence("]"):
                return

    def _object_items(self) -> Iterator[tuple[str, Any]]:
        while True:
            self.cursor.skip_whitespace()
            if self.cursor.peek() != '"':
                raise self._unexpected(
                    "property name enclosed in double quotes"
                )
            key = self.parse_string()
            key = self._key_cache.setdefault(key, key)
            self.cursor.skip_whitespace()
            self._expect(":", ParseErrorKind.MISSING_COLON)
            yield key, self.parse_value()
            if self._end_of_sequence("}"):
                return

    def parse_array(self) -> Any:
        """Parses an array and hands its elements to the array builder."""
        self._expect("[")
        self.cursor.skip_whitespace()
        if self.cursor.peek() == "]":
            self.cursor.advance()
            return self.config.array_builder(iter(()))
        items = self._array_items()
        result = self.config.array_builder(items)
        _drain(items)
        return result

    def parse_object(self) -> Any:
        """Parses an object and hands its pairs to the dict builder."""
        self._expect("{")
        self.cursor.skip_whitespace()
        if self.cursor.peek() == "}":
            self.cursor.advance()
            return self.config.dict_builder(iter(()))
        pairs = self._object_items()
        result = self.config.dict_builder(pairs)
        _drain(pairs)
        return result


def _drain(items: Iterator[Any]) -> None:
    """Finishes parsing whatever a builder left unconsumed."""
    for _ in items:
        pass


def parse_source(source: str | IO[str], config: ParseConfig) -> Any:
    """Parses one JSON document from a string or a text stream."""
    with ProfileContext("parse"):
        cursor = JsonCursor(source, config.buffer_size)
        return JsonParser(cursor, config).parse()
