"""Exception types raised by the parser and the writer."""

from enum import Enum

type Position = int


class ParseErrorKind(Enum):
    """Classifies grammar violations reported by the parser."""

    UNEXPECTED_END = "unexpected_end"
    UNEXPECTED_CHARACTER = "unexpected_character"
    INVALID_ESCAPE = "invalid_escape"
    INVALID_UNICODE_ESCAPE = "invalid_unicode_escape"
    NUMBER_OVERFLOW = "number_overflow"
    TRAILING_COMMA = "trailing_comma"
    MISSING_SEPARATOR = "missing_separator"
    MISSING_COLON = "missing_colon"
    UNTERMINATED_STRING = "unterminated_string"
    EXTRA_DATA = "extra_data"


class WriteErrorKind(Enum):
    """Classifies values the writer refuses to emit."""

    UNSUPPORTED_TYPE = "unsupported_type"
    NON_STRING_KEY = "non_string_key"
    NON_FINITE_FLOAT = "non_finite_float"


class JsonError(Exception):
    """Base class for every error raised by odjson."""


class ParseError(JsonError, ValueError):
    """
    Reports the first grammar violation found in the input.

    Carries the character offset at which the failure was detected plus the
    line and column derived from it, so callers can point at the bad input
    even when it came from a stream that is no longer available.
    """

    def __init__(
        self,
        kind: ParseErrorKind,
        msg: str,
        pos: Position = 0,
        lineno: int = 1,
        colno: int = 1,
    ) -> None:
        if not isinstance(msg, str):
            raise TypeError("msg must be a string")
        if not isinstance(pos, int) or pos < 0:
            raise ValueError("pos must be a non-negative integer")

        self.kind = kind
        self.msg = msg
        self.pos = pos
        self.lineno = lineno
        self.colno = colno

        super().__init__(
            f"{msg} at line {lineno}, column {colno} (char {pos})"
        )


class WriteError(JsonError, TypeError):
    """Raised when a value has no JSON representation."""

    def __init__(self, kind: WriteErrorKind, msg: str) -> None:
        self.kind = kind
        self.msg = msg
        super().__init__(msg)


class DuplicateKeyError(JsonError, ValueError):
    """Raised by dict builders that require every key to be unique."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"duplicate key {key!r} in JSON object")
