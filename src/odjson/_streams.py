"""
Scoped acquisition of the streams ``load`` and ``dump`` work on.

Text streams are used as given. Byte streams get a strict UTF-8 text layer
without newline translation. A byte order mark is skipped when reading and
never written that is detached when the
scope ends, so the only thing ever closed is the caller's own stream, and
only when ``leave_open`` is false.
"""

import io
import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import IO
from typing import Any

logger = logging.getLogger(__name__)

ENCODING = "utf-8"
# Decodes like utf-8 but drops a leading byte order mark
SOURCE_ENCODING = "utf-8-sig"


def is_binary(fp: Any) -> bool:
    """True for byte streams, judged by io base class or ``mode``."""
    if isinstance(fp, io.TextIOBase):
        return False
    if isinstance(fp, io.RawIOBase | io.BufferedIOBase):
        return True
    return "b" in getattr(fp, "mode", "")


def _release(fp: Any, leave_open: bool) -> None:
    if leave_open:
        logger.debug("leaving %s open for the caller", type(fp).__name__)
        return
    close = getattr(fp, "close", None)
    if close is not None:
        logger.debug("closing %s", type(fp).__name__)
        close()


def _utf8_layer(fp: Any, encoding: str) -> io.TextIOWrapper:
    return io.TextIOWrapper(fp, encoding=encoding, errors="strict", newline="")


@contextmanager
def text_source(fp: Any, *, leave_open: bool = False) -> Iterator[IO[str]]:
    """Yields a text stream to read JSON from, releasing ``fp`` on exit."""
    if not hasattr(fp, "read"):
        raise TypeError("fp must have a read() method")
    try:
        if is_binary(fp):
            reader = _utf8_layer(fp, SOURCE_ENCODING)
            try:
                yield reader
            finally:
                reader.detach()
        else:
            yield fp
    finally:
        _release(fp, leave_open)


@contextmanager
def text_sink(fp: Any, *, leave_open: bool = False) -> Iterator[IO[str]]:
    """Yields a text stream to write JSON to, releasing ``fp`` on exit."""
    if not hasattr(fp, "write"):
        raise TypeError("fp must have a write() method")
    try:
        if is_binary(fp):
            writer = _utf8_layer(fp, ENCODING)
            try:
                yield writer
            finally:
                # Detaching flushes pending text into fp
                writer.detach()
        else:
            yield fp
    finally:
        _release(fp, leave_open)
