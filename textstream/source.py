from __future__ import annotations

import io
import logging

from abc import ABC, abstractmethod
from enum import Enum
from typing import Iterator, Optional

from textstream.config import Config, default_config
from textstream.errors import ClosedResource, EndOfData, ParseError
from textstream.scanner import scan
from textstream.token import Token
from textstream.tokenizer import SplitRule

logger = logging.getLogger("textstream.source")

# Characters allowed in a base-10 integer after the whitespace is trimmed.
_DIGITS = frozenset("0123456789")


class StreamingMode(Enum):
    """How a bulk read treats the current position of the source."""

    REWINDABLE = "rewindable"
    DRAINING = "draining"
    FORWARD_ONLY = "forward-only"
    NULL_SINK = "null-sink"


def parse_decimal(text: str) -> int:
    """Parse trimmed text as a base-10 integer with an optional sign.

    Unlike `int()`, underscores and non-ASCII digits are rejected.
    """
    digits = text[1:] if text[:1] in ("+", "-") else text
    if not digits or not set(digits) <= _DIGITS:
        raise ParseError(text)
    return int(text, 10)


class TextSource(ABC):
    """Text operations over a byte source.

    Subclasses supply the primitive byte operations (`read_chunk`,
    `_readinto`, `_write`, `unread`, `_close`) and pick a `mode`; every
    text operation is implemented here once on top of them.

    At most one line or word scan is active at a time. Any other
    operation on the source ends it first, which hands its read-ahead
    back, so the operation sees the data right after the last token
    that was delivered.
    """

    mode: StreamingMode
    name: str = "<source>"

    def __init__(self, config: Optional[Config] = None):
        self.config = default_config() if config is None else config
        self._production: Optional[Iterator[Token]] = None

    # Primitives

    @property
    @abstractmethod
    def closed(self) -> bool:
        ...

    @abstractmethod
    def read_chunk(self, size: int) -> bytes:
        """Read at most `size` bytes; an empty result means end of data."""

    @abstractmethod
    def _readinto(self, b: memoryview) -> int:
        ...

    @abstractmethod
    def _write(self, data: bytes | bytearray | memoryview) -> int:
        ...

    @abstractmethod
    def unread(self, data: bytes) -> None:
        """Give back bytes that were read but not consumed."""

    @abstractmethod
    def _close(self) -> None:
        ...

    def _rewind(self) -> None:
        raise io.UnsupportedOperation(f"{self.name} cannot rewind")

    def _settle(self) -> None:
        """End the active scan, if any."""
        production, self._production = self._production, None
        if production is not None:
            production.close()

    def readinto(self, b: bytearray | memoryview) -> int:
        self._settle()
        return self._readinto(memoryview(b).cast("B"))

    def write(self, data: bytes | bytearray | memoryview) -> int:
        self._settle()
        return self._write(data)

    def read(self, size: int = -1) -> bytes:
        """Read up to `size` bytes, or everything that remains."""
        self._settle()
        if size is not None and size >= 0:
            return self.read_chunk(size)
        chunks = []
        bufsize = self.config.bufsize
        while True:
            data = self.read_chunk(bufsize)
            if not data:
                break
            chunks.append(data)
        return b"".join(chunks)

    def rewind(self) -> None:
        """Move to the start of the data, if the backend can do that."""
        self._settle()
        self._rewind()

    def close(self) -> None:
        logger.debug("closing %s", self.name)
        self._settle()
        self._close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    # Writing

    def write_string(self, s: str) -> int:
        return self.write(s.encode("utf-8"))

    def write_rune(self, r: str | int) -> int:
        """Write a single code point, encoded as UTF-8."""
        if isinstance(r, int):
            if not 0 <= r <= 0x10FFFF:
                raise ValueError(f"invalid code point: {r:#x}")
            r = chr(r)
        elif len(r) != 1:
            raise ValueError(f"expected a single character, got {r!r}")
        if 0xD800 <= ord(r) <= 0xDFFF:
            raise ValueError(f"surrogate code point: {ord(r):#x}")
        return self.write_string(r)

    # Reading

    def _prepare_bulk_read(self) -> bool:
        """Apply the streaming mode before a bulk read.

        Returns False when the read must report no data at all.
        """
        self._settle()
        if self.closed:
            raise ClosedResource(self.name)
        if self.mode is StreamingMode.NULL_SINK:
            return False
        if self.mode is StreamingMode.REWINDABLE:
            self.rewind()
        return True

    def _scan(self, rule: SplitRule) -> Iterator[Token]:
        self._settle()
        if self.closed:
            raise ClosedResource(self.name)
        if self.mode is StreamingMode.NULL_SINK:
            return iter(())
        self._production = scan(self, rule, self.config)
        return self._production

    def read_lines(self) -> Iterator[Token]:
        """Return a lazy iterator over the remaining lines."""
        return self._scan(SplitRule.LINES)

    def read_words(self) -> Iterator[Token]:
        """Return a lazy iterator over the remaining words."""
        return self._scan(SplitRule.WORDS)

    def read_line(self) -> Token:
        """Return the next line.

        Raises:
            EndOfData: There are no lines left.
        """
        lines = self.read_lines()
        try:
            return next(lines)
        except StopIteration:
            raise EndOfData from None
        finally:
            close = getattr(lines, "close", None)
            if close is not None:
                close()

    def string(self) -> str:
        if not self._prepare_bulk_read():
            return ""
        return self.read().decode("utf-8", self.config.errors)

    def strings(self) -> list[str]:
        if not self._prepare_bulk_read():
            return []
        return [str(line) for line in scan(self, SplitRule.LINES,
                                           self.config)]

    def trimmed_string(self) -> str:
        return self.string().strip()

    def parse_int(self) -> int:
        """Return the remaining data as an integer.

        Raises:
            EndOfData: The source never delivers data.
            ParseError: The trimmed text is not a base-10 integer.
        """
        if self.mode is StreamingMode.NULL_SINK and not self.closed:
            raise EndOfData
        return parse_decimal(self.trimmed_string())

    def __iter__(self) -> Iterator[Token]:
        return self.read_lines()

    def __repr__(self):
        state = "closed" if self.closed else self.mode.value
        return f"<{type(self).__name__} {self.name} ({state})>"
