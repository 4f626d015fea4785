from __future__ import annotations

import re

from enum import Enum
from typing import Callable

from textstream.errors import TokenTooLong
from textstream.token import Token

# Byte sequences that decode to a character for which `str.isspace()`
# holds: ASCII whitespace and the UTF-8 encodings of the Unicode spaces.
SPACE = re.compile(
    rb"(?:[\t\n\v\f\r \x1c-\x1f]"
    rb"|\xc2[\x85\xa0]"
    rb"|\xe1\x9a\x80"
    rb"|\xe2\x80[\x80-\x8a\xa8\xa9\xaf]"
    rb"|\xe2\x81\x9f"
    rb"|\xe3\x80\x80)+"
)

DEFAULT_BUFSIZE = 4096
MAX_TOKEN_SIZE = 64 * 1024

# Bytes of a terminator that may trail a token before the terminator is
# complete: a "\r" awaiting its "\n", or the head of a multibyte space.
TERMINATOR_SLACK = 2


class SplitRule(Enum):
    LINES = "lines"
    WORDS = "words"


class Tokenizer:
    """
    Splits a byte source into a lazy sequence of tokens.

    The source is a callable `read(size) -> bytes` that returns an empty
    value at the end of data. Data is fetched in chunks of `bufsize` bytes
    only when the buffered bytes do not contain a complete token.

    `SplitRule.LINES` splits on `\\n` and drops a `\\r` preceding it; the
    empty segment after the final terminator is not a token.
    `SplitRule.WORDS` splits on whitespace runs and never produces empty
    tokens.
    """

    def __init__(self,
                 read: Callable[[int], bytes],
                 rule: SplitRule = SplitRule.LINES,
                 bufsize: int = DEFAULT_BUFSIZE,
                 max_token_size: int = MAX_TOKEN_SIZE,
                 errors: str = "strict"):
        if bufsize <= 0:
            raise ValueError(f"bufsize must be positive, got {bufsize}")
        if max_token_size <= 0:
            raise ValueError(
                f"max_token_size must be positive, got {max_token_size}")

        self.read = read
        self.rule = rule
        self.bufsize = bufsize
        self.max_token_size = max_token_size
        self.errors = errors

        self.buffer = bytearray()
        self.pointer = 0
        self.offset = 0
        self.count = 0
        self.eof = False

        if rule is SplitRule.LINES:
            self._next_span = self._next_line
        elif rule is SplitRule.WORDS:
            self._next_span = self._next_word
        else:
            raise ValueError(f"unknown split rule: {rule!r}")

    def __iter__(self) -> Tokenizer:
        return self

    def __next__(self) -> Token:
        span = self._next_span()
        if span is None:
            raise StopIteration
        start, end = span
        if end - start > self.max_token_size:
            raise TokenTooLong(self.max_token_size)
        data = bytes(self.buffer[start:end])
        token = Token(data.decode("utf-8", self.errors),
                      self.count,
                      self.offset + start,
                      self.offset + end)
        self.count += 1
        return token

    def leftover(self) -> bytes:
        """Return the bytes that were read ahead but not tokenized."""
        return bytes(self.buffer[self.pointer:])

    def _next_line(self) -> tuple[int, int] | None:
        while True:
            idx = self.buffer.find(b"\n", self.pointer)
            if idx >= 0:
                start, end = self.pointer, idx
                self.pointer = idx + 1
                break
            if self.eof:
                if self.pointer == len(self.buffer):
                    return None
                start, end = self.pointer, len(self.buffer)
                self.pointer = end
                break
            self.update()

        if end > start and self.buffer[end - 1] == 0x0D:
            end -= 1
        return start, end

    def _next_word(self) -> tuple[int, int] | None:
        while True:
            match = SPACE.search(self.buffer, self.pointer)
            if match is None:
                if self.eof:
                    if self.pointer == len(self.buffer):
                        return None
                    start, end = self.pointer, len(self.buffer)
                    self.pointer = end
                    return start, end
                self.update()
                continue
            if match.start() == self.pointer:
                self.pointer = match.end()
                continue
            start, end = self.pointer, match.start()
            self.pointer = match.end()
            return start, end

    def update(self) -> None:
        """Fetch the next chunk, dropping the consumed part of the buffer."""
        if self.eof:
            return
        pending = len(self.buffer) - self.pointer
        if pending > self.max_token_size + TERMINATOR_SLACK:
            raise TokenTooLong(self.max_token_size)

        del self.buffer[:self.pointer]
        self.offset += self.pointer
        self.pointer = 0

        data = self.read(self.bufsize)
        if data:
            self.buffer += data
        else:
            self.eof = True
