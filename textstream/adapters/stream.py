from __future__ import annotations

import io

from typing import Any, Optional

from textstream.config import Config
from textstream.errors import ClosedResource
from textstream.source import StreamingMode, TextSource


class TextStream(TextSource):
    """Text operations over any object with `read`, `write` and `close`.

    The stream is only ever read forward. Bytes that a line or word scan
    fetched but did not deliver are kept here and served before the next
    read from the wrapped stream.
    """

    mode = StreamingMode.FORWARD_ONLY

    def __init__(self,
                 stream: Any,
                 config: Optional[Config] = None,
                 closefd: bool = True):
        super().__init__(config)
        if not callable(getattr(stream, 'read', None)):
            raise TypeError(f"stream must be readable: {stream!r}")
        self.stream = stream
        self.name = str(getattr(stream, 'name', '<stream>'))
        self._pending = bytearray()
        self._closed = False
        self.closefd = closefd

    @property
    def closed(self) -> bool:
        return self._closed or bool(getattr(self.stream, 'closed', False))

    def _check_open(self):
        if self.closed:
            raise ClosedResource(self.name)

    def read_chunk(self, size: int) -> bytes:
        self._check_open()
        if self._pending:
            data = bytes(self._pending[:size])
            del self._pending[:size]
            return data
        try:
            data = self.stream.read(size)
        except BrokenPipeError as e:
            raise ClosedResource(self.name) from e
        if isinstance(data, str):
            data = data.encode("utf-8")
        return data or b""

    def _readinto(self, b: memoryview) -> int:
        data = self.read_chunk(len(b))
        b[:len(data)] = data
        return len(data)

    def _write(self, data) -> int:
        self._check_open()
        write = getattr(self.stream, 'write', None)
        if write is None:
            raise io.UnsupportedOperation(f"{self.name} is not writable")
        try:
            written = write(data)
        except BrokenPipeError as e:
            raise ClosedResource(self.name) from e
        return len(data) if written is None else written

    def unread(self, data: bytes) -> None:
        self._pending[:0] = data

    def _close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._pending.clear()
        close = getattr(self.stream, "close", None)
        if self.closefd and close is not None:
            close()
