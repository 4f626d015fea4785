from __future__ import annotations

from typing import Optional

from textstream.config import Config
from textstream.errors import ClosedResource
from textstream.source import StreamingMode, TextSource


class TextBuffer(TextSource):
    """In-memory byte buffer with text operations.

    Writes append to the end; reads drain from the front. Data that was
    read is gone, so every bulk read returns only what is still unread.
    """

    mode = StreamingMode.DRAINING
    name = "<buffer>"

    def __init__(self,
                 initial: bytes | str = b"",
                 config: Optional[Config] = None):
        super().__init__(config)
        if isinstance(initial, str):
            initial = initial.encode("utf-8")
        self._data = bytearray(initial)
        self._offset = 0
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def __len__(self) -> int:
        self._settle()
        return len(self._data) - self._offset

    def getvalue(self) -> bytes:
        """Return the unread bytes without consuming them."""
        self._settle()
        return bytes(self._data[self._offset:])

    def reset(self) -> None:
        """Discard all data, read or not."""
        self._settle()
        self._check_open()
        self._data.clear()
        self._offset = 0

    def _check_open(self):
        if self._closed:
            raise ClosedResource(self.name)

    def read_chunk(self, size: int) -> bytes:
        self._check_open()
        start = self._offset
        end = min(start + size, len(self._data))
        self._offset = end
        data = bytes(self._data[start:end])
        self._compact()
        return data

    def _readinto(self, b: memoryview) -> int:
        data = self.read_chunk(len(b))
        b[:len(data)] = data
        return len(data)

    def _write(self, data) -> int:
        self._check_open()
        data = bytes(data)
        self._data += data
        return len(data)

    def unread(self, data: bytes) -> None:
        self._check_open()
        # the consumed prefix is dead data; the pushback takes its place
        self._data[:self._offset] = data
        self._offset = 0

    def _compact(self):
        if self._offset == len(self._data):
            self._data.clear()
            self._offset = 0

    def _close(self) -> None:
        self._closed = True
