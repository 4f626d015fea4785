from __future__ import annotations

from typing import Callable, Optional

from textstream.config import Config
from textstream.errors import ClosedResource
from textstream.source import StreamingMode, TextSource


class ClosedLatch:
    """One-way Open -> Closed state shared by the null devices."""

    def __init__(self, name: str):
        self.name = name
        self.closed = False

    def close(self) -> None:
        self.closed = True

    def check(self) -> None:
        if self.closed:
            raise ClosedResource(self.name)


def read_nothing(b: memoryview) -> int:
    return 0


def read_zeros(b: memoryview) -> int:
    b[:] = bytes(len(b))
    return len(b)


class NullDevice(TextSource):
    """Emulation of /dev/null and /dev/zero.

    Writes succeed and discard everything until the device is closed.
    What a read delivers depends on `read_strategy`, which fills the
    given buffer and returns the number of bytes delivered. Text
    operations never see any data: nothing that can be read is text.
    """

    mode = StreamingMode.NULL_SINK

    def __init__(self,
                 read_strategy: Callable[[memoryview], int] = read_nothing,
                 name: str = "/dev/null",
                 config: Optional[Config] = None):
        super().__init__(config)
        self.name = name
        self.latch = ClosedLatch(name)
        self.read_strategy = read_strategy

    @classmethod
    def null(cls, config: Optional[Config] = None) -> NullDevice:
        return cls(read_nothing, "/dev/null", config)

    @classmethod
    def zero(cls, config: Optional[Config] = None) -> NullDevice:
        return cls(read_zeros, "/dev/zero", config)

    @property
    def closed(self) -> bool:
        return self.latch.closed

    def _readinto(self, b: memoryview) -> int:
        self.latch.check()
        return self.read_strategy(b)

    def read_chunk(self, size: int) -> bytes:
        self.latch.check()
        buf = bytearray(size)
        n = self.read_strategy(memoryview(buf))
        return bytes(buf[:n])

    def read(self, size: int = -1) -> bytes:
        self._settle()
        if size is None or size < 0:
            self.latch.check()
            if self.read_strategy is not read_nothing:
                raise ValueError(f"unbounded read from {self.name}")
            return b""
        return self.read_chunk(size)

    def _write(self, data) -> int:
        self.latch.check()
        return len(memoryview(data).cast("B"))

    def unread(self, data: bytes) -> None:
        self.latch.check()

    def _close(self) -> None:
        self.latch.close()
