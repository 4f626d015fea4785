from textstream.adapters.buffer import TextBuffer
from textstream.adapters.file import TextFile
from textstream.adapters.null import NullDevice, ClosedLatch
from textstream.adapters.stream import TextStream

__all__ = [
    "TextBuffer",
    "TextFile",
    "NullDevice",
    "ClosedLatch",
    "TextStream",
]
