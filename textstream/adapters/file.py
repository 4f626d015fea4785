from __future__ import annotations

import io
import logging

from os import PathLike
from typing import BinaryIO, Optional

from textstream.config import Config
from textstream.errors import ClosedResource, RewindFailure
from textstream.source import StreamingMode, TextSource

logger = logging.getLogger("textstream.adapters")


class TextFile(TextSource):
    """Text operations over a seekable binary file.

    `string`, `strings`, `trimmed_string` and `parse_int` always start
    from the beginning of the file. Line and word iteration continue
    from the current position.
    """

    mode = StreamingMode.REWINDABLE

    def __init__(self, file: BinaryIO, config: Optional[Config] = None):
        super().__init__(config)
        if isinstance(file, io.TextIOBase):
            raise TypeError("TextFile needs a file opened in binary mode")
        self.file = file
        self.name = str(getattr(file, 'name', '<file>'))

    @classmethod
    def open(cls,
             path: str | PathLike[str],
             mode: str = "r+b",
             config: Optional[Config] = None) -> TextFile:
        if 'b' not in mode:
            mode += 'b'
        return cls(open(path, mode), config)

    @property
    def closed(self) -> bool:
        return self.file.closed

    def _rewind(self) -> None:
        """Move the read/write position to the start of the file.

        Raises:
            RewindFailure: The file cannot be repositioned.
        """
        if self.file.closed:
            raise RewindFailure(self.name, ClosedResource(self.name))
        try:
            self.file.seek(0, io.SEEK_SET)
        except (OSError, ValueError) as e:
            logger.warning("unable to rewind %s: %s", self.name, e)
            raise RewindFailure(self.name, e) from e

    def _check_open(self):
        if self.file.closed:
            raise ClosedResource(self.name)

    def read_chunk(self, size: int) -> bytes:
        self._check_open()
        return self.file.read(size) or b""

    def _readinto(self, b: memoryview) -> int:
        self._check_open()
        return self.file.readinto(b) or 0

    def _write(self, data) -> int:
        self._check_open()
        return self.file.write(data)

    def unread(self, data: bytes) -> None:
        self._check_open()
        self.file.seek(-len(data), io.SEEK_CUR)

    def flush(self) -> None:
        self._check_open()
        self.file.flush()

    def _close(self) -> None:
        self.file.close()
