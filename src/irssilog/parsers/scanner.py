"""Chunked, resumable reading of a log file into complete lines."""
from __future__ import annotations

import codecs
from pathlib import Path
from typing import BinaryIO


class ScanCursor:
    """Open file handle plus whatever has been read but not yet returned.

    Bytes are decoded incrementally, so a multi-byte character split across
    two reads is reassembled, and the text after the last newline is held back
    as ``remainder`` until the rest of its line arrives.
    """

    def __init__(self, handle: BinaryIO, chunk_size: int = 4096, encoding: str = "utf-8") -> None:
        self._handle = handle
        self.chunk_size = chunk_size
        self._decoder = codecs.getincrementaldecoder(encoding)(errors="replace")
        self.remainder = ""

    @classmethod
    def open(cls, path: str | Path, chunk_size: int = 4096, encoding: str = "utf-8") -> "ScanCursor":
        return cls(open(path, "rb"), chunk_size=chunk_size, encoding=encoding)

    @property
    def closed(self) -> bool:
        return self._handle.closed

    @property
    def offset(self) -> int:
        """Byte offset of the next read."""
        return self._handle.tell()

    def read_lines(self) -> list[str] | None:
        """Read one chunk and return the lines it completes.

        Returns ``None`` at end of input.
        """
        data = self._handle.read(self.chunk_size)
        if not data:
            return None
        *lines, self.remainder = (self.remainder + self._decoder.decode(data)).split("\n")
        return [line.rstrip("\r") for line in lines]

    def finish(self) -> str:
        """Return the unterminated final line, if any, and clear the buffer."""
        tail = (self.remainder + self._decoder.decode(b"", final=True)).rstrip("\r")
        self.remainder = ""
        return tail

    def close(self) -> None:
        self._handle.close()
