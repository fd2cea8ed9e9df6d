"""Byte-range extraction from ZZDATA archives.

ZZDATA has no structure of its own; the directory supplies the offset and
length of every packed file.  Copies stream through a bounded buffer so a
large entry is never held in memory at once.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import BinaryIO

from zdir_tools.constants import COPY_BUFFER_SIZE, DIR_MODE

logger = logging.getLogger(__name__)


class ShortReadError(OSError):
    """The archive ended before the requested slice was fully copied."""

    def __init__(self, offset: int, expected: int, copied: int) -> None:
        self.offset = offset
        self.expected = expected
        self.copied = copied
        super().__init__(
            f"unexpected EOF: copied {copied} of {expected} bytes at offset {offset:#x}"
        )


class ArchiveReader:
    """Read-only handle on a ZZDATA archive.

    Keeps the archive open so many slices can be copied without reopening
    it for every entry.
    """

    def __init__(self, path: str | Path, buffer_size: int = COPY_BUFFER_SIZE) -> None:
        if buffer_size <= 0:
            raise ValueError(f"buffer_size must be positive, got {buffer_size}")
        self.path = Path(path)
        self._buffer_size = buffer_size
        self._fh: BinaryIO | None = self.path.open("rb")

    def copy_to(self, offset: int, length: int, dest: BinaryIO) -> int:
        """Stream *length* bytes starting at *offset* into *dest*.

        Returns the number of bytes written, which always equals *length*.
        """
        if offset < 0 or length < 0:
            raise ValueError(f"offset and length must be non-negative ({offset}, {length})")
        if self._fh is None:
            raise ValueError(f"archive is closed: {self.path}")

        self._fh.seek(offset)
        remaining = length
        buf = bytearray(min(self._buffer_size, length) or 1)
        view = memoryview(buf)
        while remaining > 0:
            want = min(remaining, len(buf))
            n = self._fh.readinto(view[:want])
            if not n:
                raise ShortReadError(offset, length, length - remaining)
            dest.write(view[:n])
            remaining -= n
        return length

    def extract(self, offset: int, length: int, dest_path: str | Path) -> int:
        """Copy a slice into a new file at *dest_path*, creating parent dirs.

        An existing file is truncated.  On failure the partially written
        file is left in place.
        """
        if offset < 0 or length < 0:
            raise ValueError(f"offset and length must be non-negative ({offset}, {length})")
        dest_path = Path(dest_path)
        os.makedirs(dest_path.parent, mode=DIR_MODE, exist_ok=True)
        with dest_path.open("wb") as out:
            written = self.copy_to(offset, length, out)
        logger.debug("Wrote %d bytes from %s@%#x to %s", written, self.path.name, offset, dest_path)
        return written

    def close(self) -> None:
        if self._fh is not None:
            self._fh.close()
            self._fh = None

    def __enter__(self) -> ArchiveReader:
        return self

    def __exit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        self.close()


def extract_slice(
    archive_path: str | Path,
    dest_path: str | Path,
    offset: int,
    length: int,
    buffer_size: int = COPY_BUFFER_SIZE,
) -> int:
    """Copy ``archive[offset:offset + length]`` into a new file.

    *offset* is a byte offset; block indices from the directory must be
    shifted by the caller.

    Raises:
        ShortReadError: If fewer than *length* bytes exist at *offset*.
        OSError: On open, create, seek or write failures.
    """
    with ArchiveReader(archive_path, buffer_size) as reader:
        return reader.extract(offset, length, dest_path)
