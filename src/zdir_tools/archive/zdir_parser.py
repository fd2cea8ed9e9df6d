"""Parser for ZDIR directory files.

A ZDIR file is a flat table of fixed-width little-endian records, one per
file packed into the companion ZZDATA archive.  There is no header: the
record count is the file size divided by the record width.

Two layouts exist:
  canonical (12 bytes)  name_hash, local_offset, size
  extended  (24 bytes)  name_hash, archive_id, local_offset,
                        total_offset, size, checksum

``local_offset`` is a 2048-byte block index, not a byte offset.
"""

from __future__ import annotations

import enum
import struct
from dataclasses import dataclass
from pathlib import Path

from zdir_tools.constants import BLOCK_SHIFT, CANONICAL_RECORD_SIZE, EXTENDED_RECORD_SIZE

# struct formats (little-endian)
_CANONICAL_FMT = "<III"
_EXTENDED_FMT = "<IIIIII"


class InvalidFormatError(ValueError):
    """The directory file size does not fit the expected record width."""


class RecordFormat(enum.Enum):
    CANONICAL = CANONICAL_RECORD_SIZE
    EXTENDED = EXTENDED_RECORD_SIZE

    @property
    def record_size(self) -> int:
        return self.value


@dataclass(frozen=True, slots=True)
class DirectoryRecord:
    name_hash: int
    local_offset: int  # block index
    size: int

    @property
    def byte_offset(self) -> int:
        return self.local_offset << BLOCK_SHIFT


@dataclass(frozen=True, slots=True)
class ExtendedDirectoryRecord:
    name_hash: int
    archive_id: int
    local_offset: int
    total_offset: int
    size: int
    checksum: int

    @property
    def byte_offset(self) -> int:
        return self.local_offset << BLOCK_SHIFT


AnyDirectoryRecord = DirectoryRecord | ExtendedDirectoryRecord


def detect_record_format(size: int) -> RecordFormat:
    """Pick the record layout consistent with a directory of *size* bytes.

    Every multiple of 24 is also a multiple of 12; the extended layout wins
    that tie.
    """
    if size % EXTENDED_RECORD_SIZE == 0:
        return RecordFormat.EXTENDED
    if size % CANONICAL_RECORD_SIZE == 0:
        return RecordFormat.CANONICAL
    raise InvalidFormatError(f"invalid ZDIR file size: {size} bytes")


def detect_directory_format(file_path: str | Path) -> RecordFormat:
    return detect_record_format(Path(file_path).stat().st_size)


def record_count(size: int, record_format: RecordFormat = RecordFormat.CANONICAL) -> int:
    """Number of records in a directory of *size* bytes."""
    width = record_format.record_size
    if size % width != 0:
        raise InvalidFormatError(
            f"invalid header file size: {size} bytes is not a multiple of {width}"
        )
    return size // width


def parse_directory(
    data: bytes, record_format: RecordFormat = RecordFormat.CANONICAL
) -> list[AnyDirectoryRecord]:
    """Decode raw directory bytes into records, preserving file order."""
    count = record_count(len(data), record_format)
    records: list[AnyDirectoryRecord] = []
    if record_format is RecordFormat.EXTENDED:
        for i in range(count):
            name_hash, archive_id, local, total, size, checksum = struct.unpack_from(
                _EXTENDED_FMT, data, i * EXTENDED_RECORD_SIZE
            )
            records.append(
                ExtendedDirectoryRecord(
                    name_hash=name_hash,
                    archive_id=archive_id,
                    local_offset=local,
                    total_offset=total,
                    size=size,
                    checksum=checksum,
                )
            )
    else:
        for i in range(count):
            name_hash, local, size = struct.unpack_from(
                _CANONICAL_FMT, data, i * CANONICAL_RECORD_SIZE
            )
            records.append(DirectoryRecord(name_hash=name_hash, local_offset=local, size=size))
    return records


def read_directory(
    file_path: str | Path, record_format: RecordFormat = RecordFormat.CANONICAL
) -> list[AnyDirectoryRecord]:
    """Read a ZDIR file from disk.

    The size is validated before any record bytes are read.

    Raises:
        InvalidFormatError: If the size is not a multiple of the record width.
        OSError: If the file cannot be opened or read in full.
    """
    file_path = Path(file_path)
    with file_path.open("rb") as f:
        size = file_path.stat().st_size
        record_count(size, record_format)
        data = f.read(size)
    if len(data) < size:
        raise OSError(f"read headers: got {len(data)} of {size} bytes from {file_path}")
    return parse_directory(data, record_format)
