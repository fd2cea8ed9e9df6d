from zdir_tools.archive.reader import ArchiveReader, ShortReadError, extract_slice
from zdir_tools.archive.zdir_parser import (
    AnyDirectoryRecord,
    DirectoryRecord,
    ExtendedDirectoryRecord,
    InvalidFormatError,
    RecordFormat,
    detect_directory_format,
    detect_record_format,
    parse_directory,
    read_directory,
    record_count,
)

__all__ = [
    "AnyDirectoryRecord",
    "ArchiveReader",
    "DirectoryRecord",
    "ExtendedDirectoryRecord",
    "InvalidFormatError",
    "RecordFormat",
    "ShortReadError",
    "detect_directory_format",
    "detect_record_format",
    "extract_slice",
    "parse_directory",
    "read_directory",
    "record_count",
]
