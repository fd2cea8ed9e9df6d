"""Tests for the ZDIR directory decoder and format detector."""

from __future__ import annotations

import struct

import pytest

from zdir_tools.archive.zdir_parser import (
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


def _pack(records: list[tuple[int, int, int]]) -> bytes:
    return b"".join(struct.pack("<III", *r) for r in records)


class TestRecordCount:
    @pytest.mark.parametrize("size", [0, 12, 24, 36, 12 * 1000])
    def test_multiples_of_twelve(self, size):
        assert record_count(size) == size // 12

    @pytest.mark.parametrize("size", [1, 11, 13, 25, 100])
    def test_non_multiples_raise(self, size):
        with pytest.raises(InvalidFormatError, match="invalid header file size"):
            record_count(size)

    def test_extended_width(self):
        assert record_count(48, RecordFormat.EXTENDED) == 2
        with pytest.raises(InvalidFormatError):
            record_count(36, RecordFormat.EXTENDED)


class TestParseDirectory:
    def test_fields_in_declaration_order(self):
        records = parse_directory(struct.pack("<III", 0xDEADBEEF, 0x2A, 16))
        assert records == [DirectoryRecord(name_hash=0xDEADBEEF, local_offset=0x2A, size=16)]

    def test_little_endian(self):
        data = bytes([0x01, 0x02, 0x03, 0x04]) + b"\x00" * 8
        assert parse_directory(data)[0].name_hash == 0x04030201

    def test_preserves_file_order(self):
        raw = [(3, 30, 300), (1, 10, 100), (2, 20, 200)]
        records = parse_directory(_pack(raw))
        assert [(r.name_hash, r.local_offset, r.size) for r in records] == raw

    def test_full_unsigned_range(self):
        records = parse_directory(_pack([(0xFFFFFFFF, 0xFFFFFFFF, 0xFFFFFFFF)]))
        assert records[0].name_hash == 0xFFFFFFFF
        assert records[0].size == 0xFFFFFFFF

    def test_byte_offset_is_block_shifted(self):
        record = parse_directory(_pack([(0, 3, 1)]))[0]
        assert record.byte_offset == 3 * 2048

    def test_extended_layout(self):
        data = struct.pack("<IIIIII", 0xABCD, 2, 5, 77, 128, 0x1234)
        records = parse_directory(data, RecordFormat.EXTENDED)
        assert records == [
            ExtendedDirectoryRecord(
                name_hash=0xABCD,
                archive_id=2,
                local_offset=5,
                total_offset=77,
                size=128,
                checksum=0x1234,
            )
        ]
        assert records[0].byte_offset == 5 << 11

    def test_records_are_immutable(self):
        record = parse_directory(_pack([(1, 2, 3)]))[0]
        with pytest.raises(AttributeError):
            record.size = 99  # type: ignore[misc]


class TestReadDirectory:
    def test_record_count_from_file_size(self, tmp_path):
        zdir = tmp_path / "ZDIR"
        zdir.write_bytes(_pack([(i, i, i) for i in range(7)]))
        assert len(read_directory(zdir)) == 7

    def test_empty_file(self, tmp_path):
        zdir = tmp_path / "ZDIR"
        zdir.write_bytes(b"")
        assert read_directory(zdir) == []

    def test_thirteen_bytes_is_invalid(self, tmp_path):
        zdir = tmp_path / "ZDIR"
        zdir.write_bytes(b"\x00" * 13)
        with pytest.raises(InvalidFormatError):
            read_directory(zdir)

    def test_nonexistent_file_raises(self):
        with pytest.raises(FileNotFoundError):
            read_directory("/nonexistent/path/ZDIR")

    def test_deterministic_across_calls(self, tmp_path):
        zdir = tmp_path / "ZDIR"
        zdir.write_bytes(_pack([(0xCAFE, 1, 2), (0xBEEF, 3, 4)]))
        assert read_directory(zdir) == read_directory(zdir)


class TestDetectRecordFormat:
    def test_multiple_of_24_prefers_extended(self):
        assert detect_record_format(48) is RecordFormat.EXTENDED

    def test_odd_multiple_of_12_is_canonical(self):
        assert detect_record_format(36) is RecordFormat.CANONICAL

    def test_zero_prefers_extended(self):
        assert detect_record_format(0) is RecordFormat.EXTENDED

    def test_neither_raises(self):
        with pytest.raises(InvalidFormatError, match="invalid ZDIR file size"):
            detect_record_format(13)

    def test_record_size_property(self):
        assert RecordFormat.CANONICAL.record_size == 12
        assert RecordFormat.EXTENDED.record_size == 24

    def test_detect_from_file(self, tmp_path):
        zdir = tmp_path / "ZDIR"
        zdir.write_bytes(b"\x00" * 12)
        assert detect_directory_format(zdir) is RecordFormat.CANONICAL
