"""ZDIR extraction pipeline.

Decodes a directory file, resolves every record to an output path and
copies its slice out of the ZZDATA archive, strictly in record order.
The first failure aborts the run; files already written are kept.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from pathlib import Path

from zdir_tools.archive.reader import ArchiveReader
from zdir_tools.archive.zdir_parser import (
    AnyDirectoryRecord,
    DirectoryRecord,
    RecordFormat,
    read_directory,
)
from zdir_tools.config import settings
from zdir_tools.matching.name_catalog import NameCatalog
from zdir_tools.schemas.extract import ExtractResult
from zdir_tools.services.progress import ProgressCallback, noop_progress
from zdir_tools.utils.paths import (
    catalog_relative_path,
    place_output,
    resolve_output_path,
)

logger = logging.getLogger(__name__)


class UnsupportedFormatError(ValueError):
    """Records use a layout whose extraction is not implemented."""


class ExtractionError(Exception):
    def __init__(self, output_path: Path, cause: BaseException) -> None:
        self.output_path = output_path
        super().__init__(str(cause))


def _noop_extracted(_path: Path) -> None:
    pass


def extract_records(
    records: Sequence[AnyDirectoryRecord],
    archive_path: str | Path,
    catalog: NameCatalog,
    *,
    output_root: str | Path | None = None,
    unknown_dir: str | None = None,
    buffer_size: int | None = None,
    on_extracted: Callable[[Path], None] = _noop_extracted,
    on_progress: ProgressCallback = noop_progress,
) -> ExtractResult:
    """Extract already decoded canonical *records* from *archive_path*.

    *on_extracted* is called with each output path as soon as its file is
    complete.

    Raises:
        UnsupportedFormatError: If any record uses the extended layout.
        ExtractionError: On the first record that fails; later records are
            not attempted.  An archive that cannot be opened is reported
            against the first record's output path.
    """
    if any(not isinstance(r, DirectoryRecord) for r in records):
        raise UnsupportedFormatError(
            "extended (24-byte) directory records cannot be extracted: "
            "multi-archive dispatch is not implemented"
        )

    root = Path(output_root if output_root is not None else settings.output_root)
    unknown = unknown_dir if unknown_dir is not None else settings.unknown_dir
    bufsize = buffer_size if buffer_size is not None else settings.buffer_size

    total = len(records)
    extracted = 0
    unknown_count = 0
    bytes_written = 0

    on_progress("extract", f"Extracting {total} entries", 0)
    if not records:
        logger.info("Directory lists no entries; nothing to extract")
        return ExtractResult(
            output_root=root, records=0, files_extracted=0, files_unknown=0, bytes_written=0
        )

    try:
        reader = ArchiveReader(archive_path, bufsize)
    except OSError as exc:
        first_path = resolve_output_path(records[0], catalog, root, unknown)
        logger.error("Failed to open archive %s: %s", archive_path, exc)
        raise ExtractionError(first_path, exc) from exc

    with reader as archive:
        for i, record in enumerate(records):
            rel = catalog_relative_path(record, catalog)
            if rel is None:
                unknown_count += 1
            out_path = place_output(record, rel, root, unknown)
            try:
                bytes_written += archive.extract(record.byte_offset, record.size, out_path)
            except (OSError, ValueError) as exc:
                logger.error("Failed to extract %s: %s", out_path, exc)
                raise ExtractionError(out_path, exc) from exc
            extracted += 1
            on_extracted(out_path)
            on_progress("extract", str(out_path), int((i + 1) / total * 100))

    on_progress("extract", "Done", 100)
    logger.info(
        "Extracted %d entries (%d unnamed, %d bytes) to %s",
        extracted,
        unknown_count,
        bytes_written,
        root,
    )
    return ExtractResult(
        output_root=root,
        records=total,
        files_extracted=extracted,
        files_unknown=unknown_count,
        bytes_written=bytes_written,
    )


def extract_directory(
    directory_path: str | Path,
    archive_path: str | Path,
    catalog: NameCatalog,
    *,
    record_format: RecordFormat = RecordFormat.CANONICAL,
    output_root: str | Path | None = None,
    unknown_dir: str | None = None,
    buffer_size: int | None = None,
    on_extracted: Callable[[Path], None] = _noop_extracted,
    on_progress: ProgressCallback = noop_progress,
) -> ExtractResult:
    """Decode *directory_path* and extract every entry it lists.

    Load errors (``InvalidFormatError``, ``OSError``) propagate before any
    file is written.
    """
    on_progress("headers", f"Reading {Path(directory_path).name}", 0)
    records = read_directory(directory_path, record_format)
    logger.info("Loaded %d records from %s", len(records), directory_path)
    return extract_records(
        records,
        archive_path,
        catalog,
        output_root=output_root,
        unknown_dir=unknown_dir,
        buffer_size=buffer_size,
        on_extracted=on_extracted,
        on_progress=on_progress,
    )
