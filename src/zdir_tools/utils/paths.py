"""Output path resolution for extracted ZDIR entries.

Name list paths use backslash separators (``sound\\engine\\idle.wav``).
They are converted to the native convention and placed under the output
root; entries whose hash is not in the catalog go to
``<root>/__UNKNOWN__/<HEX_BLOCK_OFFSET>``.
"""

import logging
import os
from pathlib import Path

from zdir_tools.archive.zdir_parser import AnyDirectoryRecord
from zdir_tools.constants import DEFAULT_OUTPUT_ROOT, UNKNOWN_DIR
from zdir_tools.matching.name_catalog import NameCatalog

logger = logging.getLogger(__name__)


def normalize_archive_path(name: str) -> str:
    """Convert a backslash-separated catalog path to a native relative path.

    >>> normalize_archive_path("sound\\\\test.wav").replace(os.sep, "/")
    'sound/test.wav'
    """
    rel = name.replace("\\", "/").lstrip("/")
    return os.path.normpath(rel.replace("/", os.sep)) if rel else ""


def unknown_output_path(
    record: AnyDirectoryRecord,
    root: str | Path = DEFAULT_OUTPUT_ROOT,
    unknown_dir: str = UNKNOWN_DIR,
) -> Path:
    return Path(root) / unknown_dir / f"{record.local_offset:X}"


def catalog_relative_path(record: AnyDirectoryRecord, catalog: NameCatalog) -> str | None:
    """Return the native relative path named for *record*, or None.

    None covers hashes missing from the catalog and names that are unsafe
    to write: empty, absolute, or climbing out through ``..``.
    """
    name = catalog.get(record.name_hash)
    if name is None:
        return None
    rel = normalize_archive_path(name)
    if rel in ("", os.curdir) or Path(rel).anchor or Path(rel).parts[0] == os.pardir:
        logger.warning("Catalog name %r for hash %08X is not a usable path", name, record.name_hash)
        return None
    return rel


def resolve_output_path(
    record: AnyDirectoryRecord,
    catalog: NameCatalog,
    root: str | Path = DEFAULT_OUTPUT_ROOT,
    unknown_dir: str = UNKNOWN_DIR,
) -> Path:
    """Pick the destination of *record*; never fails.

    Catalog names that would escape *root* or collapse onto it fall back to
    the unknown location, whatever *root* itself is.
    """
    return place_output(record, catalog_relative_path(record, catalog), root, unknown_dir)


def place_output(
    record: AnyDirectoryRecord,
    rel: str | None,
    root: str | Path = DEFAULT_OUTPUT_ROOT,
    unknown_dir: str = UNKNOWN_DIR,
) -> Path:
    """Join a path from ``catalog_relative_path`` under *root*."""
    if rel is None:
        return unknown_output_path(record, root, unknown_dir)
    return Path(os.path.normpath(root)) / rel
