"""Command-line entry point: extract every file listed in a ZDIR."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from zdir_tools.archive.zdir_parser import (
    DirectoryRecord,
    InvalidFormatError,
    RecordFormat,
    detect_directory_format,
    read_directory,
)
from zdir_tools.config import settings
from zdir_tools.matching.name_catalog import NameCatalog, load_name_catalog, read_name_list
from zdir_tools.services.extract_service import (
    ExtractionError,
    UnsupportedFormatError,
    extract_records,
)
from zdir_tools.services.progress import logging_progress
from zdir_tools.utils.paths import resolve_output_path

logger = logging.getLogger("zdir_tools")

PROG = "zdir-extract"

USAGE = (
    f"Usage: {PROG} <ZDIR> <ZZDATA>\n"
    f"Usage: {PROG} <ZDIR> <ZZDATA0> <ZZDATA1> <ZZDATA2> ...\n"
    f"Usage: {PROG} <ZDIR> <ZZDATA{{0..3}}> ...\n"
    f"Usage: {PROG} --list <ZDIR>\n"
    f"\nRun '{PROG} --help' for options."
)


def _configure_logging(level: str | int) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True,
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROG,
        description="Extract files from a ZZDATA archive using its ZDIR directory.",
    )
    parser.add_argument("zdir", nargs="?", help="Directory file (ZDIR)")
    parser.add_argument("archives", nargs="*", help="Data archive(s) (ZZDATA)")
    parser.add_argument(
        "-o",
        "--output-dir",
        type=Path,
        default=None,
        help=f"Output root (default: {settings.output_root})",
    )
    parser.add_argument(
        "-n",
        "--names",
        type=Path,
        default=None,
        help="Name list used to resolve hashes (default: bundled list)",
    )
    parser.add_argument(
        "--format",
        choices=["canonical", "extended", "auto"],
        default="canonical",
        help="ZDIR record layout (default: canonical 12-byte records)",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="List decoded records and their output paths without extracting",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser


def _error(context: str, err: object) -> int:
    print(f"Error: {context}: {err}", file=sys.stderr)
    return 1


def _select_format(choice: str, zdir: Path) -> RecordFormat:
    if choice == "extended":
        return RecordFormat.EXTENDED
    if choice == "auto":
        detected = detect_directory_format(zdir)
        logger.info("Detected %s (%d-byte) records", detected.name.lower(), detected.record_size)
        return detected
    return RecordFormat.CANONICAL


def _list_records(records, catalog: NameCatalog, root: Path, unknown_dir: str) -> None:
    for record in records:
        out_path = resolve_output_path(record, catalog, root, unknown_dir)
        if isinstance(record, DirectoryRecord):
            print(f"{record.name_hash:08X} {record.byte_offset:#010x} {record.size:>10} {out_path}")
        else:
            print(
                f"{record.name_hash:08X} {record.byte_offset:#010x} {record.size:>10} "
                f"archive={record.archive_id} total={record.total_offset:#x} "
                f"crc={record.checksum:08X} {out_path}"
            )


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_intermixed_args(argv)

    if args.zdir is None or (not args.list and not args.archives):
        print(USAGE)
        return 1

    _configure_logging(logging.DEBUG if args.verbose else settings.log_level)

    zdir = Path(args.zdir)
    root = args.output_dir if args.output_dir is not None else settings.output_root

    try:
        record_format = _select_format(args.format, zdir)
        records = read_directory(zdir, record_format)
    except (InvalidFormatError, OSError) as exc:
        return _error("failed to load headers", exc)

    names_file = args.names if args.names is not None else settings.names_file
    try:
        catalog = load_name_catalog(read_name_list(names_file))
    except OSError as exc:
        return _error("failed to load name list", exc)
    logger.debug("Name catalog holds %d hashes", len(catalog))

    if args.list:
        _list_records(records, catalog, root, settings.unknown_dir)
        return 0

    archive, *extra = args.archives
    if extra:
        logger.warning(
            "Only %s is extracted; ignoring %d additional archive(s)", archive, len(extra)
        )

    try:
        extract_records(
            records,
            archive,
            catalog,
            output_root=root,
            on_extracted=lambda path: print(path, flush=True),
            on_progress=logging_progress(logger),
        )
    except UnsupportedFormatError as exc:
        return _error(str(zdir), exc)
    except ExtractionError as exc:
        return _error(str(exc.output_path), exc)
    return 0


if __name__ == "__main__":
    sys.exit(main())
