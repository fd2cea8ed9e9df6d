"""Name catalog: maps ZDIR name hashes back to original file paths.

The archive stores only a 32-bit hash of each path.  Paths are recovered
by hashing every line of a known name list and looking records up by
hash.  Lists use Windows-style backslash separators.
"""

import logging
from pathlib import Path

from zdir_tools.constants import NAME_HASH_MULTIPLIER, NAME_HASH_SEED

logger = logging.getLogger(__name__)

NameCatalog = dict[int, str]

BUNDLED_NAME_LIST = Path(__file__).resolve().parent.parent / "data" / "files.list"


def name_hash(name: str | bytes) -> int:
    """Hash a path the way ZDIR stores it.

    Base-33 rolling hash seeded with all ones, over unsigned bytes, wrapping
    at 32 bits.

    >>> name_hash("a")
    64
    >>> hex(name_hash(""))
    '0xffffffff'
    """
    if isinstance(name, str):
        name = name.encode("utf-8", "surrogateescape")
    h = NAME_HASH_SEED
    for b in name:
        h = (NAME_HASH_MULTIPLIER * h + b) & 0xFFFFFFFF
    return h


def _scan_lines(text: str) -> list[str]:
    """Split *text* into lines: ``\\n`` terminated, optional ``\\r`` dropped.

    Blank lines are kept; a trailing newline does not produce an extra
    empty line.
    """
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def load_name_catalog(text: str) -> NameCatalog:
    """Build a hash -> path mapping from a newline-delimited name list.

    When two lines share a hash the later one wins.
    """
    catalog: NameCatalog = {}
    collisions = 0
    for name in _scan_lines(text):
        h = name_hash(name)
        prev = catalog.get(h)
        if prev is not None and prev != name:
            collisions += 1
            logger.debug("Hash %08X collision: %r replaces %r", h, name, prev)
        catalog[h] = name
    if collisions:
        logger.info("Name list has %d hash collisions (last entry kept)", collisions)
    return catalog


def read_name_list(path: str | Path | None = None) -> str:
    """Return the text of a name list, defaulting to the bundled one.

    Undecodable bytes are kept via ``surrogateescape`` so they hash to the
    same values as the raw file content.
    """
    source = Path(path) if path is not None else BUNDLED_NAME_LIST
    text = source.read_bytes().decode("utf-8", "surrogateescape")
    logger.debug("Loaded name list %s (%d chars)", source, len(text))
    return text
