"""
zdir_tools - extract files from ZZDATA game archives

The companion ZDIR file lists every packed file as (name hash, block
offset, size).  Hashes are resolved against a list of known file names;
entries with unknown names are written under ``__UNKNOWN__``.
"""

__version__ = "0.1.0"
__license__ = "MIT"
