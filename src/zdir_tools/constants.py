CANONICAL_RECORD_SIZE = 12
EXTENDED_RECORD_SIZE = 24

# ZDIR offsets are 2048-byte block indices
BLOCK_SHIFT = 11
BLOCK_SIZE = 1 << BLOCK_SHIFT

NAME_HASH_SEED = 0xFFFFFFFF
NAME_HASH_MULTIPLIER = 33

DEFAULT_OUTPUT_ROOT = "EXTRACTED"
UNKNOWN_DIR = "__UNKNOWN__"
COPY_BUFFER_SIZE = 32 * 1024
DIR_MODE = 0o755
