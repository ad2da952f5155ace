"""Project-wide constants (part layout, buffer sizes, unit multipliers)."""

PART_EXTENSION: str = ".bin"
PART_NAME_PREFIX: str = "part_"

# uint32, little-endian
PART_HEADER_FORMAT: str = "<I"
PART_HEADER_SIZE: int = 4
MAX_PART_INDEX: int = 2**32 - 1

COPY_BUFFER_SIZE: int = 1024 * 1024  # 1 MiB working buffer for payload streaming

UNIT_MULTIPLIERS: dict[str, int] = {
    "-b": 1,
    "-kb": 1024,
    "-mb": 1024 * 1024,
    "-gb": 1024 * 1024 * 1024,
}
DEFAULT_UNIT: str = "-b"

AUTO_REBUILD_FILENAME: str = "rebuilt_archive.zip"
ARCHIVE_EXTENSION: str = ".zip"
