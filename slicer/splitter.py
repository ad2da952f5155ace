"""Splits a source file into indexed part files."""

import os
from pathlib import Path

from common.exceptions import InvalidArgumentError, MalformedPartError, PartIOError
from common.logging_config import get_logger
from common.types import SplitResult
from slicer.part_storage import (
    PART_NAME_RE,
    get_part_path,
    is_split_output_name,
    list_part_files,
    read_part_header,
    write_part,
)

logger = get_logger(__name__)


def split(
    source_path: Path,
    destination_directory: Path,
    part_size_bytes: int,
    overwrite: bool = True,
) -> SplitResult:
    """
    Split a file into part files of at most part_size_bytes payload each.

    Parts are named part_<index>.bin and carry their index in a 4-byte
    header, so a later rebuild does not depend on their names. An empty
    source produces zero parts.

    Args:
        source_path: File to split
        destination_directory: Directory receiving the parts (created if missing)
        part_size_bytes: Maximum payload size per part, already converted to bytes
        overwrite: Replace part files left by an earlier split in the same directory

    Returns:
        SplitResult with the number of parts and their paths in index order

    Raises:
        InvalidArgumentError: If part size is not a positive integer or a path is missing
        PartIOError: If the source cannot be read, the destination cannot be
            created, or a part cannot be written. The first failure aborts the
            split; parts written before it are left in place.
    """
    if isinstance(part_size_bytes, bool) or not isinstance(part_size_bytes, int) or part_size_bytes <= 0:
        raise InvalidArgumentError(f"Part size must be a positive integer, got {part_size_bytes!r}")
    if not source_path or not destination_directory:
        raise InvalidArgumentError("Source path and destination directory are required")

    source_path = Path(source_path)
    destination_directory = Path(destination_directory)

    if not source_path.is_file():
        raise PartIOError(f"Cannot open input file: {source_path}")

    try:
        destination_directory.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise PartIOError(f"Cannot create destination directory {destination_directory}: {e}") from e

    if is_split_output_name(source_path) and source_path.resolve().parent == destination_directory.resolve():
        raise InvalidArgumentError(
            f"Source {source_path} would be replaced by a part written to {destination_directory}"
        )

    part_paths = []
    try:
        src = open(source_path, 'rb')
    except OSError as e:
        raise PartIOError(f"Cannot open input file {source_path}: {e}") from e

    with src:
        _clear_previous_parts(destination_directory, overwrite)

        total_size = os.fstat(src.fileno()).st_size
        remaining = total_size
        part_id = 0

        while remaining > 0:
            to_read = min(part_size_bytes, remaining)
            try:
                buffer = src.read(to_read)
            except OSError as e:
                raise PartIOError(f"Cannot read input file {source_path} for part {part_id}: {e}") from e
            if len(buffer) != to_read:
                raise PartIOError(
                    f"Input file {source_path} ended early at part {part_id}: "
                    f"expected {to_read} bytes, got {len(buffer)}"
                )

            part_path = get_part_path(destination_directory, part_id)
            try:
                write_part(part_path, part_id, buffer)
            except OSError as e:
                raise PartIOError(f"Cannot create part file {part_path} (part {part_id}): {e}") from e
            logger.debug(f"Wrote part {part_id} ({len(buffer)} bytes) to {part_path}")

            part_paths.append(part_path)
            remaining -= to_read
            part_id += 1

    logger.info(
        f"Sliced {source_path} into {len(part_paths)} part(s) in {destination_directory} "
        f"| part size: {part_size_bytes} bytes, total: {total_size} bytes"
    )
    return SplitResult(part_count=len(part_paths), total_bytes=total_size, part_paths=tuple(part_paths))


def _clear_previous_parts(destination_directory: Path, overwrite: bool) -> None:
    """Remove parts of an earlier split so they cannot mix with the new set."""
    previous = [p for p in list_part_files(destination_directory) if is_split_output_name(p)]
    if not previous:
        return
    for path in previous:
        _check_previous_part(path)
    if not overwrite:
        raise PartIOError(
            f"Destination {destination_directory} already holds {len(previous)} part file(s)"
        )
    for path in previous:
        try:
            path.unlink()
        except OSError as e:
            raise PartIOError(f"Cannot remove previous part file {path}: {e}") from e
    logger.info(f"Removed {len(previous)} part file(s) from an earlier split in {destination_directory}")


def _check_previous_part(path: Path) -> None:
    """Fail unless path is a readable part whose header index matches its name."""
    try:
        part = read_part_header(path)
    except (MalformedPartError, OSError) as e:
        raise PartIOError(f"Refusing to replace {path}: not a valid part file ({e})") from e
    expected = int(PART_NAME_RE.match(path.name).group(1))
    if part.index != expected:
        raise PartIOError(
            f"Refusing to replace {path}: header index {part.index} does not match its name"
        )
