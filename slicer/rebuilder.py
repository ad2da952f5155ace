"""Rebuilds the original file from a directory of indexed part files."""

import os
import tempfile
from pathlib import Path

from common.constants import COPY_BUFFER_SIZE
from common.exceptions import (
    DuplicateIndexError,
    IncompletePartSetError,
    InvalidArgumentError,
    NoPartsFoundError,
    PartIOError,
)
from common.logging_config import get_logger
from common.types import Part, RebuildResult
from slicer.part_storage import list_part_files, read_part_header, stream_payload

logger = get_logger(__name__)


def rebuild(
    parts_directory: Path,
    destination_file_path: Path,
    buffer_size: int = COPY_BUFFER_SIZE,
) -> RebuildResult:
    """
    Concatenate the payloads of all parts in a directory, in header index order.

    Each part header is read once, the set is validated (no duplicate
    indices, indices contiguous from 0), and only then are payloads streamed
    into the destination. Output is written to a temporary file next to the
    destination and moved into place after the last part, so a failed
    rebuild never leaves a truncated destination behind.

    Args:
        parts_directory: Directory holding the part set
        destination_file_path: Output file (created or replaced)
        buffer_size: Working buffer size used while copying payloads

    Returns:
        RebuildResult with part count and total bytes written

    Raises:
        InvalidArgumentError: If a path is missing, the buffer size is not
            positive, or the destination is one of the parts
        NoPartsFoundError: If the directory holds no part files
        MalformedPartError: If a part is shorter than its header
        DuplicateIndexError: If two parts share an index
        IncompletePartSetError: If indices have gaps
        PartIOError: On any read or write failure
    """
    if not parts_directory or not destination_file_path:
        raise InvalidArgumentError("Parts directory and destination path are required")
    if buffer_size <= 0:
        raise InvalidArgumentError(f"Buffer size must be positive, got {buffer_size}")

    parts_directory = Path(parts_directory)
    destination_file_path = Path(destination_file_path)

    if not parts_directory.is_dir():
        raise InvalidArgumentError(f"Parts directory does not exist: {parts_directory}")

    parts = collect_parts(parts_directory)
    ordered = order_parts(parts)

    destination = destination_file_path.resolve()
    if any(part.path.resolve() == destination for part in ordered):
        raise InvalidArgumentError(f"Destination {destination_file_path} is one of the part files")

    bytes_written = _write_payloads(ordered, destination_file_path, buffer_size)

    logger.info(
        f"Rebuilt {destination_file_path} from {len(ordered)} part(s) in {parts_directory} "
        f"| {bytes_written} bytes"
    )
    return RebuildResult(
        part_count=len(ordered),
        bytes_written=bytes_written,
        destination=destination_file_path,
    )


def collect_parts(parts_directory: Path) -> list[Part]:
    """
    Read the header of every part file in a directory.

    Raises:
        NoPartsFoundError: If the directory holds no part files
        MalformedPartError: If a part is shorter than its header
        PartIOError: If a part cannot be read
    """
    paths = list_part_files(parts_directory)
    if not paths:
        raise NoPartsFoundError(f"No parts found in: {parts_directory}")

    parts = []
    for path in paths:
        try:
            parts.append(read_part_header(path))
        except OSError as e:
            raise PartIOError(f"Cannot read part file {path}: {e}") from e
    logger.debug(f"Read {len(parts)} part header(s) from {parts_directory}")
    return parts


def order_parts(parts: list[Part]) -> list[Part]:
    """
    Sort parts by index and check that they form a complete set.

    Returns:
        Parts in ascending index order, indices exactly 0..K-1

    Raises:
        DuplicateIndexError: If two parts share an index
        IncompletePartSetError: If any index between 0 and the highest is missing
    """
    ordered = sorted(parts, key=lambda part: part.index)

    seen: dict[int, Part] = {}
    for part in ordered:
        if part.index in seen:
            raise DuplicateIndexError(
                f"Parts {seen[part.index].path.name} and {part.path.name} "
                f"both declare index {part.index}"
            )
        seen[part.index] = part

    if ordered and ordered[-1].index != len(ordered) - 1:
        missing = sorted(set(range(ordered[-1].index + 1)) - set(seen))
        raise IncompletePartSetError(
            f"Part set is incomplete: found {len(ordered)} part(s), missing index(es) "
            f"{_format_indices(missing)}"
        )
    return ordered


def _write_payloads(ordered: list[Part], destination_file_path: Path, buffer_size: int) -> int:
    """Stream payloads into a temporary file and move it over the destination."""
    try:
        destination_file_path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{destination_file_path.name}.",
            suffix=".tmp",
            dir=destination_file_path.parent,
        )
    except OSError as e:
        raise PartIOError(f"Cannot create output file {destination_file_path}: {e}") from e

    tmp_path = Path(tmp_name)
    bytes_written = 0
    try:
        with os.fdopen(fd, 'wb') as out:
            # mkstemp creates 0600 files; give the output the usual umask-derived mode
            umask = os.umask(0)
            os.umask(umask)
            os.chmod(tmp_path, 0o666 & ~umask)
            for part in ordered:
                try:
                    for piece in stream_payload(part.path, buffer_size):
                        out.write(piece)
                        bytes_written += len(piece)
                except OSError as e:
                    raise PartIOError(f"Cannot copy part {part.index} ({part.path}): {e}") from e
                logger.debug(f"Appended part {part.index} from {part.path.name}")
        os.replace(tmp_path, destination_file_path)
    except BaseException as e:
        tmp_path.unlink(missing_ok=True)
        if isinstance(e, OSError) and not isinstance(e, PartIOError):
            raise PartIOError(f"Cannot write output file {destination_file_path}: {e}") from e
        raise
    return bytes_written


def _format_indices(indices: list[int], limit: int = 10) -> str:
    """Render a list of indices, truncated after limit entries."""
    shown = ", ".join(str(i) for i in indices[:limit])
    if len(indices) > limit:
        shown += f", ... ({len(indices) - limit} more)"
    return shown
