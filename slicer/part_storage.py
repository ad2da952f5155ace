"""Manages part files on disk: naming, listing, header reads, payload streaming and deletion."""

import re
from pathlib import Path
from typing import Iterator

from common.constants import COPY_BUFFER_SIZE, PART_EXTENSION, PART_HEADER_SIZE, PART_NAME_PREFIX
from common.exceptions import MalformedPartError
from common.logging_config import get_logger
from common.types import Part
from slicer.part_format import decode_header, encode_header

logger = get_logger(__name__)

PART_NAME_RE = re.compile(rf"^{re.escape(PART_NAME_PREFIX)}(\d+){re.escape(PART_EXTENSION)}$")


def part_file_name(index: int) -> str:
    """Return the file name used for the part with the given index."""
    return f"{PART_NAME_PREFIX}{index}{PART_EXTENSION}"


def get_part_path(directory: Path, index: int) -> Path:
    """
    Get file path for a part.
    
    Args:
        directory: Directory holding the part set
        index: Part index
        
    Returns:
        Path object for part file
    """
    return Path(directory) / part_file_name(index)


def is_part_file(path: Path) -> bool:
    """Check whether path is a regular file carrying the part extension."""
    return path.suffix == PART_EXTENSION and path.is_file()


def is_split_output_name(path: Path) -> bool:
    """Check whether path follows the naming used by the splitter (part_<n>.bin)."""
    return PART_NAME_RE.match(path.name) is not None


def list_part_files(directory: Path) -> list[Path]:
    """
    List all part files in a directory.
    
    Order of the returned list carries no meaning; ordering comes from the
    header index only.
    
    Args:
        directory: Directory to scan (not recursive)
        
    Returns:
        Paths of regular files with the part extension
    """
    directory = Path(directory)
    if not directory.is_dir():
        return []
    return sorted(p for p in directory.iterdir() if is_part_file(p))


def has_part_files(directory: Path) -> bool:
    """Return True if directory contains at least one part file."""
    directory = Path(directory)
    if not directory.is_dir():
        return False
    return any(is_part_file(p) for p in directory.iterdir())


def write_part(path: Path, index: int, payload: bytes) -> int:
    """
    Write a part file: header followed by payload.
    
    Args:
        path: Target file path (created or truncated)
        index: Part index stored in the header
        payload: Payload bytes
        
    Returns:
        Number of bytes written to disk, header included
        
    Raises:
        OSError: If write operation fails
    """
    header = encode_header(index)
    with open(path, 'wb') as f:
        f.write(header)
        f.write(payload)
    return len(header) + len(payload)


def read_part_header(path: Path) -> Part:
    """
    Read only the header of a part file.
    
    Args:
        path: Part file path
        
    Returns:
        Part with index and payload size
        
    Raises:
        MalformedPartError: If file is shorter than the header
        OSError: If read operation fails
    """
    path = Path(path)
    with open(path, 'rb') as f:
        header = f.read(PART_HEADER_SIZE)
        size = f.seek(0, 2)
    try:
        index = decode_header(header)
    except MalformedPartError as e:
        raise MalformedPartError(f"{path.name}: {e}") from e
    return Part(index=index, path=path, payload_size=size - PART_HEADER_SIZE)


def stream_payload(path: Path, piece_size: int = COPY_BUFFER_SIZE) -> Iterator[bytes]:
    """
    Stream the payload of a part file in pieces, skipping the header.
    
    Args:
        path: Part file path
        piece_size: Size of each piece in bytes (default 1 MiB)
        
    Yields:
        Payload pieces
        
    Raises:
        OSError: If read operation fails
    """
    with open(path, 'rb') as f:
        f.seek(PART_HEADER_SIZE)
        while True:
            piece = f.read(piece_size)
            if not piece:
                break
            yield piece


def delete_part_files(directory: Path) -> int:
    """
    Delete every part file in a directory.
    
    A file that cannot be removed is logged and skipped.
    
    Args:
        directory: Directory holding consumed parts
        
    Returns:
        Number of files deleted
    """
    deleted = 0
    for path in list_part_files(directory):
        try:
            path.unlink()
            deleted += 1
        except OSError as e:
            logger.warning(f"Cannot remove {path.name}: {e}")
    return deleted
