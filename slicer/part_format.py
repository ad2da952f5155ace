"""Encodes and decodes the fixed-width index header at the start of every part file."""

import struct

from common.constants import MAX_PART_INDEX, PART_HEADER_FORMAT, PART_HEADER_SIZE
from common.exceptions import InvalidArgumentError, MalformedPartError


def encode_header(index: int) -> bytes:
    """
    Encode a part index as its on-disk header.
    
    Args:
        index: Zero-based part index
        
    Returns:
        PART_HEADER_SIZE bytes, unsigned little-endian
        
    Raises:
        InvalidArgumentError: If index does not fit the header field
    """
    if index < 0 or index > MAX_PART_INDEX:
        raise InvalidArgumentError(f"Part index out of range: {index}")
    return struct.pack(PART_HEADER_FORMAT, index)


def decode_header(data: bytes) -> int:
    """
    Decode the part index from the leading bytes of a part file.
    
    Args:
        data: At least PART_HEADER_SIZE bytes; extra bytes are ignored
        
    Returns:
        Part index
        
    Raises:
        MalformedPartError: If fewer than PART_HEADER_SIZE bytes are given
    """
    if len(data) < PART_HEADER_SIZE:
        raise MalformedPartError(
            f"Part header needs {PART_HEADER_SIZE} bytes, got {len(data)}"
        )
    (index,) = struct.unpack(PART_HEADER_FORMAT, data[:PART_HEADER_SIZE])
    return index
