"""Shared data type definitions (Part, SplitResult, RebuildResult)."""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class Part:
    """
    A part file on disk together with the index read from its header.
    """
    index: int
    path: Path
    payload_size: int


@dataclass(frozen=True)
class SplitResult:
    """
    Outcome of a split operation.
    """
    part_count: int
    total_bytes: int
    part_paths: tuple[Path, ...]


@dataclass(frozen=True)
class RebuildResult:
    """
    Outcome of a rebuild operation.
    """
    part_count: int
    bytes_written: int
    destination: Path
