"""Command request data types for CLI."""

from dataclasses import dataclass
from typing import Literal


@dataclass(frozen=True)
class SliceCommand:
    """Split a file into parts."""

    source: str
    destination: str
    size: int
    unit: str
    command: Literal["slice"] = "slice"


@dataclass(frozen=True)
class RebuildCommand:
    """Rebuild a file from a directory of parts."""

    parts_dir: str
    output: str
    command: Literal["rebuild"] = "rebuild"


@dataclass(frozen=True)
class AutoRebuildCommand:
    """Rebuild the parts found in a directory into a file next to them, then clean up."""

    directory: str
    command: Literal["auto-rebuild"] = "auto-rebuild"


@dataclass(frozen=True)
class CleanupCommand:
    """Delete consumed part files from a directory."""

    parts_dir: str
    command: Literal["cleanup"] = "cleanup"


@dataclass(frozen=True)
class ConfigCommand:
    """Show settings, or change one setting."""

    key: str | None = None
    value: str | None = None
    command: Literal["config"] = "config"


@dataclass(frozen=True)
class ShellCommand:
    """Start the interactive shell."""

    command: Literal["shell"] = "shell"


CommandRequest = (
    SliceCommand
    | RebuildCommand
    | AutoRebuildCommand
    | CleanupCommand
    | ConfigCommand
    | ShellCommand
)
