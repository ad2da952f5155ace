"""Command parser for command-line arguments and shell input."""

import shlex
from pathlib import Path
from typing import Optional

from common.constants import ARCHIVE_EXTENSION, DEFAULT_UNIT
from slicer.part_storage import has_part_files
from cli.models import (
    AutoRebuildCommand,
    CleanupCommand,
    CommandRequest,
    ConfigCommand,
    RebuildCommand,
    ShellCommand,
    SliceCommand,
)
from cli.units import is_unit_token


class ParseError(Exception):
    """Raised when command parsing fails."""

    def __init__(self, message: str, show_usage: bool = False):
        super().__init__(message)
        self.show_usage = show_usage


SLICE_ALIASES = ("slice", "-s")
REBUILD_ALIASES = ("rebuild", "-r")


def parse_arguments(
    args: list[str],
    default_unit: str = DEFAULT_UNIT,
    cwd: Optional[Path] = None,
) -> CommandRequest:
    """Parse process arguments into a CommandRequest.

    Accepts named commands (slice/rebuild/cleanup/config/shell, or -s/-r) and the
    positional form where one argument is a .zip archive: the archive is
    sliced when it exists, otherwise the other argument is rebuilt into it.
    With no arguments, a directory holding parts triggers auto-rebuild.

    Args:
        args: Arguments without the program name
        default_unit: Unit used when a slice command gives none
        cwd: Directory checked for auto-rebuild (default: current directory)

    Returns:
        CommandRequest object

    Raises:
        ParseError: If the arguments match no command form
    """
    if not args:
        directory = cwd if cwd is not None else Path.cwd()
        if has_part_files(directory):
            return AutoRebuildCommand(directory=str(directory))
        raise ParseError("No arguments given", show_usage=True)

    command_name = args[0].lower()
    if command_name == "shell":
        return ShellCommand()
    if command_name in SLICE_ALIASES or command_name in REBUILD_ALIASES or command_name in ("cleanup", "config"):
        return _parse_named(args, default_unit)
    return _parse_positional(args, default_unit)


def parse_command(input_line: str, default_unit: str = DEFAULT_UNIT) -> CommandRequest:
    """Parse a shell input line into a CommandRequest.

    Args:
        input_line: Raw user input from REPL
        default_unit: Unit used when a slice command gives none

    Returns:
        CommandRequest object (one of Slice/Rebuild/Cleanup/Config)

    Raises:
        ParseError: If command syntax is invalid
    """
    if not input_line.strip():
        raise ParseError("Empty command")

    try:
        tokens = shlex.split(input_line)
    except ValueError as e:
        raise ParseError(f"Invalid syntax: {e}")

    if not tokens:
        raise ParseError("Empty command")

    return _parse_named(tokens, default_unit)


def _parse_named(tokens: list[str], default_unit: str) -> CommandRequest:
    command_name = tokens[0].lower()

    if command_name in SLICE_ALIASES:
        return _parse_slice(tokens[1:], default_unit)
    elif command_name in REBUILD_ALIASES:
        return _parse_rebuild(tokens[1:])
    elif command_name == "cleanup":
        return _parse_cleanup(tokens[1:])
    elif command_name == "config":
        return _parse_config(tokens[1:])
    else:
        raise ParseError(f"Unknown command: {tokens[0]}")


def _parse_slice(args: list[str], default_unit: str) -> SliceCommand:
    """Parse 'slice <file> <dir> <size> [unit]' (file and dir in either order)."""
    if len(args) < 3 or len(args) > 4:
        raise ParseError("slice requires <file> <directory> <size> [unit]", show_usage=True)

    first, second = args[0], args[1]
    if Path(second).is_file() and not Path(first).is_file():
        first, second = second, first

    size = _parse_size(args[2])
    unit = _parse_unit(args[3]) if len(args) == 4 else default_unit
    return SliceCommand(source=first, destination=second, size=size, unit=unit)


def _parse_rebuild(args: list[str]) -> RebuildCommand:
    """Parse 'rebuild <dir> <output>' command."""
    if len(args) != 2:
        raise ParseError("rebuild requires exactly 2 arguments: <directory> <output>", show_usage=True)

    parts_dir, output = args
    return RebuildCommand(parts_dir=parts_dir, output=output)


def _parse_cleanup(args: list[str]) -> CleanupCommand:
    """Parse 'cleanup <dir>' command."""
    if len(args) != 1:
        raise ParseError("cleanup requires exactly 1 argument: <directory>")

    return CleanupCommand(parts_dir=args[0])


def _parse_config(args: list[str]) -> ConfigCommand:
    """Parse 'config [<key> <value>]' command."""
    if not args:
        return ConfigCommand()
    if len(args) != 2:
        raise ParseError("config takes no arguments or exactly 2: <key> <value>")

    key, value = args
    return ConfigCommand(key=key, value=value)


def _parse_positional(args: list[str], default_unit: str) -> CommandRequest:
    """Parse '<archive.zip> <dir> [size] [unit]' with archive and dir in either order."""
    if len(args) < 2:
        raise ParseError("At least two arguments are required", show_usage=True)
    if len(args) > 4:
        raise ParseError("Too many arguments", show_usage=True)

    first, second = args[0], args[1]
    if _is_archive_name(first):
        archive, folder = first, second
    elif _is_archive_name(second):
        archive, folder = second, first
    else:
        raise ParseError(f"One of the arguments has to be {ARCHIVE_EXTENSION}")

    if Path(archive).exists():
        if len(args) < 3:
            raise ParseError("Slicing requires a part size", show_usage=True)
        size = _parse_size(args[2])
        unit = _parse_unit(args[3]) if len(args) == 4 else default_unit
        return SliceCommand(source=archive, destination=folder, size=size, unit=unit)

    if len(args) == 2 and Path(folder).is_dir() and has_part_files(Path(folder)):
        return RebuildCommand(parts_dir=folder, output=archive)

    raise ParseError("Incorrect argument combination")


def _is_archive_name(token: str) -> bool:
    return token.lower().endswith(ARCHIVE_EXTENSION)


def _parse_size(token: str) -> int:
    try:
        size = int(token)
    except ValueError:
        raise ParseError(f"Invalid size: {token}")
    if size <= 0:
        raise ParseError(f"Size must be positive: {token}")
    return size


def _parse_unit(token: str) -> str:
    if not is_unit_token(token):
        raise ParseError(f"Unknown unit: {token} (expected -b, -kb, -mb or -gb)")
    return token.lower()
