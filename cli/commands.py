"""Command handler functions for CLI operations."""

from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from common.exceptions import InvalidArgumentError
from common.logging_config import get_logger
from slicer.cleanup import delete_consumed_parts, remove_self
from slicer.rebuilder import rebuild
from slicer.splitter import split
from cli.config import Config
from cli.models import (
    AutoRebuildCommand,
    CleanupCommand,
    ConfigCommand,
    RebuildCommand,
    SliceCommand,
)
from cli.units import convert_to_bytes
from cli.utils import format_file_size

logger = get_logger(__name__)


_config: Optional[Config] = None


def get_config() -> Config:
    """
    Get or create global Config instance.

    Returns:
        Config instance
    """
    global _config
    if _config is None:
        logger.debug("Loading CLI configuration")
        _config = Config()
    return _config


def handle_slice(cmd: SliceCommand, config: Optional[Config] = None) -> str:
    """
    Handle 'slice' command.

    Args:
        cmd: SliceCommand with source, destination, size and unit
        config: Optional Config for dependency injection (testing)

    Returns:
        Summary message

    Raises:
        SlicerError: If the unit is unknown or the split fails
    """
    part_size = convert_to_bytes(cmd.size, cmd.unit)
    result = split(Path(cmd.source), Path(cmd.destination), part_size)
    return (
        f"Sliced file: {cmd.source} into: {cmd.destination} "
        f"| part size: {part_size} bytes ({format_file_size(part_size)}) "
        f"| {result.part_count} part(s), {format_file_size(result.total_bytes)} total"
    )


def handle_rebuild(cmd: RebuildCommand, config: Optional[Config] = None) -> str:
    """
    Handle 'rebuild' command.

    Args:
        cmd: RebuildCommand with parts directory and output path
        config: Optional Config for dependency injection (testing)

    Returns:
        Summary message

    Raises:
        SlicerError: If the part set is invalid or I/O fails
    """
    if config is None:
        config = get_config()
    result = rebuild(Path(cmd.parts_dir), Path(cmd.output), buffer_size=config.get_buffer_size())
    return (
        f"Rebuilt archive to: {result.destination} "
        f"| {result.part_count} part(s), {format_file_size(result.bytes_written)}"
    )


def handle_cleanup(cmd: CleanupCommand, config: Optional[Config] = None) -> str:
    """
    Handle 'cleanup' command.

    Args:
        cmd: CleanupCommand with parts directory
        config: Optional Config for dependency injection (testing)

    Returns:
        Summary message
    """
    deleted = delete_consumed_parts(Path(cmd.parts_dir))
    return f"Deleted {deleted} part file(s) from {cmd.parts_dir}"


def handle_auto_rebuild(cmd: AutoRebuildCommand, config: Optional[Config] = None) -> str:
    """
    Handle auto-rebuild: rebuild the parts of a directory into a file inside it.

    Consumed parts are deleted and the executable removed only after the
    rebuild succeeded, and only when enabled in the configuration.

    Args:
        cmd: AutoRebuildCommand with the directory holding parts
        config: Optional Config for dependency injection (testing)

    Returns:
        Summary message

    Raises:
        SlicerError: If the rebuild or a cleanup step fails
    """
    if config is None:
        config = get_config()

    directory = Path(cmd.directory)
    output = directory / config.get_auto_rebuild_name()
    result = rebuild(directory, output, buffer_size=config.get_buffer_size())
    messages = [f"Auto rebuilt archive: {result.destination}"]

    cleanup = config.get_cleanup_config()
    if cleanup['delete_parts']:
        deleted = delete_consumed_parts(directory)
        messages.append(f"Deleted {deleted} part file(s)")
    if cleanup['remove_self']:
        remove_self()

    return "\n".join(messages)


def handle_config(cmd: ConfigCommand, config: Optional[Config] = None) -> str:
    """
    Handle 'config' command: list settings, or validate, apply and save one change.

    Args:
        cmd: ConfigCommand with optional key and value
        config: Optional Config for dependency injection (testing)

    Returns:
        Settings listing or confirmation message

    Raises:
        InvalidArgumentError: If the key is unknown or the value is rejected
    """
    if config is None:
        config = get_config()

    if cmd.key is None:
        lines = [f"Config file: {config.config_path}"]
        lines.extend(f"  {key} = {value}" for key, value in config.data.items())
        return "\n".join(lines)

    if cmd.key not in Config.DEFAULT_CONFIG:
        known = ", ".join(Config.DEFAULT_CONFIG)
        raise InvalidArgumentError(f"Unknown setting {cmd.key!r}, expected one of: {known}")

    try:
        config.update(**{cmd.key: cmd.value})
    except ValidationError as e:
        errors = "; ".join(error['msg'] for error in e.errors())
        raise InvalidArgumentError(f"Invalid value for {cmd.key}: {errors}") from e
    return f"Set {cmd.key} = {config.data[cmd.key]}"
