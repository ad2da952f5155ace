"""Explicit post-rebuild cleanup: consumed part removal and executable self-removal."""

import os
import subprocess
import sys
from pathlib import Path
from typing import Optional

from common.exceptions import InvalidArgumentError, PartIOError
from common.logging_config import get_logger
from slicer.part_storage import delete_part_files

logger = get_logger(__name__)

# Delay gives the running process time to exit before cmd.exe deletes the image.
WINDOWS_SELF_REMOVE_COMMAND = 'cmd.exe /C ping 1.1.1.1 -n 1 -w 3000 > Nul & Del /f /q "{path}"'
CREATE_NO_WINDOW = 0x08000000


def delete_consumed_parts(parts_directory: Path) -> int:
    """
    Delete the part files of a directory after a successful rebuild.

    Args:
        parts_directory: Directory holding consumed parts

    Returns:
        Number of part files deleted

    Raises:
        InvalidArgumentError: If the directory does not exist
    """
    parts_directory = Path(parts_directory)
    if not parts_directory.is_dir():
        raise InvalidArgumentError(f"Parts directory does not exist: {parts_directory}")

    deleted = delete_part_files(parts_directory)
    logger.info(f"Deleted {deleted} part file(s) from {parts_directory}")
    return deleted


def running_executable() -> Optional[Path]:
    """Path of the frozen executable running this process, or None when run from source."""
    if getattr(sys, 'frozen', False):
        return Path(sys.executable)
    return None


def remove_self(executable_path: Optional[Path] = None) -> None:
    """
    Remove the running executable.

    On Windows the image is locked while the process runs, so a detached
    cmd.exe waits briefly and deletes it after exit. Elsewhere the file is
    unlinked directly.

    Args:
        executable_path: File to remove; defaults to the frozen executable

    Raises:
        PartIOError: If the removal cannot be started or performed
    """
    if executable_path is None:
        executable_path = running_executable()
        if executable_path is None:
            logger.info("Not running as a frozen executable, nothing to remove")
            return

    executable_path = Path(executable_path)

    if sys.platform == "win32":
        command = WINDOWS_SELF_REMOVE_COMMAND.format(path=executable_path)
        try:
            subprocess.Popen(command, creationflags=CREATE_NO_WINDOW, close_fds=True)
        except OSError as e:
            raise PartIOError(f"Cannot schedule removal of {executable_path}: {e}") from e
        logger.info(f"Scheduled removal of {executable_path}")
        return

    try:
        os.remove(executable_path)
    except OSError as e:
        raise PartIOError(f"Cannot remove {executable_path}: {e}") from e
    logger.info(f"Removed {executable_path}")
