"""CLI entry point."""

import os
import sys
from typing import Optional

from common.exceptions import SlicerError
from common.logging_config import setup_logging
from cli.commands import get_config
from cli.constants import USAGE_TEXT
from cli.models import ShellCommand
from cli.parser import ParseError, parse_arguments
from cli.repl import dispatch_command, repl_loop


def main(argv: Optional[list[str]] = None) -> int:
    """Entry point for CLI."""
    args = list(sys.argv[1:] if argv is None else argv)

    debug = '--debug' in args
    log_level = 'DEBUG' if debug else os.getenv('LOG_LEVEL', 'INFO')

    logger = setup_logging('cli', log_level=log_level)
    setup_logging('slicer', log_level=log_level)

    if debug:
        logger.info("Debug logging enabled")
        args = [arg for arg in args if arg != '--debug']

    config = get_config()

    try:
        cmd_obj = parse_arguments(args, default_unit=config.get_default_unit())
    except ParseError as e:
        print(f"Error: {e}", file=sys.stderr)
        if e.show_usage:
            print(USAGE_TEXT)
        return 1

    if isinstance(cmd_obj, ShellCommand):
        repl_loop(config)
        return 0

    try:
        print(dispatch_command(cmd_obj, config))
    except SlicerError as e:
        logger.error(f"{cmd_obj.command} failed: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
