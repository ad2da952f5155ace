"""REPL with prompt_toolkit for user interaction."""

import os
import sys
from typing import Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.history import InMemoryHistory

from common.exceptions import SlicerError
from common.logging_config import get_logger
from cli.commands import (
    get_config,
    handle_auto_rebuild,
    handle_cleanup,
    handle_config,
    handle_rebuild,
    handle_slice,
)
from cli.completer import SlicerCompleter
from cli.config import Config
from cli.constants import (
    HELP_TEXT,
    PROMPT_TEXT,
    STYLE,
    WELCOME_HELP,
    WELCOME_TITLE,
)
from cli.models import (
    AutoRebuildCommand,
    CleanupCommand,
    ConfigCommand,
    RebuildCommand,
    SliceCommand,
)
from cli.parser import ParseError, parse_command

logger = get_logger(__name__)


def clear_screen() -> None:
    """Clear the terminal screen (cross-platform)."""
    if sys.platform == "win32":
        os.system("cls")
    else:
        os.system("clear")


def show_welcome() -> None:
    print(WELCOME_TITLE)
    print(WELCOME_HELP)


def dispatch_command(cmd_obj, config: Optional[Config] = None) -> str:
    """Dispatch parsed command to appropriate handler."""
    if isinstance(cmd_obj, SliceCommand):
        return handle_slice(cmd_obj, config)
    elif isinstance(cmd_obj, RebuildCommand):
        return handle_rebuild(cmd_obj, config)
    elif isinstance(cmd_obj, CleanupCommand):
        return handle_cleanup(cmd_obj, config)
    elif isinstance(cmd_obj, ConfigCommand):
        return handle_config(cmd_obj, config)
    elif isinstance(cmd_obj, AutoRebuildCommand):
        return handle_auto_rebuild(cmd_obj, config)
    else:
        return f"Unknown command type: {type(cmd_obj)}"


def run_line(user_input: str, config: Config) -> Optional[str]:
    """
    Execute one line of shell input.

    Returns:
        Text to print, or None for blank input
    """
    if not user_input.strip():
        return None

    try:
        cmd_obj = parse_command(user_input, default_unit=config.get_default_unit())
        return dispatch_command(cmd_obj, config)
    except ParseError as e:
        return f"Error: {e}"
    except SlicerError as e:
        logger.debug(f"Command failed: {e}")
        return f"Error: {e}"


def repl_loop(config: Optional[Config] = None) -> None:
    """Start interactive REPL with prompt_toolkit."""
    if config is None:
        config = get_config()

    history = InMemoryHistory()
    session: PromptSession = PromptSession(
        completer=SlicerCompleter(), history=history, style=STYLE
    )

    clear_screen()
    show_welcome()

    while True:
        try:
            user_input = session.prompt([("class:prompt", PROMPT_TEXT)])

            if user_input.strip() == "exit":
                print("Goodbye!")
                break

            if user_input.strip() == "help":
                print(HELP_TEXT)
                continue

            if user_input.strip() == "clear":
                clear_screen()
                show_welcome()
                continue

            result = run_line(user_input, config)
            if result is not None:
                print(result)

        except KeyboardInterrupt:
            continue
        except EOFError:
            print("\nGoodbye!")
            break
