"""Custom completer for the FileSlicer shell."""

from pathlib import Path
from typing import Iterable

from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.document import Document

from slicer.part_storage import has_part_files
from cli.config import Config
from cli.constants import COMMANDS, UNIT_TOKENS


class SlicerCompleter(Completer):
    """
    Custom completer that provides:
    - Command name completion for the first token
    - File and directory completion for 'slice' arguments, unit completion for its size unit
    - Completion of directories holding parts for 'rebuild' and 'cleanup'
    - Setting name completion for 'config'
    """

    def get_completions(
        self, document: Document, complete_event
    ) -> Iterable[Completion]:
        text = document.text_before_cursor
        tokens = text.split()

        is_typing_new_token = text.endswith(" ") or not tokens

        if not tokens or (len(tokens) == 1 and not is_typing_new_token):
            yield from self._complete_commands(tokens[0] if tokens else "")
            return

        command = tokens[0].lower()
        current_word = "" if is_typing_new_token else tokens[-1]
        position = len(tokens) if is_typing_new_token else len(tokens) - 1

        if command == "slice":
            if position == 1:
                yield from self._complete_files(current_word)
            elif position == 2:
                yield from self._complete_directories(current_word)
            elif position == 4:
                yield from self._complete_units(current_word)
        elif command in ("rebuild", "cleanup") and position == 1:
            yield from self._complete_part_directories(current_word)
        elif command == "config" and position == 1:
            yield from self._complete_settings(current_word)

    def _complete_commands(self, partial: str) -> Iterable[Completion]:
        """Complete command names matching the partial input."""
        partial_lower = partial.lower()
        for cmd in COMMANDS:
            if cmd.startswith(partial_lower):
                yield Completion(cmd, start_position=-len(partial))

    def _complete_units(self, partial: str) -> Iterable[Completion]:
        for unit in UNIT_TOKENS:
            if unit.startswith(partial.lower()):
                yield Completion(unit, start_position=-len(partial))

    def _complete_settings(self, partial: str) -> Iterable[Completion]:
        for key in Config.DEFAULT_CONFIG:
            if key.startswith(partial):
                yield Completion(key, start_position=-len(partial))

    def _complete_files(self, partial: str) -> Iterable[Completion]:
        """Complete regular files in the current directory."""
        for item in sorted(Path.cwd().iterdir()):
            if item.is_file() and item.name.startswith(partial):
                yield Completion(item.name, start_position=-len(partial))

    def _complete_directories(self, partial: str) -> Iterable[Completion]:
        """Complete subdirectories of the current directory."""
        for item in sorted(Path.cwd().iterdir()):
            if item.is_dir() and item.name.startswith(partial):
                yield Completion(item.name, start_position=-len(partial))

    def _complete_part_directories(self, partial: str) -> Iterable[Completion]:
        """
        Complete directories that contain part files.

        The current directory is offered as '.' when it holds parts itself.
        Shows a message if no such directory exists.
        """
        cwd = Path.cwd()
        candidates = []
        if has_part_files(cwd):
            candidates.append(".")
        for item in sorted(cwd.iterdir()):
            if item.is_dir() and has_part_files(item):
                candidates.append(item.name)

        if not candidates:
            if not partial:
                yield Completion(
                    "",
                    start_position=0,
                    display="(no directories with parts found)",
                )
            return

        for name in candidates:
            if name.startswith(partial):
                yield Completion(name, start_position=-len(partial))
