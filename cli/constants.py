"""CLI constants and configuration."""

from prompt_toolkit.styles import Style

COMMANDS = ["slice", "rebuild", "cleanup", "config", "clear", "exit", "help"]
UNIT_TOKENS = ["-b", "-kb", "-mb", "-gb"]

STYLE = Style.from_dict(
    {
        "prompt": "#2E9CCA bold",
        "command": "#0088ff bold",
    }
)

WELCOME_TITLE = "FileSlicer - split files into indexed parts and rebuild them"
WELCOME_HELP = "Type 'help' for commands or 'exit' to quit.\n"

PROMPT_TEXT = "slicer> "

USAGE_TEXT = """
=== [ USAGE ] ===
Slice:   fileslicer [archive path] [destination directory] [size] [unit optional]
or       fileslicer [destination directory] [archive path] [size] [unit optional]

         Units: -b (bytes, default), -kb, -mb, -gb
         Example: fileslicer -s my.zip parts 10 -mb
-------------------
Rebuild: fileslicer -r [directory with parts] [destination archive path]
         or just run fileslicer in a folder with .bin files to auto rebuild
-------------------
Shell:   fileslicer shell
Config:  fileslicer config [key value]
"""

HELP_TEXT = """Available commands:
  slice <file> <directory> <size> [unit]   Split file into parts (units: -b, -kb, -mb, -gb)
  rebuild <directory> <output>             Rebuild file from the parts in directory
  cleanup <directory>                      Delete part files from directory
  config [<key> <value>]                   Show settings, or change one setting
  clear                                    Clear screen and redisplay welcome message
  help                                     Show this help
  exit                                     Exit shell

Parts are ordered by the index stored inside each file, not by file name.
Examples:
  slice backup.zip parts 10 -mb
  rebuild parts restored.zip
  cleanup parts
  config buffer_size 65536"""
