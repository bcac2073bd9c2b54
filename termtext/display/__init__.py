"""Terminal output for the command line interface."""

from termtext.display.console import get_console, set_console
from termtext.display.report import unhandled_table

__all__ = [
    "get_console",
    "set_console",
    "unhandled_table",
]
