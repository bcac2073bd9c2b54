"""Scanning, interpreting and re-emitting control sequences."""

from termtext.sequences.buffer import WriteBuffer
from termtext.sequences.scanner import iter_tokens, read_next
from termtext.sequences.sgr import EMPTY_STYLE, Color, Style
from termtext.sequences.state import EMPTY_STATE, FormatState, Hyperlink

__all__ = [
    "read_next",
    "iter_tokens",
    "WriteBuffer",
    "Style",
    "Color",
    "EMPTY_STYLE",
    "FormatState",
    "Hyperlink",
    "EMPTY_STATE",
]
