"""Core types for termtext.

This module defines the values the scanner threads through a scan: positions,
classifications, control families, terminal capabilities, error codes, and
the token returned by every scan step. All dataclasses are frozen so that a
step never mutates what the caller holds.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum, IntFlag
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from termtext.sequences.state import FormatState


class Classification(Enum):
    """What a single scan step consumed."""

    PLAIN = "plain"
    PROTECTED_WS = "protected_ws"  # tab, newline
    WHITESPACE = "whitespace"  # space
    STYLE = "style"
    HYPERLINK = "hyperlink"
    OTHER = "other"
    INVALID = "invalid"

    @property
    def is_control(self) -> bool:
        """True for every kind that is dropped by stripping."""
        return self in _CONTROL_KINDS

    @property
    def is_recognized(self) -> bool:
        """True for well-formed controls (style, hyperlink, other)."""
        return self in _RECOGNIZED_KINDS


_RECOGNIZED_KINDS = frozenset(
    {Classification.STYLE, Classification.HYPERLINK, Classification.OTHER}
)
_CONTROL_KINDS = _RECOGNIZED_KINDS | {Classification.INVALID}


class ControlFamily(IntFlag):
    """Families of control sequences a caller may treat as controls."""

    NONE = 0
    C0 = 1
    SGR = 2
    CSI = 4
    ESC = 8
    URL = 16
    OSC = 32
    ALL = C0 | SGR | CSI | ESC | URL | OSC


class TermCap(IntFlag):
    """Color capabilities the target terminal is assumed to support."""

    NONE = 0
    BRIGHT = 1
    COLOR256 = 2
    TRUECOLOR = 4
    ALL = BRIGHT | COLOR256 | TRUECOLOR


class ErrorCode(IntEnum):
    """Why a sequence was classified as invalid."""

    UNKNOWN_SGR = 1
    UNSUPPORTED_COLOR = 2
    MALFORMED_CSI = 3
    UNTERMINATED = 4
    MALFORMED_ESC = 5
    MALFORMED_OSC = 6

    @property
    def description(self) -> str:
        return _ERROR_DESCRIPTIONS[self]


_ERROR_DESCRIPTIONS = {
    ErrorCode.UNKNOWN_SGR: "SGR sequence with uninterpreted parameters",
    ErrorCode.UNSUPPORTED_COLOR: "SGR color not supported by the terminal capabilities",
    ErrorCode.MALFORMED_CSI: "malformed CSI sequence",
    ErrorCode.UNTERMINATED: "sequence not terminated before end of string",
    ErrorCode.MALFORMED_ESC: "malformed escape sequence",
    ErrorCode.MALFORMED_OSC: "malformed OSC sequence or control string",
}


@dataclass(frozen=True)
class Position:
    """Where a scan is in a string.

    Attributes:
        byte: UTF-8 byte offset.
        width: Display width of the visible text consumed so far.
        char: Index into the Python string.
    """

    byte: int = 0
    width: int = 0
    char: int = 0

    def advance(self, chars: int, byte_len: int, width: int = 0) -> Position:
        """Return the position after consuming a span."""
        return Position(self.byte + byte_len, self.width + width, self.char + chars)


START = Position()


@dataclass(frozen=True)
class Token:
    """Result of one scan step.

    Attributes:
        kind: Classification of the consumed span.
        start: Position before the span.
        end: Position after the span.
        state: Format state after folding the span in.
        error: Error code for invalid spans, None otherwise.
        warn: True when this token should trigger the caller's one-shot warning.
        family: Control family of the span, None for text.
    """

    kind: Classification
    start: Position
    end: Position
    state: FormatState
    error: ErrorCode | None = None
    warn: bool = False
    family: ControlFamily | None = None

    @property
    def length(self) -> int:
        """Number of characters consumed."""
        return self.end.char - self.start.char

    def text(self, source: str) -> str:
        """Slice the consumed span out of the scanned string."""
        return source[self.start.char:self.end.char]
