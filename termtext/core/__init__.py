"""Core types and interfaces."""

from termtext.core.cancel import CancellationToken
from termtext.core.constants import MAX_INT, MAX_STRING_LENGTH
from termtext.core.errors import (
    BufferOverflowError,
    ConfigError,
    InputTypeError,
    OperationCancelledError,
    OversizedResultError,
    TermTextError,
    UnhandledLimitWarning,
    UnhandledSequenceWarning,
)
from termtext.core.types import (
    START,
    Classification,
    ControlFamily,
    ErrorCode,
    Position,
    TermCap,
    Token,
)

__all__ = [
    "CancellationToken",
    "MAX_INT",
    "MAX_STRING_LENGTH",
    # Errors
    "TermTextError",
    "ConfigError",
    "InputTypeError",
    "OversizedResultError",
    "BufferOverflowError",
    "OperationCancelledError",
    "UnhandledSequenceWarning",
    "UnhandledLimitWarning",
    # Scan types
    "Classification",
    "ControlFamily",
    "TermCap",
    "ErrorCode",
    "Position",
    "START",
    "Token",
]
