"""Control-sequence-aware text operations for terminal strings."""

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
from termtext.ops import (
    UnhandledSequence,
    collapse_whitespace,
    has_visible,
    normalize_state,
    strip_ctl,
    trim_ws,
    unhandled_ctl,
    visible_width,
)

__version__ = "0.1.0"

__all__ = [
    # Operations
    "strip_ctl",
    "collapse_whitespace",
    "trim_ws",
    "unhandled_ctl",
    "UnhandledSequence",
    "has_visible",
    "visible_width",
    "normalize_state",
    # Errors
    "TermTextError",
    "ConfigError",
    "InputTypeError",
    "OversizedResultError",
    "BufferOverflowError",
    "OperationCancelledError",
    # Warnings
    "UnhandledSequenceWarning",
    "UnhandledLimitWarning",
]
