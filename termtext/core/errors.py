"""Typed exception and warning hierarchy for termtext."""

from __future__ import annotations


class TermTextError(Exception):
    """Base class for all termtext errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ConfigError(TermTextError):
    """Raised for invalid call options (unknown family names, bad enum values)."""


class InputTypeError(TermTextError, TypeError):
    """Raised when the input is not a string or a sequence of strings/None."""


class OversizedResultError(TermTextError):
    """Raised when a result string would exceed the representable length."""

    def __init__(self, index: int, length: int, limit: int) -> None:
        self.index = index
        self.length = length
        self.limit = limit
        super().__init__(
            f"Result at index [{index}] would be {length} characters long, "
            f"exceeding the limit of {limit}"
        )


class BufferOverflowError(TermTextError):
    """Internal error: a write pass produced more output than was measured."""


class OperationCancelledError(TermTextError):
    """Raised at a cancellation checkpoint once cancellation was requested."""


# === Warnings ===


class UnhandledSequenceWarning(UserWarning):
    """Emitted at most once per call for the first invalid or unsupported sequence."""


class UnhandledLimitWarning(UserWarning):
    """Emitted when the unhandled-sequence report is truncated."""
