"""Helpers shared by the element-wise operations."""

from __future__ import annotations

import warnings
from collections.abc import Sequence

from termtext.core.cancel import CancellationToken
from termtext.core.errors import InputTypeError, UnhandledSequenceWarning
from termtext.core.types import Token

Strings = str | Sequence[str | None]


def as_elements(x: Strings) -> list[str | None]:
    """Validate the input collection.

    A bare string is a one-element collection. A list is used as is (and
    returned unchanged by operations that change nothing); other sequences are
    copied into a list once.

    Raises:
        InputTypeError: If ``x`` or one of its elements has the wrong type.
    """
    if isinstance(x, str):
        return [x]
    if isinstance(x, list):
        elements = x
    elif isinstance(x, Sequence):
        elements = list(x)
    else:
        raise InputTypeError(
            f"Expected a string or a sequence of strings, got {type(x).__name__}"
        )
    for i, element in enumerate(elements):
        if element is not None and not isinstance(element, str):
            raise InputTypeError(
                f"Element at index [{i}] is {type(element).__name__}, expected str or None"
            )
    return elements


def checkpoint(cancel: CancellationToken | None) -> None:
    """Cancellation checkpoint between elements."""
    if cancel is not None:
        cancel.raise_if_cancelled()


class OneShotWarning:
    """At most one UnhandledSequenceWarning per call.

    ``warned`` is passed to the scanner so that only the first offending token
    carries a ``warn`` flag.
    """

    def __init__(self, enabled: bool) -> None:
        self.warned = not enabled

    def check(self, token: Token, index: int) -> None:
        if token.warn and not self.warned:
            self.warned = True
            reason = token.error.description if token.error is not None else "unknown"
            warnings.warn(
                f"Encountered invalid or unsupported control sequence at index "
                f"[{index}]: {reason}; use warn=False to turn "
                f"off these warnings.",
                UnhandledSequenceWarning,
                stacklevel=4,
            )


class ResultList:
    """Copy-on-write view of the input collection.

    The input is duplicated only on the first ``set``; until then ``value``
    is the input list itself.
    """

    def __init__(self, source: list[str | None]) -> None:
        self.source = source
        self._result: list[str | None] | None = None
        self.changed = 0

    def set(self, index: int, value: str) -> None:
        if self._result is None:
            self._result = list(self.source)
        self.changed += 1
        self._result[index] = value

    @property
    def value(self) -> list[str | None]:
        return self.source if self._result is None else self._result
