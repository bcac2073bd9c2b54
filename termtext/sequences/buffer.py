"""Output buffer with a two-pass measure-then-write protocol.

Pass 1 (``reset``) counts the characters every write would produce without
keeping them. ``size`` then fixes the capacity to that count, and pass 2
performs the same writes for real. A write that would overrun the capacity is
an internal error, never silently truncated.

``reserve`` fixes a capacity without measuring, for callers that know an upper
bound in advance (for example the longest element of a collection) and reuse
one buffer for many elements with ``clear``.

Usage:
    buff = WriteBuffer()
    for writing in (False, True):
        if writing:
            buff.size()
        else:
            buff.reset()
        buff.write("...")
    result = buff.getvalue()
"""

from __future__ import annotations

from termtext.core.constants import MAX_STRING_LENGTH
from termtext.core.errors import BufferOverflowError, OversizedResultError


class WriteBuffer:
    """Owned text buffer for one operation.

    Attributes:
        measured: Characters counted during the last measure pass.
        capacity: Maximum characters the write pass may produce, None while measuring.
    """

    def __init__(self, limit: int = MAX_STRING_LENGTH, index: int = 0) -> None:
        self.limit = limit
        self.index = index
        self.measured = 0
        self.capacity: int | None = None
        self._chunks: list[str] = []
        self._used = 0

    @property
    def measuring(self) -> bool:
        return self.capacity is None

    def reset(self, index: int | None = None) -> None:
        """Start a measure pass, discarding any written content."""
        if index is not None:
            self.index = index
        self.measured = 0
        self.capacity = None
        self._chunks = []
        self._used = 0

    def size(self) -> None:
        """End the measure pass and start a write pass of exactly that size."""
        self.reserve(self.measured)

    def reserve(self, capacity: int) -> None:
        """Start a write pass with a known capacity.

        Raises:
            OversizedResultError: If ``capacity`` exceeds the length limit.
        """
        if capacity > self.limit:
            raise OversizedResultError(self.index, capacity, self.limit)
        self.capacity = capacity
        self.clear()

    def clear(self, index: int | None = None) -> None:
        """Discard written content, keeping the current capacity."""
        if index is not None:
            self.index = index
        self._chunks = []
        self._used = 0

    def write(self, text: str) -> None:
        """Count (measure pass) or append (write pass) ``text``.

        Raises:
            BufferOverflowError: If the write pass exceeds the capacity.
            OversizedResultError: If the measured size exceeds the length limit.
        """
        if not text:
            return
        if self.capacity is None:
            self.measured += len(text)
            if self.measured > self.limit:
                raise OversizedResultError(self.index, self.measured, self.limit)
            return
        if self._used + len(text) > self.capacity:
            raise BufferOverflowError(
                f"Write of {len(text)} characters at index [{self.index}] overruns "
                f"buffer ({self._used} of {self.capacity} used)"
            )
        self._chunks.append(text)
        self._used += len(text)

    def __len__(self) -> int:
        return self.measured if self.capacity is None else self._used

    def getvalue(self) -> str:
        """Return everything written in the current write pass."""
        return "".join(self._chunks)
