"""Cancellation support for long element loops."""

from termtext.core.errors import OperationCancelledError


class CancellationToken:
    """Token for cooperative cancellation of batch operations.

    Every operation that loops over a collection checks the token between
    elements. Elements finished before the check are complete, but the
    operation as a whole is abandoned and returns nothing.

    Example:
        token = CancellationToken()

        # From a signal handler or another thread:
        token.cancel()

        strip_ctl(lines, cancel=token)  # raises OperationCancelledError
    """

    def __init__(self) -> None:
        self._cancelled = False

    @property
    def is_cancelled(self) -> bool:
        """Check if cancellation has been requested."""
        return self._cancelled

    def cancel(self) -> None:
        """Request cancellation."""
        self._cancelled = True

    def raise_if_cancelled(self) -> None:
        """Raise OperationCancelledError if cancellation was requested.

        Raises:
            OperationCancelledError: If cancel() was called.
        """
        if self._cancelled:
            raise OperationCancelledError("Operation cancelled")

    def reset(self) -> None:
        """Reset the token for reuse."""
        self._cancelled = False
