r"""Exceptions raised by the aprobe package.

The retry executor never raises for probe failures. These exceptions
are raised by the assertion helpers, which turn a failed result into an
error, and by execution contexts that were used after being torn down.
"""

from __future__ import annotations

__all__ = ["ProbeContextClosedError", "ProbeError"]

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from aprobe.outcome import ProbeResult


class ProbeError(RuntimeError):
    """Exception raised when a reachability check is asserted to succeed
    but failed.

    Args:
        target: The target (URL or route) that was checked.
        message: A descriptive error message.
        status: The last HTTP status code observed, if any.
        attempts: The number of attempts that were made.
        result: The full result of the failed check, if available.

    Example:
        ```pycon
        >>> from aprobe.exceptions import ProbeError
        >>> error = ProbeError(target="/about", message="unreachable", status=404, attempts=1)
        >>> error.target
        '/about'
        >>> error.status
        404

        ```
    """

    def __init__(
        self,
        target: str,
        message: str,
        status: int | None = None,
        attempts: int = 0,
        result: ProbeResult | None = None,
    ) -> None:
        super().__init__(message)
        self.target = target
        self.status = status
        self.attempts = attempts
        self.result = result


class ProbeContextClosedError(RuntimeError):
    """Exception raised when an execution context is used after it was
    closed.

    The retry executor treats this error, raised while waiting between
    attempts, as an abort of the whole check.
    """
