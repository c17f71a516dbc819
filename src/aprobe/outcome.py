r"""Attempt outcomes, their classification and the final check result.

One probe attempt ends either with a status code or with an exception.
``classify`` maps that raw result onto one of the outcome types below,
which drive the retry executor:

- ``Success``: the target answered with 200
- ``TerminalFailure``: a definitive answer that retrying cannot change
- ``TransientFailure``: a server error or a raised exception, retryable
- ``Aborted``: the execution context was torn down while waiting
"""

from __future__ import annotations

__all__ = [
    "HTTP_OK",
    "HTTP_SERVER_ERROR",
    "Aborted",
    "Outcome",
    "ProbeResult",
    "Success",
    "TerminalFailure",
    "TransientFailure",
    "classify",
    "error_message",
]

from dataclasses import dataclass
from typing import Union

# The only status code considered a successful probe
HTTP_OK = 200

# Statuses at or above this threshold are retried
HTTP_SERVER_ERROR = 500


@dataclass(frozen=True)
class Success:
    """The target answered with the success status code.

    Attributes:
        status: The HTTP status code.
    """

    status: int


@dataclass(frozen=True)
class TerminalFailure:
    """The target answered with a definitive non-success status.

    Attributes:
        status: The HTTP status code.
    """

    status: int

    @property
    def error_message(self) -> str:
        return f"Received status {self.status}"


@dataclass(frozen=True)
class TransientFailure:
    """The attempt failed in a way that may succeed on retry.

    Attributes:
        status: The HTTP status code, or ``None`` if the attempt raised.
        error_message: The message of the raised exception, if any.
    """

    status: int | None = None
    error_message: str | None = None


@dataclass(frozen=True)
class Aborted:
    """The execution context became unusable while waiting to retry.

    Attributes:
        error_message: Why the wait could not complete.
    """

    error_message: str


Outcome = Union[Success, TerminalFailure, TransientFailure, Aborted]


@dataclass(frozen=True)
class ProbeResult:
    """The result of one reachability check.

    Attributes:
        succeeded: Whether the check terminated with a ``Success``.
        status: The last HTTP status code observed, if any.
        attempts: How many times the probe was invoked.
        error: A human-readable diagnostic, ``None`` on success.
        total_waited_ms: The cumulative wait between attempts, counted as
            the sum of the requested (budget-capped) delays rather than
            the time the waits actually took.

    Example:
        ```pycon
        >>> from aprobe.outcome import ProbeResult
        >>> result = ProbeResult(succeeded=True, status=200, attempts=1)
        >>> result.error is None
        True

        ```
    """

    succeeded: bool
    status: int | None
    attempts: int
    error: str | None = None
    total_waited_ms: int = 0


def error_message(exc: BaseException) -> str:
    """Return a non-empty diagnostic message for an exception.

    Example:
        ```pycon
        >>> from aprobe.outcome import error_message
        >>> error_message(ConnectionError("connection refused"))
        'connection refused'
        >>> error_message(TimeoutError())
        'TimeoutError'

        ```
    """
    return str(exc) or type(exc).__name__


def classify(attempt_result: int | Exception) -> Outcome:
    """Classify the raw result of one attempt.

    Args:
        attempt_result: The status code returned by the probe, or the
            exception it raised.

    Returns:
        ``Success`` for status 200, ``TransientFailure`` for a status
        >= 500 or any exception, ``TerminalFailure`` for every other
        status.

    Example:
        ```pycon
        >>> from aprobe.outcome import classify
        >>> classify(200)
        Success(status=200)
        >>> classify(404)
        TerminalFailure(status=404)
        >>> classify(503)
        TransientFailure(status=503, error_message=None)
        >>> classify(ConnectionError("refused"))
        TransientFailure(status=None, error_message='refused')

        ```
    """
    if isinstance(attempt_result, Exception):
        return TransientFailure(error_message=error_message(attempt_result))
    if attempt_result == HTTP_OK:
        return Success(status=attempt_result)
    if attempt_result >= HTTP_SERVER_ERROR:
        return TransientFailure(status=attempt_result)
    # Redirects and client errors, and any other non-200 status below 500
    return TerminalFailure(status=attempt_result)
