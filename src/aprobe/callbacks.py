r"""Callback types and data structures for observability.

This module lets users hook into the lifecycle of a check for logging,
metrics or progress reporting. Three hooks are available:

- on_attempt: Called before each probe invocation
- on_retry: Called before each wait between attempts
- on_finish: Called once with the final result of the check

Example:
    ```pycon
    >>> from aprobe.callbacks import CallbackConfig, RetryInfo
    >>> def log_retry(retry_info: RetryInfo) -> None:
    ...     print(f"Retry {retry_info.attempt + 1}/{retry_info.max_attempts}")
    ...
    >>> callbacks = CallbackConfig(on_retry=log_retry)

    ```

An exception raised by a callback is logged and otherwise ignored, so a
faulty hook never changes the result of a check.
"""

from __future__ import annotations

__all__ = [
    "AttemptInfo",
    "CallbackConfig",
    "FinishInfo",
    "RetryInfo",
    "invoke_on_attempt",
    "invoke_on_finish",
    "invoke_on_retry",
]

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable

    from aprobe.outcome import Outcome, ProbeResult

logger: logging.Logger = logging.getLogger(__name__)


@dataclass
class AttemptInfo:
    """Information passed to on_attempt callback.

    Attributes:
        target: The target being probed.
        attempt: The attempt about to run (1-indexed).
        max_attempts: Maximum number of attempts configured.
    """

    target: str
    attempt: int
    max_attempts: int


@dataclass
class RetryInfo:
    """Information passed to on_retry callback.

    Attributes:
        target: The target being probed.
        attempt: The attempt that just failed (1-indexed).
        max_attempts: Maximum number of attempts configured.
        delay_ms: The wait before the next attempt.
        status: The status code that triggered the retry (if any).
        error: The error message that triggered the retry (if any).
    """

    target: str
    attempt: int
    max_attempts: int
    delay_ms: int
    status: int | None
    error: str | None


@dataclass
class FinishInfo:
    """Information passed to on_finish callback.

    Attributes:
        target: The target that was probed.
        result: The final result of the check.
        outcome: The outcome that terminated the check, ``None`` if the
            check stopped before the first attempt completed.
    """

    target: str
    result: ProbeResult
    outcome: Outcome | None


@dataclass
class CallbackConfig:
    """Configuration for callbacks.

    Attributes:
        on_attempt: Optional callback invoked before each attempt.
        on_retry: Optional callback invoked before each wait.
        on_finish: Optional callback invoked with the final result.
    """

    on_attempt: Callable[[AttemptInfo], None] | None = None
    on_retry: Callable[[RetryInfo], None] | None = None
    on_finish: Callable[[FinishInfo], None] | None = None


def _call_safely(callback: Callable[[Any], None], info: Any) -> None:
    """Call ``callback`` with ``info`` and log any exception it raises."""
    try:
        callback(info)
    except Exception:
        logger.exception(f"{type(info).__name__} callback {callback!r} raised for {info.target}")


def invoke_on_attempt(
    on_attempt: Callable[[AttemptInfo], None] | None,
    *,
    target: str,
    attempt: int,
    max_attempts: int,
) -> None:
    """Invoke on_attempt callback if provided.

    Args:
        on_attempt: Optional callback to invoke before each attempt.
        target: The target being probed.
        attempt: The attempt index (0-indexed internally). The callback
            receives this as a 1-indexed value (attempt + 1).
        max_attempts: Maximum number of attempts.
    """
    if on_attempt is not None:
        _call_safely(
            on_attempt, AttemptInfo(target=target, attempt=attempt + 1, max_attempts=max_attempts)
        )


def invoke_on_retry(
    on_retry: Callable[[RetryInfo], None] | None,
    *,
    target: str,
    attempt: int,
    max_attempts: int,
    delay_ms: int,
    status: int | None,
    error: str | None,
) -> None:
    """Invoke on_retry callback if provided.

    Args:
        on_retry: Optional callback to invoke before each wait.
        target: The target being probed.
        attempt: The index of the failed attempt (0-indexed internally).
            The callback receives this as a 1-indexed value.
        max_attempts: Maximum number of attempts.
        delay_ms: The wait before the next attempt.
        status: The status code of the failed attempt, if any.
        error: The error message of the failed attempt, if any.
    """
    if on_retry is not None:
        _call_safely(
            on_retry,
            RetryInfo(
                target=target,
                attempt=attempt + 1,
                max_attempts=max_attempts,
                delay_ms=delay_ms,
                status=status,
                error=error,
            ),
        )


def invoke_on_finish(
    on_finish: Callable[[FinishInfo], None] | None,
    *,
    target: str,
    result: ProbeResult,
    outcome: Outcome | None,
) -> None:
    """Invoke on_finish callback if provided."""
    if on_finish is not None:
        _call_safely(on_finish, FinishInfo(target=target, result=result, outcome=outcome))
