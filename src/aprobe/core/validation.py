r"""Parameter validation utilities for retry policies.

This module provides validation functions to ensure retry policy values
meet the required constraints before being used by the retry executor.
"""

from __future__ import annotations

__all__ = ["validate_policy_params", "validate_timeout_ms"]


def validate_timeout_ms(timeout_ms: int) -> None:
    """Validate a per-attempt timeout in milliseconds.

    Args:
        timeout_ms: The timeout in milliseconds. ``0`` disables the timeout.

    Raises:
        ValueError: If ``timeout_ms`` is negative.

    Example:
        ```pycon
        >>> from aprobe.core.validation import validate_timeout_ms
        >>> validate_timeout_ms(15000)
        >>> validate_timeout_ms(0)
        >>> validate_timeout_ms(-1)  # doctest: +SKIP
        Traceback (most recent call last):
        ...
        ValueError: per_attempt_timeout_ms must be >= 0, got -1

        ```
    """
    if timeout_ms < 0:
        msg = f"per_attempt_timeout_ms must be >= 0, got {timeout_ms}"
        raise ValueError(msg)


def validate_policy_params(
    max_attempts: int,
    initial_delay_ms: int = 0,
    max_total_wait_ms: int = 0,
    per_attempt_timeout_ms: int = 0,
) -> None:
    """Validate retry policy parameters.

    Args:
        max_attempts: Maximum number of probe invocations. Must be >= 1.
        initial_delay_ms: Base delay of the linear backoff. Must be >= 0.
        max_total_wait_ms: Budget for the cumulative wait between
            attempts. Must be >= 0.
        per_attempt_timeout_ms: Timeout of a single probe invocation.
            Must be >= 0.

    Raises:
        ValueError: If any parameter is out of range.

    Example:
        ```pycon
        >>> from aprobe.core import validate_policy_params
        >>> validate_policy_params(max_attempts=3)
        >>> validate_policy_params(max_attempts=2, initial_delay_ms=500, max_total_wait_ms=10000)
        >>> validate_policy_params(max_attempts=0)  # doctest: +SKIP

        ```
    """
    if max_attempts < 1:
        msg = f"max_attempts must be >= 1, got {max_attempts}"
        raise ValueError(msg)
    if initial_delay_ms < 0:
        msg = f"initial_delay_ms must be >= 0, got {initial_delay_ms}"
        raise ValueError(msg)
    if max_total_wait_ms < 0:
        msg = f"max_total_wait_ms must be >= 0, got {max_total_wait_ms}"
        raise ValueError(msg)
    validate_timeout_ms(per_attempt_timeout_ms)
