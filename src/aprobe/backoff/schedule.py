r"""Budget-aware delay computation between probe attempts."""

from __future__ import annotations

__all__ = ["compute_delay"]

import logging
from typing import TYPE_CHECKING

from aprobe.backoff.linear import LinearBackoff

if TYPE_CHECKING:
    from aprobe.policy import RetryPolicy

logger: logging.Logger = logging.getLogger(__name__)


def compute_delay(attempt_index: int, policy: RetryPolicy, total_waited_ms: int) -> int:
    """Compute the wait before the next attempt.

    The delay is the linear backoff for ``attempt_index`` capped by the
    remaining wait budget:

        min(initial_delay_ms * (attempt_index + 1), max_total_wait_ms - total_waited_ms)

    A result <= 0 means that no budget remains and the caller must stop
    retrying without waiting.

    Args:
        attempt_index: The index of the attempt that just failed
            (0-indexed).
        policy: The retry policy providing the base delay and budget.
        total_waited_ms: The cumulative wait spent so far.

    Returns:
        The delay in milliseconds.

    Example:
        ```pycon
        >>> from aprobe.backoff import compute_delay
        >>> from aprobe.policy import RetryPolicy
        >>> policy = RetryPolicy(initial_delay_ms=1000, max_total_wait_ms=2500)
        >>> compute_delay(0, policy, total_waited_ms=0)
        1000
        >>> compute_delay(1, policy, total_waited_ms=1000)  # Capped at the remaining 1500
        1500
        >>> compute_delay(2, policy, total_waited_ms=2500)
        0

        ```
    """
    delay = LinearBackoff(base_delay_ms=policy.initial_delay_ms).calculate(attempt_index)
    remaining = policy.max_total_wait_ms - total_waited_ms
    if delay > remaining:
        logger.debug(
            f"Capping delay from {delay}ms to {remaining}ms "
            f"(max_total_wait_ms={policy.max_total_wait_ms}ms)"
        )
        delay = remaining
    return delay
