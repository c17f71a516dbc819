r"""Retry policy dataclass, defaults and named presets.

This module provides the immutable ``RetryPolicy`` shared read-only by
every check, the default values, and the two named presets used to
probe targets in CI and in local development. The preset is always
chosen explicitly by the caller; nothing here reads the process
environment on its own.
"""

from __future__ import annotations

__all__ = [
    "CI_POLICY",
    "DEFAULT_INITIAL_DELAY_MS",
    "DEFAULT_MAX_ATTEMPTS",
    "DEFAULT_MAX_TOTAL_WAIT_MS",
    "DEFAULT_PER_ATTEMPT_TIMEOUT_MS",
    "DEFAULT_POLICY",
    "LOCAL_POLICY",
    "WARMUP_POLICY",
    "RetryPolicy",
    "policy_from_env",
    "select_policy",
]

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any

from aprobe.core.validation import validate_policy_params

if TYPE_CHECKING:
    from collections.abc import Mapping

# Default maximum number of probe invocations for one check
DEFAULT_MAX_ATTEMPTS = 3

# Base delay of the linear backoff
# Wait time = initial_delay_ms * (attempt + 1)
# With 1000: 1st retry waits 1s, 2nd waits 2s
DEFAULT_INITIAL_DELAY_MS = 1000

# Budget for the cumulative wait between attempts (not attempt duration)
DEFAULT_MAX_TOTAL_WAIT_MS = 30000

# Timeout of a single probe invocation
DEFAULT_PER_ATTEMPT_TIMEOUT_MS = 15000


@dataclass(frozen=True)
class RetryPolicy:
    """Immutable configuration of the retry executor.

    A policy is constructed once and can be shared freely across
    sequential or concurrent checks.

    Args:
        max_attempts: Maximum number of probe invocations. Must be >= 1.
        initial_delay_ms: Base delay of the linear backoff in
            milliseconds. Must be >= 0.
        max_total_wait_ms: Ceiling on the cumulative wait between
            attempts in milliseconds. Must be >= 0.
        per_attempt_timeout_ms: Timeout of a single probe invocation in
            milliseconds. ``0`` disables the timeout. Must be >= 0.

    Example:
        ```pycon
        >>> from aprobe.policy import RetryPolicy
        >>> policy = RetryPolicy()
        >>> policy.max_attempts
        3
        >>> policy.merge(max_attempts=5).max_attempts
        5
        >>> policy.max_attempts  # Original unchanged
        3

        ```
    """

    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    initial_delay_ms: int = DEFAULT_INITIAL_DELAY_MS
    max_total_wait_ms: int = DEFAULT_MAX_TOTAL_WAIT_MS
    per_attempt_timeout_ms: int = DEFAULT_PER_ATTEMPT_TIMEOUT_MS

    def __post_init__(self) -> None:
        """Validate policy parameters after initialization.

        Raises:
            ValueError: If any parameter fails validation.
        """
        validate_policy_params(
            max_attempts=self.max_attempts,
            initial_delay_ms=self.initial_delay_ms,
            max_total_wait_ms=self.max_total_wait_ms,
            per_attempt_timeout_ms=self.per_attempt_timeout_ms,
        )

    def merge(self, **overrides: Any) -> RetryPolicy:
        """Create a new policy with specified parameters overridden.

        Only non-None override values are applied.

        Args:
            **overrides: Keyword arguments for parameters to override.

        Returns:
            A new ``RetryPolicy`` instance with overrides applied.

        Example:
            ```pycon
            >>> from aprobe.policy import LOCAL_POLICY
            >>> LOCAL_POLICY.merge(max_attempts=4, initial_delay_ms=None).max_attempts
            4

            ```
        """
        filtered_overrides = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **filtered_overrides)


DEFAULT_POLICY = RetryPolicy()

# Larger budget for cold CI runners where the first requests compile pages
CI_POLICY = RetryPolicy(
    max_attempts=3,
    initial_delay_ms=2000,
    max_total_wait_ms=25000,
    per_attempt_timeout_ms=15000,
)

LOCAL_POLICY = RetryPolicy(
    max_attempts=2,
    initial_delay_ms=500,
    max_total_wait_ms=10000,
    per_attempt_timeout_ms=10000,
)

# Warm-up only needs to trigger compilation, so it uses the short budget
WARMUP_POLICY = LOCAL_POLICY


def select_policy(ci: bool) -> RetryPolicy:
    """Return the named preset for the given environment.

    Args:
        ci: Whether the caller runs in a CI environment.

    Returns:
        ``CI_POLICY`` if ``ci`` is true, otherwise ``LOCAL_POLICY``.

    Example:
        ```pycon
        >>> from aprobe.policy import CI_POLICY, select_policy
        >>> select_policy(ci=True) is CI_POLICY
        True

        ```
    """
    return CI_POLICY if ci else LOCAL_POLICY


def policy_from_env(environ: Mapping[str, str]) -> RetryPolicy:
    """Select the preset from an explicit environment mapping.

    The CI preset is selected when the ``CI`` variable is set to a
    non-empty value. Pass ``os.environ`` to use the process environment.

    Args:
        environ: The environment variables to inspect.

    Returns:
        The selected preset.

    Example:
        ```pycon
        >>> from aprobe.policy import LOCAL_POLICY, policy_from_env
        >>> policy_from_env({"CI": "true"}).max_attempts
        3
        >>> policy_from_env({}) is LOCAL_POLICY
        True

        ```
    """
    return select_policy(ci=bool(environ.get("CI")))
