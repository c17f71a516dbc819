r"""Implement the entry point to probe a target with automatic retry."""

from __future__ import annotations

__all__ = ["execute"]

from typing import TYPE_CHECKING

from aprobe.retry.executor_async import AsyncRetryExecutor

if TYPE_CHECKING:
    from aprobe.callbacks import CallbackConfig
    from aprobe.context import BaseProbeContext
    from aprobe.outcome import ProbeResult
    from aprobe.policy import RetryPolicy


async def execute(
    context: BaseProbeContext,
    target: str,
    policy: RetryPolicy | None = None,
    *,
    callbacks: CallbackConfig | None = None,
) -> ProbeResult:
    r"""Probe a target with automatic retry on transient failures.

    The probe runs on the given execution context, which stays owned by
    the caller. Use ``check_scoped`` to run it on a fresh context.

    Args:
        context: The execution context to probe through.
        target: The URL or route to probe.
        policy: The retry policy. Defaults to ``DEFAULT_POLICY``.
        callbacks: Optional lifecycle callbacks.

    Returns:
        The result of the check. Probe failures are reported in the
        result and never raised.

    Example:
        ```pycon
        >>> import asyncio
        >>> from aprobe import execute
        >>> from aprobe.context import HttpProbeContext
        >>> async def main():
        ...     async with HttpProbeContext(base_url="http://localhost:3000") as context:
        ...         result = await execute(context, "/about")
        ...     assert result.succeeded
        ...
        >>> asyncio.run(main())  # doctest: +SKIP

        ```
    """
    return await AsyncRetryExecutor(policy, callbacks).execute(context, target)
