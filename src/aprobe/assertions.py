r"""Implement helpers turning failed checks into errors.

The retry executor and the batch aggregator only report results. These
helpers are for callers, typically test suites, that want a failed
check to raise.
"""

from __future__ import annotations

__all__ = ["assert_reachable", "raise_for_failures"]

from typing import TYPE_CHECKING

from aprobe.batch import failed_entries
from aprobe.exceptions import ProbeError
from aprobe.execute import execute

if TYPE_CHECKING:
    from collections.abc import Iterable

    from aprobe.batch import BatchEntry
    from aprobe.context import BaseProbeContext
    from aprobe.outcome import ProbeResult
    from aprobe.policy import RetryPolicy


async def assert_reachable(
    context: BaseProbeContext,
    target: str,
    policy: RetryPolicy | None = None,
) -> ProbeResult:
    r"""Probe a target and raise if the check fails.

    Args:
        context: The execution context to probe through.
        target: The URL or route to probe.
        policy: The retry policy. Defaults to ``DEFAULT_POLICY``.

    Returns:
        The successful result.

    Raises:
        ProbeError: If the check did not succeed.

    Example:
        ```pycon
        >>> import asyncio
        >>> from aprobe.assertions import assert_reachable
        >>> from aprobe.context import HttpProbeContext
        >>> async def main():
        ...     async with HttpProbeContext(base_url="http://localhost:3000") as context:
        ...         await assert_reachable(context, "/about")
        ...
        >>> asyncio.run(main())  # doctest: +SKIP

        ```
    """
    result = await execute(context, target, policy)
    if not result.succeeded:
        raise ProbeError(
            target=target,
            message=(
                f"Navigation to {target} should succeed "
                f"(status: {result.status}, attempts: {result.attempts})"
            ),
            status=result.status,
            attempts=result.attempts,
            result=result,
        )
    return result


def raise_for_failures(entries: Iterable[BatchEntry]) -> None:
    r"""Raise one error listing every failed entry of a batch.

    Args:
        entries: The entries returned by ``run_batch``.

    Raises:
        ProbeError: If at least one entry failed. The error describes
            the first failure and its message lists all of them.

    Example:
        ```pycon
        >>> from aprobe.assertions import raise_for_failures
        >>> from aprobe.batch import BatchEntry
        >>> from aprobe.outcome import ProbeResult
        >>> raise_for_failures([BatchEntry("/", ProbeResult(succeeded=True, status=200, attempts=1))])

        ```
    """
    failures = failed_entries(entries)
    if not failures:
        return
    lines = [f"{len(failures)} target(s) unreachable:"]
    lines.extend(
        f"  {entry.target}: {entry.result.error} "
        f"(status: {entry.result.status}, attempts: {entry.result.attempts})"
        for entry in failures
    )
    first = failures[0]
    raise ProbeError(
        target=first.target,
        message="\n".join(lines),
        status=first.result.status,
        attempts=first.result.attempts,
        result=first.result,
    )
