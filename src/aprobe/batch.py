r"""Implement the aggregation of reachability checks over many targets."""

from __future__ import annotations

__all__ = ["BatchEntry", "failed_entries", "run_batch"]

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from aprobe.context import HttpProbeContext
from aprobe.scoped import check_scoped
from aprobe.utils.structured_logging import probe_id_scope

if TYPE_CHECKING:
    from collections.abc import Iterable

    from aprobe.callbacks import CallbackConfig
    from aprobe.outcome import ProbeResult
    from aprobe.policy import RetryPolicy
    from aprobe.scoped import ContextFactory

logger: logging.Logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BatchEntry:
    """The result of checking one target of a batch.

    Attributes:
        target: The target that was checked.
        result: The result of the check.
    """

    target: str
    result: ProbeResult


async def run_batch(
    targets: Iterable[str],
    policy: RetryPolicy | None = None,
    *,
    resource_factory: ContextFactory = HttpProbeContext,
    callbacks: CallbackConfig | None = None,
) -> list[BatchEntry]:
    r"""Check every target, one at a time, each on a fresh context.

    Every target is checked even if earlier ones failed, so a single
    run reports all failing targets. Nothing is raised for failed
    checks; use ``raise_for_failures`` to turn them into an error.

    Args:
        targets: The URLs or routes to check, in order.
        policy: The retry policy shared by all checks.
        resource_factory: Factory of the execution context of each
            check. Defaults to ``HttpProbeContext``.
        callbacks: Optional lifecycle callbacks.

    Returns:
        One entry per target, in the order of ``targets``.

    Example:
        ```pycon
        >>> import asyncio
        >>> from functools import partial
        >>> from aprobe import CI_POLICY, run_batch
        >>> from aprobe.context import HttpProbeContext
        >>> factory = partial(HttpProbeContext, base_url="http://localhost:3000")
        >>> entries = asyncio.run(
        ...     run_batch(["/", "/about"], CI_POLICY, resource_factory=factory)
        ... )  # doctest: +SKIP

        ```
    """
    entries = []
    for target in targets:
        with probe_id_scope(target):
            result = await check_scoped(resource_factory, target, policy, callbacks=callbacks)
        entries.append(BatchEntry(target=target, result=result))

    failures = failed_entries(entries)
    if failures:
        logger.info(f"{len(failures)}/{len(entries)} target(s) unreachable")
    return entries


def failed_entries(entries: Iterable[BatchEntry]) -> list[BatchEntry]:
    """Return the entries whose check did not succeed.

    Example:
        ```pycon
        >>> from aprobe.batch import BatchEntry, failed_entries
        >>> from aprobe.outcome import ProbeResult
        >>> entries = [
        ...     BatchEntry("/", ProbeResult(succeeded=True, status=200, attempts=1)),
        ...     BatchEntry("/x", ProbeResult(succeeded=False, status=404, attempts=1)),
        ... ]
        >>> [entry.target for entry in failed_entries(entries)]
        ['/x']

        ```
    """
    return [entry for entry in entries if not entry.result.succeeded]
