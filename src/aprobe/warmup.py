r"""Implement the warm-up of slow targets before they are checked.

Development servers compile pages on their first request, which makes
the first real check of a route slow or flaky. Probing the routes once
beforehand triggers that compilation.
"""

from __future__ import annotations

__all__ = ["DEFAULT_WARMUP_TARGETS", "warmup_targets"]

import logging
from typing import TYPE_CHECKING

from aprobe.batch import BatchEntry
from aprobe.execute import execute
from aprobe.policy import WARMUP_POLICY

if TYPE_CHECKING:
    from collections.abc import Iterable

    from aprobe.context import BaseProbeContext
    from aprobe.policy import RetryPolicy

logger: logging.Logger = logging.getLogger(__name__)

# Routes that are slow to compile on a cold development server
DEFAULT_WARMUP_TARGETS: tuple[str, ...] = ("/", "/about", "/domains", "/auth")


async def warmup_targets(
    context: BaseProbeContext,
    targets: Iterable[str] = DEFAULT_WARMUP_TARGETS,
    policy: RetryPolicy = WARMUP_POLICY,
) -> list[BatchEntry]:
    r"""Probe each target once, sequentially, on a shared context.

    Failed probes are logged and otherwise ignored: the checks that
    follow the warm-up report them.

    Args:
        context: The execution context to probe through.
        targets: The URLs or routes to warm up. Defaults to
            ``DEFAULT_WARMUP_TARGETS``.
        policy: The retry policy. Defaults to the short
            ``WARMUP_POLICY``.

    Returns:
        One entry per target, in the order of ``targets``.

    Example:
        ```pycon
        >>> import asyncio
        >>> from aprobe.context import HttpProbeContext
        >>> from aprobe.warmup import warmup_targets
        >>> async def main():
        ...     async with HttpProbeContext(base_url="http://localhost:3000") as context:
        ...         await warmup_targets(context)
        ...
        >>> asyncio.run(main())  # doctest: +SKIP

        ```
    """
    entries = []
    for target in targets:
        result = await execute(context, target, policy)
        if not result.succeeded:
            logger.warning(f"Warm-up of {target} failed: {result.error}")
        entries.append(BatchEntry(target=target, result=result))
    return entries
