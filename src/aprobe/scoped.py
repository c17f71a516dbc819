r"""Implement reachability checks on an isolated execution context."""

from __future__ import annotations

__all__ = ["ContextFactory", "check_scoped"]

import logging
from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from typing import TYPE_CHECKING

from aprobe.execute import execute

if TYPE_CHECKING:
    from aprobe.callbacks import CallbackConfig
    from aprobe.context import BaseProbeContext
    from aprobe.outcome import ProbeResult
    from aprobe.policy import RetryPolicy

logger: logging.Logger = logging.getLogger(__name__)

ContextFactory = Callable[[], AbstractAsyncContextManager["BaseProbeContext"]]


async def check_scoped(
    resource_factory: ContextFactory,
    target: str,
    policy: RetryPolicy | None = None,
    *,
    callbacks: CallbackConfig | None = None,
) -> ProbeResult:
    r"""Probe a target on a fresh execution context.

    A new context is acquired from ``resource_factory`` for this check
    only, so the probe cannot affect any context held by the caller,
    and it is released on every exit path.

    Errors raised while acquiring or releasing the context are not
    retried and propagate to the caller. Probe failures are reported
    in the result.

    Args:
        resource_factory: A callable returning an async context manager
            that yields the execution context, e.g. ``HttpProbeContext``
            or a ``functools.partial`` of it.
        target: The URL or route to probe.
        policy: The retry policy. Defaults to ``DEFAULT_POLICY``.
        callbacks: Optional lifecycle callbacks.

    Returns:
        The result of the check.

    Example:
        ```pycon
        >>> import asyncio
        >>> from functools import partial
        >>> from aprobe import check_scoped
        >>> from aprobe.context import HttpProbeContext
        >>> factory = partial(HttpProbeContext, base_url="http://localhost:3000")
        >>> asyncio.run(check_scoped(factory, "/about"))  # doctest: +SKIP

        ```
    """
    async with resource_factory() as context:
        logger.debug(f"Checking {target} on {context!r}")
        return await execute(context, target, policy, callbacks=callbacks)
