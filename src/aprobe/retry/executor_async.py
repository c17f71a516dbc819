r"""Asynchronous retry executor for reachability probes.

This module provides the AsyncRetryExecutor class that probes a target
through an execution context, retrying transient failures with a
linear, budget-capped backoff and converting every exit path into a
``ProbeResult``.
"""

from __future__ import annotations

__all__ = ["EXHAUSTED_MESSAGE", "AsyncRetryExecutor"]

import logging
from typing import TYPE_CHECKING

from aprobe.backoff.schedule import compute_delay
from aprobe.callbacks import (
    CallbackConfig,
    invoke_on_attempt,
    invoke_on_finish,
    invoke_on_retry,
)
from aprobe.outcome import (
    Aborted,
    ProbeResult,
    Success,
    TerminalFailure,
    classify,
    error_message,
)
from aprobe.policy import DEFAULT_POLICY
from aprobe.retry.state import ExecutionState, ExecutorState
from aprobe.utils.structured_logging import log_structured

if TYPE_CHECKING:
    from aprobe.context import BaseProbeContext
    from aprobe.outcome import Outcome
    from aprobe.policy import RetryPolicy

logger: logging.Logger = logging.getLogger(__name__)

# Diagnostic of an exhausted check when no attempt raised
EXHAUSTED_MESSAGE = "Navigation failed after all attempts"


class AsyncRetryExecutor:
    """Executes reachability probes with automatic retry logic.

    The executor is stateless between calls: each ``execute`` call
    creates its own ``ExecutionState``, so one executor (and its policy)
    can be shared by sequential or concurrent checks.

    Attributes:
        policy: The retry policy.
        callbacks: Configuration of the lifecycle callbacks.

    Example:
        ```pycon
        >>> import asyncio
        >>> from aprobe.context import HttpProbeContext
        >>> from aprobe.policy import CI_POLICY
        >>> from aprobe.retry import AsyncRetryExecutor
        >>> async def main():
        ...     executor = AsyncRetryExecutor(CI_POLICY)
        ...     async with HttpProbeContext(base_url="http://localhost:3000") as context:
        ...         return await executor.execute(context, "/about")
        ...
        >>> asyncio.run(main())  # doctest: +SKIP

        ```
    """

    def __init__(
        self,
        policy: RetryPolicy | None = None,
        callbacks: CallbackConfig | None = None,
    ) -> None:
        self.policy = policy if policy is not None else DEFAULT_POLICY
        self.callbacks = callbacks if callbacks is not None else CallbackConfig()

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(policy={self.policy})"

    async def execute(self, context: BaseProbeContext, target: str) -> ProbeResult:
        """Probe ``target`` until it succeeds, fails definitively, or the
        attempts or wait budget run out.

        The loop handles:
        - Status 200: Returns a successful result immediately
        - Other statuses below 500 (e.g., 301, 404): Returns a failed
          result immediately, without retrying
        - Statuses >= 500 and any exception raised by the probe: Waits
          ``compute_delay`` and retries while attempts and budget remain
        - An exception raised by the wait: Aborts without another attempt

        Note:
            Only ``Exception`` subclasses are handled, so task
            cancellation (``asyncio.CancelledError``) still propagates.

        Args:
            context: The execution context providing the probe and the
                wait primitive.
            target: The URL or route to probe.

        Returns:
            The result of the check. Probe failures are never raised.
        """
        policy = self.policy
        state = ExecutionState()

        while True:
            if state.attempts_made > 0 and state.total_waited_ms >= policy.max_total_wait_ms:
                logger.debug(f"{target}: wait budget of {policy.max_total_wait_ms}ms exhausted")
                return self._finish(target, state, ExecutorState.EXHAUSTED)

            state.transition(ExecutorState.ATTEMPTING)
            invoke_on_attempt(
                self.callbacks.on_attempt,
                target=target,
                attempt=state.attempts_made,
                max_attempts=policy.max_attempts,
            )
            state.attempts_made += 1
            outcome = await self._attempt(context, target, state)
            state.last_outcome = outcome

            if isinstance(outcome, Success):
                return self._finish(target, state, ExecutorState.SUCCESS)
            if isinstance(outcome, TerminalFailure):
                return self._finish(target, state, ExecutorState.TERMINAL_FAILURE)

            delay_ms = compute_delay(state.attempts_made - 1, policy, state.total_waited_ms)
            if state.attempts_made >= policy.max_attempts or delay_ms <= 0:
                return self._finish(target, state, ExecutorState.EXHAUSTED)

            state.transition(ExecutorState.WAITING)
            invoke_on_retry(
                self.callbacks.on_retry,
                target=target,
                attempt=state.attempts_made - 1,
                max_attempts=policy.max_attempts,
                delay_ms=delay_ms,
                status=outcome.status,
                error=outcome.error_message,
            )
            logger.debug(
                f"{target}: attempt {state.attempts_made}/{policy.max_attempts} failed, "
                f"retrying in {delay_ms}ms"
            )
            try:
                await context.wait(delay_ms)
            except Exception as exc:
                state.aborted = True
                state.last_outcome = Aborted(error_message=error_message(exc))
                return self._finish(target, state, ExecutorState.ABORTED)
            # Requested delay, not measured sleep time
            state.total_waited_ms += delay_ms

    async def _attempt(
        self,
        context: BaseProbeContext,
        target: str,
        state: ExecutionState,
    ) -> Outcome:
        """Invoke the probe once and classify its result."""
        try:
            response = await context.probe(target, self.policy.per_attempt_timeout_ms)
        except Exception as exc:
            outcome = classify(exc)
            state.last_error = outcome.error_message
            logger.debug(f"{target}: attempt {state.attempts_made} raised {type(exc).__name__}: {exc}")
            return outcome
        state.last_status = response.status_code
        return classify(response.status_code)

    def _finish(
        self,
        target: str,
        state: ExecutionState,
        phase: ExecutorState,
    ) -> ProbeResult:
        """Move to the terminal ``phase`` and build the result."""
        state.transition(phase)
        outcome = state.last_outcome
        if isinstance(outcome, Success):
            result = ProbeResult(
                succeeded=True,
                status=outcome.status,
                attempts=state.attempts_made,
                total_waited_ms=state.total_waited_ms,
            )
        elif isinstance(outcome, TerminalFailure):
            result = ProbeResult(
                succeeded=False,
                status=outcome.status,
                attempts=state.attempts_made,
                error=outcome.error_message,
                total_waited_ms=state.total_waited_ms,
            )
        elif isinstance(outcome, Aborted):
            result = ProbeResult(
                succeeded=False,
                status=state.last_status,
                attempts=state.attempts_made,
                error=f"Aborted while waiting to retry: {outcome.error_message}",
                total_waited_ms=state.total_waited_ms,
            )
        else:
            result = ProbeResult(
                succeeded=False,
                status=state.last_status,
                attempts=state.attempts_made,
                error=state.last_error or EXHAUSTED_MESSAGE,
                total_waited_ms=state.total_waited_ms,
            )

        log_structured(
            logger,
            logging.DEBUG if result.succeeded else logging.INFO,
            f"{target}: {phase.value} after {result.attempts} attempt(s)",
            target=target,
            attempts=result.attempts,
            status=result.status,
            waited_ms=result.total_waited_ms,
        )
        invoke_on_finish(self.callbacks.on_finish, target=target, result=result, outcome=outcome)
        return result
