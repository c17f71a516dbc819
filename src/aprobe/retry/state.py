r"""Call-local state of one retry execution.

The executor moves through the following states:

- READY: Created, no attempt made yet
- ATTEMPTING: A probe invocation is in flight
- WAITING: Waiting before the next attempt
- SUCCESS, TERMINAL_FAILURE, ABORTED: Terminal states
- EXHAUSTED: Terminal, attempts or wait budget ran out after a
  transient failure
"""

from __future__ import annotations

__all__ = ["TERMINAL_STATES", "ExecutionState", "ExecutorState"]

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from aprobe.outcome import Outcome


class ExecutorState(Enum):
    """Retry executor states."""

    READY = "ready"
    ATTEMPTING = "attempting"
    WAITING = "waiting"
    SUCCESS = "success"
    TERMINAL_FAILURE = "terminal_failure"
    ABORTED = "aborted"
    EXHAUSTED = "exhausted"


TERMINAL_STATES = frozenset(
    {
        ExecutorState.SUCCESS,
        ExecutorState.TERMINAL_FAILURE,
        ExecutorState.ABORTED,
        ExecutorState.EXHAUSTED,
    }
)


@dataclass
class ExecutionState:
    """Mutable state of a single ``execute`` call.

    A new instance is created for each call and discarded when it
    returns, so it is never shared between concurrent checks.

    Attributes:
        attempts_made: How many times the probe was invoked.
        total_waited_ms: The cumulative wait between attempts, counted as
            the sum of the requested (budget-capped) delays rather than
            the time the waits actually took.
        last_outcome: The outcome of the most recent step.
        last_status: The last status code returned by any attempt.
        last_error: The message of the last exception raised by an attempt.
        aborted: Whether a wait failed because the context was torn down.
        phase: The current executor state.
    """

    attempts_made: int = 0
    total_waited_ms: int = 0
    last_outcome: Outcome | None = None
    last_status: int | None = None
    last_error: str | None = None
    aborted: bool = False
    phase: ExecutorState = ExecutorState.READY

    @property
    def is_terminal(self) -> bool:
        return self.phase in TERMINAL_STATES

    def transition(self, phase: ExecutorState) -> None:
        """Move to ``phase``.

        Raises:
            RuntimeError: If the state is already terminal.
        """
        if self.is_terminal:
            msg = f"cannot transition from terminal state {self.phase.value} to {phase.value}"
            raise RuntimeError(msg)
        self.phase = phase
