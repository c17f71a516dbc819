r"""Unit tests for the call-local execution state."""

from __future__ import annotations

import pytest

from aprobe.retry.state import TERMINAL_STATES, ExecutionState, ExecutorState


def test_execution_state_defaults() -> None:
    state = ExecutionState()
    assert state.attempts_made == 0
    assert state.total_waited_ms == 0
    assert state.last_outcome is None
    assert not state.aborted
    assert state.phase == ExecutorState.READY
    assert not state.is_terminal


def test_execution_state_transition() -> None:
    state = ExecutionState()
    state.transition(ExecutorState.ATTEMPTING)
    state.transition(ExecutorState.WAITING)
    state.transition(ExecutorState.ATTEMPTING)
    assert state.phase == ExecutorState.ATTEMPTING


@pytest.mark.parametrize("phase", sorted(TERMINAL_STATES, key=lambda s: s.value))
def test_execution_state_terminal_is_final(phase: ExecutorState) -> None:
    state = ExecutionState()
    state.transition(phase)
    assert state.is_terminal
    with pytest.raises(RuntimeError, match=r"cannot transition from terminal state"):
        state.transition(ExecutorState.ATTEMPTING)


def test_execution_states_are_independent() -> None:
    first, second = ExecutionState(), ExecutionState()
    first.attempts_made += 1
    assert second.attempts_made == 0


def test_terminal_states() -> None:
    assert ExecutorState.READY not in TERMINAL_STATES
    assert ExecutorState.WAITING not in TERMINAL_STATES
    assert ExecutorState.SUCCESS in TERMINAL_STATES
    assert ExecutorState.ABORTED in TERMINAL_STATES
