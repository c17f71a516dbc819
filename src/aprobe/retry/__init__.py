r"""Retry package implementing the probe retry state machine.

Public API:
    - AsyncRetryExecutor: Asynchronous retry executor
    - ExecutionState: Call-local state of one execution
    - ExecutorState: States of the retry executor
"""

from __future__ import annotations

__all__ = ["EXHAUSTED_MESSAGE", "AsyncRetryExecutor", "ExecutionState", "ExecutorState"]

from aprobe.retry.executor_async import EXHAUSTED_MESSAGE, AsyncRetryExecutor
from aprobe.retry.state import ExecutionState, ExecutorState
