r"""Backoff strategies and the budget-aware delay schedule.

This package provides the linear backoff used between probe attempts
and ``compute_delay``, which caps it by the remaining wait budget.
"""

from __future__ import annotations

__all__ = ["BaseBackoffStrategy", "LinearBackoff", "compute_delay"]

from aprobe.backoff.base import BaseBackoffStrategy
from aprobe.backoff.linear import LinearBackoff
from aprobe.backoff.schedule import compute_delay
