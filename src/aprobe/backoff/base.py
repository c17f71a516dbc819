r"""Abstract base class for backoff strategies."""

from __future__ import annotations

__all__ = ["BaseBackoffStrategy"]

from abc import ABC, abstractmethod


class BaseBackoffStrategy(ABC):
    """Abstract base class for backoff strategies.

    A backoff strategy determines how long to wait before retrying a
    failed probe based on the attempt index. The remaining wait budget
    is applied on top of it by ``compute_delay``.
    """

    @abstractmethod
    def calculate(self, attempt: int) -> int:
        """Calculate the backoff delay for a given attempt.

        Args:
            attempt: The index of the attempt that just failed
                (0-indexed). For example, attempt=0 is the first
                attempt, so its delay is the wait before the first retry.

        Returns:
            The delay in milliseconds before the next attempt.
        """
