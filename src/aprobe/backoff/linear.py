r"""Linear backoff strategy."""

from __future__ import annotations

__all__ = ["LinearBackoff"]

from aprobe.backoff.base import BaseBackoffStrategy


class LinearBackoff(BaseBackoffStrategy):
    """Linear backoff strategy.

    Calculates delay as: base_delay_ms * (attempt + 1).

    The delay is further capped by the remaining wait budget in
    ``compute_delay``.

    Args:
        base_delay_ms: The base delay in milliseconds (default: 1000).

    Example:
        ```pycon
        >>> from aprobe.backoff import LinearBackoff
        >>> backoff = LinearBackoff(base_delay_ms=1000)
        >>> backoff.calculate(0)  # First retry: 1000 * 1
        1000
        >>> backoff.calculate(1)  # Second retry: 1000 * 2
        2000
        >>> backoff.calculate(2)  # Third retry: 1000 * 3
        3000

        ```
    """

    def __init__(self, base_delay_ms: int = 1000) -> None:
        if base_delay_ms < 0:
            msg = f"base_delay_ms must be non-negative, got {base_delay_ms}"
            raise ValueError(msg)
        self.base_delay_ms = base_delay_ms

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(base_delay_ms={self.base_delay_ms})"

    def calculate(self, attempt: int) -> int:
        """Calculate linear backoff delay.

        Args:
            attempt: The current attempt index (0-indexed).

        Returns:
            The calculated delay: base_delay_ms * (attempt + 1).
        """
        return self.base_delay_ms * (attempt + 1)
