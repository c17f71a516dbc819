r"""Unit tests for LinearBackoff strategy."""

from __future__ import annotations

import pytest

from aprobe.backoff import BaseBackoffStrategy, LinearBackoff


def test_linear_backoff_basic() -> None:
    """Test basic linear backoff calculation."""
    backoff = LinearBackoff(base_delay_ms=1000)
    assert backoff.calculate(0) == 1000  # 1000 * 1
    assert backoff.calculate(1) == 2000  # 1000 * 2
    assert backoff.calculate(2) == 3000  # 1000 * 3


def test_linear_backoff_default_values() -> None:
    backoff = LinearBackoff()
    assert backoff.base_delay_ms == 1000
    assert isinstance(backoff, BaseBackoffStrategy)


def test_linear_backoff_zero_base_delay() -> None:
    backoff = LinearBackoff(base_delay_ms=0)
    assert backoff.calculate(0) == 0
    assert backoff.calculate(5) == 0


def test_linear_backoff_invalid_base_delay() -> None:
    with pytest.raises(ValueError, match=r"base_delay_ms must be non-negative"):
        LinearBackoff(base_delay_ms=-1)


def test_linear_backoff_repr() -> None:
    assert repr(LinearBackoff(base_delay_ms=500)) == "LinearBackoff(base_delay_ms=500)"
