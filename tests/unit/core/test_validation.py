r"""Unit tests for policy validation."""

from __future__ import annotations

import pytest

from aprobe.core import validate_policy_params, validate_timeout_ms


def test_validate_policy_params_valid() -> None:
    validate_policy_params(max_attempts=1)
    validate_policy_params(
        max_attempts=3, initial_delay_ms=0, max_total_wait_ms=0, per_attempt_timeout_ms=0
    )


@pytest.mark.parametrize("max_attempts", [0, -1])
def test_validate_policy_params_invalid_max_attempts(max_attempts: int) -> None:
    with pytest.raises(ValueError, match=r"max_attempts must be >= 1"):
        validate_policy_params(max_attempts=max_attempts)


def test_validate_policy_params_invalid_initial_delay() -> None:
    with pytest.raises(ValueError, match=r"initial_delay_ms must be >= 0"):
        validate_policy_params(max_attempts=1, initial_delay_ms=-1)


def test_validate_policy_params_invalid_max_total_wait() -> None:
    with pytest.raises(ValueError, match=r"max_total_wait_ms must be >= 0"):
        validate_policy_params(max_attempts=1, max_total_wait_ms=-5)


def test_validate_policy_params_invalid_timeout() -> None:
    with pytest.raises(ValueError, match=r"per_attempt_timeout_ms must be >= 0"):
        validate_policy_params(max_attempts=1, per_attempt_timeout_ms=-1)


def test_validate_timeout_ms() -> None:
    validate_timeout_ms(0)
    validate_timeout_ms(15000)
    with pytest.raises(ValueError, match=r"per_attempt_timeout_ms must be >= 0, got -1"):
        validate_timeout_ms(-1)
