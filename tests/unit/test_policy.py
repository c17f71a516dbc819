r"""Unit tests for retry policies and presets."""

from __future__ import annotations

import dataclasses

import pytest
from coola.equality import objects_are_equal

from aprobe.policy import (
    CI_POLICY,
    DEFAULT_POLICY,
    LOCAL_POLICY,
    WARMUP_POLICY,
    RetryPolicy,
    policy_from_env,
    select_policy,
)


def test_retry_policy_defaults() -> None:
    assert objects_are_equal(
        dataclasses.asdict(RetryPolicy()),
        {
            "max_attempts": 3,
            "initial_delay_ms": 1000,
            "max_total_wait_ms": 30000,
            "per_attempt_timeout_ms": 15000,
        },
    )
    assert DEFAULT_POLICY == RetryPolicy()


def test_ci_policy() -> None:
    assert CI_POLICY == RetryPolicy(
        max_attempts=3, initial_delay_ms=2000, max_total_wait_ms=25000, per_attempt_timeout_ms=15000
    )


def test_local_policy() -> None:
    assert LOCAL_POLICY == RetryPolicy(
        max_attempts=2, initial_delay_ms=500, max_total_wait_ms=10000, per_attempt_timeout_ms=10000
    )


def test_warmup_policy_is_local() -> None:
    assert WARMUP_POLICY == LOCAL_POLICY


def test_retry_policy_is_immutable() -> None:
    with pytest.raises(dataclasses.FrozenInstanceError):
        CI_POLICY.max_attempts = 10  # type: ignore[misc]


def test_retry_policy_validation() -> None:
    with pytest.raises(ValueError, match=r"max_attempts must be >= 1"):
        RetryPolicy(max_attempts=0)
    with pytest.raises(ValueError, match=r"max_total_wait_ms must be >= 0"):
        RetryPolicy(max_total_wait_ms=-1)


def test_retry_policy_merge() -> None:
    merged = LOCAL_POLICY.merge(max_attempts=4, initial_delay_ms=None)
    assert merged == RetryPolicy(
        max_attempts=4, initial_delay_ms=500, max_total_wait_ms=10000, per_attempt_timeout_ms=10000
    )
    assert LOCAL_POLICY.max_attempts == 2


def test_retry_policy_merge_validates() -> None:
    with pytest.raises(ValueError, match=r"max_attempts must be >= 1"):
        DEFAULT_POLICY.merge(max_attempts=0)


def test_select_policy() -> None:
    assert select_policy(ci=True) is CI_POLICY
    assert select_policy(ci=False) is LOCAL_POLICY


@pytest.mark.parametrize(
    ("environ", "expected"),
    [
        ({"CI": "true"}, CI_POLICY),
        ({"CI": "1"}, CI_POLICY),
        ({"CI": ""}, LOCAL_POLICY),
        ({}, LOCAL_POLICY),
        ({"HOME": "/root"}, LOCAL_POLICY),
    ],
)
def test_policy_from_env(environ: dict[str, str], expected: RetryPolicy) -> None:
    assert policy_from_env(environ) is expected
