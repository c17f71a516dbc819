r"""Unit tests for target warm-up."""

from __future__ import annotations

import logging

import httpx
import pytest

from aprobe import DEFAULT_WARMUP_TARGETS, warmup_targets
from aprobe.policy import RetryPolicy
from tests.helpers import FakeProbeContext


@pytest.mark.asyncio
async def test_warmup_targets_uses_shared_context_and_warmup_policy() -> None:
    context = FakeProbeContext([200])
    entries = await warmup_targets(context, ["/", "/about"])
    assert [entry.target for entry in entries] == ["/", "/about"]
    assert context.probe_calls == [("/", 10000), ("/about", 10000)]
    assert not context.closed


@pytest.mark.asyncio
async def test_warmup_targets_ignores_failures(caplog: pytest.LogCaptureFixture) -> None:
    context = FakeProbeContext([httpx.ConnectError("refused"), 404, 200])
    policy = RetryPolicy(max_attempts=1)
    with caplog.at_level(logging.WARNING):
        entries = await warmup_targets(context, ["/", "/missing", "/about"], policy)
    assert [entry.result.succeeded for entry in entries] == [False, False, True]
    assert "Warm-up of / failed: refused" in caplog.messages
    assert "Warm-up of /missing failed: Received status 404" in caplog.messages


@pytest.mark.asyncio
async def test_warmup_targets_local_budget() -> None:
    context = FakeProbeContext([503])
    entries = await warmup_targets(context, ["/"])
    assert entries[0].result.attempts == 2
    assert context.waits == [500]


@pytest.mark.asyncio
async def test_warmup_targets_default_routes() -> None:
    context = FakeProbeContext([200])
    entries = await warmup_targets(context)
    assert [entry.target for entry in entries] == ["/", "/about", "/domains", "/auth"]
    assert [target for target, _ in context.probe_calls] == list(DEFAULT_WARMUP_TARGETS)
