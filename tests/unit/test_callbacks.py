r"""Unit tests for callback helpers."""

from __future__ import annotations

import logging
from unittest.mock import Mock

import pytest

from aprobe.callbacks import (
    AttemptInfo,
    CallbackConfig,
    FinishInfo,
    RetryInfo,
    invoke_on_attempt,
    invoke_on_finish,
    invoke_on_retry,
)
from aprobe.outcome import ProbeResult, Success


def test_callback_config_defaults() -> None:
    config = CallbackConfig()
    assert config.on_attempt is None
    assert config.on_retry is None
    assert config.on_finish is None


def test_invoke_on_attempt(mock_callback: Mock) -> None:
    invoke_on_attempt(mock_callback, target="/", attempt=0, max_attempts=3)
    mock_callback.assert_called_once_with(AttemptInfo(target="/", attempt=1, max_attempts=3))


def test_invoke_on_attempt_none() -> None:
    invoke_on_attempt(None, target="/", attempt=0, max_attempts=3)


def test_invoke_on_retry(mock_callback: Mock) -> None:
    invoke_on_retry(
        mock_callback,
        target="/",
        attempt=1,
        max_attempts=3,
        delay_ms=2000,
        status=None,
        error="refused",
    )
    mock_callback.assert_called_once_with(
        RetryInfo(target="/", attempt=2, max_attempts=3, delay_ms=2000, status=None, error="refused")
    )


def test_invoke_on_retry_none() -> None:
    invoke_on_retry(
        None, target="/", attempt=0, max_attempts=3, delay_ms=1, status=500, error=None
    )


def test_invoke_on_finish(mock_callback: Mock) -> None:
    result = ProbeResult(succeeded=True, status=200, attempts=1)
    invoke_on_finish(mock_callback, target="/", result=result, outcome=Success(status=200))
    mock_callback.assert_called_once_with(
        FinishInfo(target="/", result=result, outcome=Success(status=200))
    )


def test_invoke_on_finish_none() -> None:
    invoke_on_finish(
        None, target="/", result=ProbeResult(succeeded=True, status=200, attempts=1), outcome=None
    )


def test_invoke_on_attempt_callback_error_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    callback = Mock(side_effect=ValueError("broken hook"))
    with caplog.at_level(logging.ERROR, logger="aprobe.callbacks"):
        invoke_on_attempt(callback, target="/about", attempt=0, max_attempts=3)
    callback.assert_called_once()
    assert "AttemptInfo callback" in caplog.text
    assert "/about" in caplog.text
    assert "broken hook" in caplog.text


def test_invoke_on_retry_callback_error_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    callback = Mock(side_effect=RuntimeError("broken hook"))
    with caplog.at_level(logging.ERROR, logger="aprobe.callbacks"):
        invoke_on_retry(
            callback,
            target="/",
            attempt=0,
            max_attempts=3,
            delay_ms=1000,
            status=503,
            error=None,
        )
    assert "RetryInfo callback" in caplog.text


def test_invoke_on_finish_callback_error_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    callback = Mock(side_effect=KeyError("missing"))
    result = ProbeResult(succeeded=True, status=200, attempts=1)
    with caplog.at_level(logging.ERROR, logger="aprobe.callbacks"):
        invoke_on_finish(callback, target="/", result=result, outcome=Success(status=200))
    assert "FinishInfo callback" in caplog.text
