r"""aprobe - Resilient reachability probes with automatic retry logic.

This package checks that network targets, typically the routes of a web
application under test, are reachable while tolerating the slow or
failing first requests of a cold server. Built on top of the modern
httpx library and asyncio.

Key Features:
    - Outcome classification: 200 succeeds, 5xx and raised errors are
      retried, any other status fails immediately
    - Linear backoff capped by a shared wait budget
    - Isolated execution context per check, always released
    - Sequential batch checks that report every failing target
    - CI and local policy presets, selected explicitly by the caller
    - Callback system and structured logging for observability

Example:
    ```pycon
    >>> import asyncio
    >>> import os
    >>> from functools import partial
    >>> from aprobe import HttpProbeContext, policy_from_env, run_batch
    >>> factory = partial(HttpProbeContext, base_url="http://localhost:3000")
    >>> entries = asyncio.run(
    ...     run_batch(["/", "/about"], policy_from_env(os.environ), resource_factory=factory)
    ... )  # doctest: +SKIP
    >>> [entry.target for entry in entries if not entry.result.succeeded]  # doctest: +SKIP
    []

    ```
"""

from __future__ import annotations

__all__ = [
    "CI_POLICY",
    "DEFAULT_POLICY",
    "DEFAULT_WARMUP_TARGETS",
    "LOCAL_POLICY",
    "WARMUP_POLICY",
    "BaseProbeContext",
    "BatchEntry",
    "CallbackConfig",
    "HttpProbeContext",
    "ProbeContextClosedError",
    "ProbeError",
    "ProbeResult",
    "RetryPolicy",
    "__version__",
    "assert_reachable",
    "check_scoped",
    "execute",
    "failed_entries",
    "policy_from_env",
    "raise_for_failures",
    "run_batch",
    "select_policy",
    "warmup_targets",
]

from importlib.metadata import PackageNotFoundError, version

from aprobe.assertions import assert_reachable, raise_for_failures
from aprobe.batch import BatchEntry, failed_entries, run_batch
from aprobe.callbacks import CallbackConfig
from aprobe.context import BaseProbeContext, HttpProbeContext
from aprobe.exceptions import ProbeContextClosedError, ProbeError
from aprobe.execute import execute
from aprobe.outcome import ProbeResult
from aprobe.policy import (
    CI_POLICY,
    DEFAULT_POLICY,
    LOCAL_POLICY,
    WARMUP_POLICY,
    RetryPolicy,
    policy_from_env,
    select_policy,
)
from aprobe.scoped import check_scoped
from aprobe.warmup import DEFAULT_WARMUP_TARGETS, warmup_targets

try:
    __version__ = version(__name__)
except PackageNotFoundError:  # pragma: no cover
    # Package is not installed, fallback if needed
    __version__ = "0.0.0"
