r"""Core shared logic for retry policies."""

from __future__ import annotations

__all__ = ["validate_policy_params", "validate_timeout_ms"]

from aprobe.core.validation import validate_policy_params, validate_timeout_ms
