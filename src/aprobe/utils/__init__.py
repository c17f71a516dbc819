r"""Utility helpers for the aprobe package."""

from __future__ import annotations

__all__ = [
    "StructuredFormatter",
    "clear_probe_id",
    "get_probe_id",
    "log_structured",
    "probe_id_scope",
    "set_probe_id",
]

from aprobe.utils.structured_logging import (
    StructuredFormatter,
    clear_probe_id,
    get_probe_id,
    log_structured,
    probe_id_scope,
    set_probe_id,
)
