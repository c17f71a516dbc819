r"""Structured logging utilities for machine-readable probe logs.

This module provides a JSON log formatter and a context-local probe id
so every log line emitted while checking one target can be correlated,
which helps when a CI run checks many routes. Structured logging is
opt-in and is enabled by configuring Python's logging system to use the
provided formatter.

Example:
    Enable structured logging for aprobe:

    ```python
    import logging
    from aprobe.utils.structured_logging import StructuredFormatter

    handler = logging.StreamHandler()
    handler.setFormatter(StructuredFormatter())

    logger = logging.getLogger("aprobe")
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    ```
"""

from __future__ import annotations

__all__ = [
    "StructuredFormatter",
    "clear_probe_id",
    "get_probe_id",
    "log_structured",
    "probe_id_scope",
    "set_probe_id",
]

import contextvars
import json
import logging
import time
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Generator

# Context variable, so concurrent checks on one event loop keep their own id
_probe_id: contextvars.ContextVar[str | None] = contextvars.ContextVar("probe_id", default=None)

# Attributes every LogRecord has; anything else came in through ``extra``
_RECORD_ATTRIBUTES = frozenset(
    {
        "name",
        "msg",
        "args",
        "created",
        "msecs",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "sinfo",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "taskName",
        "message",
    }
)


def get_probe_id() -> str | None:
    """Get the probe id of the current context.

    Example:
        ```pycon
        >>> from aprobe.utils.structured_logging import clear_probe_id, get_probe_id
        >>> clear_probe_id()
        >>> get_probe_id() is None
        True

        ```
    """
    return _probe_id.get()


def set_probe_id(probe_id: str) -> None:
    """Set the probe id of the current context.

    Args:
        probe_id: The id to attach to log lines, usually the target.
    """
    _probe_id.set(probe_id)


def clear_probe_id() -> None:
    """Clear the probe id of the current context."""
    _probe_id.set(None)


@contextmanager
def probe_id_scope(probe_id: str) -> Generator[None, None, None]:
    """Set the probe id for the duration of a ``with`` block.

    The previous id is restored on exit.

    Example:
        ```pycon
        >>> from aprobe.utils.structured_logging import get_probe_id, probe_id_scope
        >>> with probe_id_scope("/about"):
        ...     get_probe_id()
        ...
        '/about'

        ```
    """
    token = _probe_id.set(probe_id)
    try:
        yield
    finally:
        _probe_id.reset(token)


class StructuredFormatter(logging.Formatter):
    """JSON formatter for structured logging.

    Standard fields in the JSON output:
        - timestamp: ISO 8601 timestamp
        - level: Log level name
        - logger: Logger name
        - message: Log message
        - probe_id: Optional id of the check being run
        - module, function, line: Where the log originated

    Fields passed through the ``extra`` parameter of logging calls are
    included as well.

    Example:
        ```pycon
        >>> import logging
        >>> from io import StringIO
        >>> from aprobe.utils.structured_logging import StructuredFormatter
        >>> stream = StringIO()
        >>> handler = logging.StreamHandler(stream)
        >>> handler.setFormatter(StructuredFormatter())
        >>> logger = logging.getLogger("doctest_structured")
        >>> logger.addHandler(handler)
        >>> logger.setLevel(logging.INFO)
        >>> logger.info("Probe finished", extra={"attempts": 2})
        >>> '"attempts": 2' in stream.getvalue()
        True

        ```
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        probe_id = get_probe_id()
        if probe_id is not None:
            log_data["probe_id"] = probe_id

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _RECORD_ATTRIBUTES:
                log_data[key] = value

        return json.dumps(log_data, default=str)

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:  # noqa: N802
        """Format timestamp as ISO 8601 with millisecond precision.

        ``datefmt`` is ignored.
        """
        return (
            time.strftime("%Y-%m-%dT%H:%M:%S", time.gmtime(record.created))
            + f".{int(record.msecs):03d}Z"
        )


def log_structured(
    logger: logging.Logger,
    level: int,
    message: str,
    **extra: Any,
) -> None:
    """Log a message with structured data.

    Args:
        logger: Logger to use.
        level: Log level (e.g., logging.INFO).
        message: Log message.
        **extra: Additional structured fields to include in the log.

    Example:
        ```pycon
        >>> import logging
        >>> from aprobe.utils.structured_logging import log_structured
        >>> log_structured(
        ...     logging.getLogger("aprobe"),
        ...     logging.DEBUG,
        ...     "Attempt failed",
        ...     target="/about",
        ...     status=503,
        ... )

        ```
    """
    logger.log(level, message, extra=extra)
