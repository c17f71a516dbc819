r"""Execution contexts that carry out probe attempts and waits.

An execution context is acquired for exactly one check and released
afterwards, so probing one target cannot leak state into another. It
provides the two suspension points of a check: the probe itself and
the bounded wait between attempts.

``HttpProbeContext`` is the default implementation. It owns a fresh
``httpx.AsyncClient`` for the lifetime of the context.
"""

from __future__ import annotations

__all__ = ["BaseProbeContext", "HttpProbeContext", "ProbeResponse"]

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Protocol

import httpx

from aprobe.exceptions import ProbeContextClosedError

if TYPE_CHECKING:
    from collections.abc import Mapping
    from types import TracebackType
    from typing import Self

logger: logging.Logger = logging.getLogger(__name__)


class ProbeResponse(Protocol):
    """Anything with an integer ``status_code``, e.g. ``httpx.Response``."""

    status_code: int


class BaseProbeContext(ABC):
    """Abstract base class for execution contexts.

    Subclasses implement ``probe`` and ``wait``. Both may raise; the
    retry executor classifies exceptions from ``probe`` as transient
    failures and exceptions from ``wait`` as an abort.
    """

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Release the resources held by the context."""

    @abstractmethod
    async def probe(self, target: str, timeout_ms: int) -> ProbeResponse:
        """Invoke the target once.

        Must be safe to call repeatedly for the same target.

        Args:
            target: The URL or route to probe.
            timeout_ms: The timeout of this invocation in milliseconds.
                ``0`` disables the timeout.

        Returns:
            A response exposing ``status_code``.
        """

    @abstractmethod
    async def wait(self, delay_ms: int) -> None:
        """Wait before the next attempt.

        Args:
            delay_ms: The delay in milliseconds.

        Raises:
            ProbeContextClosedError: If the context was torn down before
                or during the wait.
        """


class HttpProbeContext(BaseProbeContext):
    r"""Execution context probing targets over HTTP with httpx.

    Args:
        base_url: Optional base URL used to resolve relative targets
            such as ``"/about"``.
        method: The HTTP method of the probe (default: ``"GET"``).
        follow_redirects: Whether redirects are followed, like a browser
            navigation does. When disabled, redirects are terminal
            failures.
        headers: Optional headers sent with every probe.
        **client_kwargs: Additional keyword arguments passed to
            ``httpx.AsyncClient``.

    Example:
        ```pycon
        >>> import asyncio
        >>> from aprobe import execute
        >>> from aprobe.context import HttpProbeContext
        >>> async def main():  # doctest: +SKIP
        ...     async with HttpProbeContext(base_url="http://localhost:3000") as context:
        ...         return await execute(context, "/about")
        ...
        >>> asyncio.run(main())  # doctest: +SKIP

        ```
    """

    def __init__(
        self,
        *,
        base_url: str = "",
        method: str = "GET",
        follow_redirects: bool = True,
        headers: Mapping[str, str] | None = None,
        **client_kwargs: Any,
    ) -> None:
        self._base_url = base_url
        self._method = method
        self._follow_redirects = follow_redirects
        self._headers = dict(headers) if headers is not None else None
        self._client_kwargs = client_kwargs

        # Client will be created when entering context
        self._client: httpx.AsyncClient | None = None
        self._entered = False

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(base_url={self._base_url!r}, "
            f"method={self._method!r}, follow_redirects={self._follow_redirects})"
        )

    @property
    def closed(self) -> bool:
        return self._client is None or self._client.is_closed

    async def __aenter__(self) -> Self:
        """Enter the context and create the underlying httpx client.

        Returns:
            The HttpProbeContext instance.
        """
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            follow_redirects=self._follow_redirects,
            headers=self._headers,
            **self._client_kwargs,
        )
        self._entered = True
        return self

    async def aclose(self) -> None:
        """Close the underlying httpx client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    def _ensure_client(self) -> httpx.AsyncClient:
        """Ensure the client is available for use.

        Returns:
            The httpx.AsyncClient instance.

        Raises:
            RuntimeError: If the context was never entered.
            ProbeContextClosedError: If the context was entered and
                closed since.
        """
        if not self._entered:
            msg = "HttpProbeContext must be used within an async context manager (async with statement)"
            raise RuntimeError(msg)
        if self.closed:
            msg = "HttpProbeContext was closed"
            raise ProbeContextClosedError(msg)
        return self._client

    async def probe(self, target: str, timeout_ms: int) -> httpx.Response:
        """Send one request to ``target``.

        ``timeout_ms`` bounds the whole request, body included, and not
        only each connect or read step.

        Raises:
            httpx.TimeoutException: If the request does not complete
                within ``timeout_ms``.
        """
        client = self._ensure_client()
        timeout = timeout_ms / 1000 if timeout_ms > 0 else None
        logger.debug(f"{self._method} {target} (timeout={timeout}s)")
        request = client.request(self._method, target, timeout=timeout)
        if timeout is None:
            return await request
        try:
            return await asyncio.wait_for(request, timeout)
        except asyncio.TimeoutError as exc:
            msg = f"{self._method} {target} exceeded the per-attempt timeout of {timeout_ms}ms"
            raise httpx.TimeoutException(msg) from exc

    async def wait(self, delay_ms: int) -> None:
        self._ensure_client()
        await asyncio.sleep(delay_ms / 1000)
        if self.closed:
            msg = f"HttpProbeContext was closed while waiting {delay_ms}ms"
            raise ProbeContextClosedError(msg)
