r"""Shared test helpers for execution contexts."""

from __future__ import annotations

__all__ = ["FakeProbeContext", "fake_factory"]

from typing import TYPE_CHECKING

import httpx

from aprobe.context import BaseProbeContext

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable


class FakeProbeContext(BaseProbeContext):
    """In-memory execution context replaying scripted probe results.

    Each probe consumes the next item of ``responses``; the last item is
    repeated once the others are consumed. An integer item is returned
    as the status code of a response, an exception item is raised.

    Args:
        responses: The scripted results of successive probes.
        wait_error: Optional exception raised by every wait.
    """

    def __init__(
        self,
        responses: Iterable[int | BaseException],
        wait_error: Exception | None = None,
    ) -> None:
        self.responses = list(responses)
        self.wait_error = wait_error
        self.probe_calls: list[tuple[str, int]] = []
        self.waits: list[int] = []
        self.entered = False
        self.closed = False

    async def __aenter__(self) -> FakeProbeContext:
        self.entered = True
        return self

    async def aclose(self) -> None:
        self.closed = True

    async def probe(self, target: str, timeout_ms: int) -> httpx.Response:
        self.probe_calls.append((target, timeout_ms))
        item = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(item, BaseException):
            raise item
        return httpx.Response(item)

    async def wait(self, delay_ms: int) -> None:
        if self.wait_error is not None:
            raise self.wait_error
        self.waits.append(delay_ms)


def fake_factory(
    scripts: dict[str, list[int | BaseException]],
    created: list[FakeProbeContext],
) -> Callable[[], FakeProbeContext]:
    """Create a context factory whose contexts all share ``scripts``.

    Every created context is appended to ``created``. A context replays
    the script of the first target it probes.
    """

    class _ScriptedContext(FakeProbeContext):
        def __init__(self) -> None:
            super().__init__(responses=[200])

        async def probe(self, target: str, timeout_ms: int) -> httpx.Response:
            if not self.probe_calls:
                self.responses = list(scripts[target])
            return await super().probe(target, timeout_ms)

    def factory() -> FakeProbeContext:
        context = _ScriptedContext()
        created.append(context)
        return context

    return factory
