"""Request context: deadline and cancellation handle for store calls.

Every query and write runs under a RequestContext. When the deadline
expires or the cancel event is set, the in-flight call is cancelled and
TransportError is raised instead of waiting on the network.

Usage:
    ctx = RequestContext(deadline_seconds=5.0)
    raw = await run_in_context(ctx, "search", lambda: store.search(...))
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TypeVar

from reindexer.infrastructure.exceptions import TransportError

T = TypeVar("T")


@dataclass(frozen=True)
class RequestContext:
    """Immutable deadline/cancellation handle shared by the calls of one run."""

    deadline_seconds: float | None = None
    cancel_event: asyncio.Event | None = None

    @property
    def cancelled(self) -> bool:
        return self.cancel_event is not None and self.cancel_event.is_set()


BACKGROUND = RequestContext()


async def run_in_context(
    ctx: RequestContext,
    operation: str,
    call: Callable[[], Awaitable[T]],
) -> T:
    """Await ``call()`` bounded by the context's deadline and cancel event.

    Raises:
        TransportError: Deadline exceeded or context cancelled.
    """
    if ctx.cancelled:
        raise TransportError(operation, "context cancelled")
    if ctx.cancel_event is None:
        try:
            async with asyncio.timeout(ctx.deadline_seconds):
                return await call()
        except TimeoutError as e:
            raise TransportError(operation, "deadline exceeded") from e

    call_task = asyncio.ensure_future(call())
    cancel_task = asyncio.ensure_future(ctx.cancel_event.wait())
    try:
        done, _ = await asyncio.wait(
            {call_task, cancel_task},
            timeout=ctx.deadline_seconds,
            return_when=asyncio.FIRST_COMPLETED,
        )
    except asyncio.CancelledError:
        call_task.cancel()
        raise
    finally:
        cancel_task.cancel()
    if call_task in done:
        return call_task.result()
    call_task.cancel()
    try:
        await call_task
    except asyncio.CancelledError:
        pass
    reason = "context cancelled" if ctx.cancelled else "deadline exceeded"
    raise TransportError(operation, reason)
