"""Unit tests for run_in_context (deadline and cancellation of store calls)."""

import asyncio

import pytest

from reindexer.infrastructure.exceptions import TransportError
from reindexer.shared.context import RequestContext, run_in_context


async def _slow(result: str = "done", delay: float = 5.0) -> str:
    await asyncio.sleep(delay)
    return result


@pytest.mark.asyncio
async def test_returns_result_without_limits() -> None:
    assert await run_in_context(RequestContext(), "op", lambda: _slow(delay=0)) == "done"


@pytest.mark.asyncio
async def test_deadline_exceeded() -> None:
    with pytest.raises(TransportError) as exc_info:
        await run_in_context(RequestContext(deadline_seconds=0.01), "search", _slow)
    assert exc_info.value.operation == "search"
    assert exc_info.value.reason == "deadline exceeded"


@pytest.mark.asyncio
async def test_deadline_with_cancel_event() -> None:
    ctx = RequestContext(deadline_seconds=0.01, cancel_event=asyncio.Event())
    with pytest.raises(TransportError, match="deadline exceeded"):
        await run_in_context(ctx, "index", _slow)


@pytest.mark.asyncio
async def test_cancel_event_interrupts_call() -> None:
    cancel = asyncio.Event()
    started = asyncio.Event()
    finished = False

    async def call() -> str:
        nonlocal finished
        started.set()
        await asyncio.sleep(5.0)
        finished = True
        return "late"

    async def trigger() -> None:
        await started.wait()
        cancel.set()

    trigger_task = asyncio.create_task(trigger())
    with pytest.raises(TransportError, match="context cancelled"):
        await run_in_context(RequestContext(cancel_event=cancel), "index", call)
    await trigger_task
    assert not finished


@pytest.mark.asyncio
async def test_already_cancelled_context_does_not_call() -> None:
    cancel = asyncio.Event()
    cancel.set()
    calls = []

    async def call() -> None:
        calls.append(1)

    with pytest.raises(TransportError):
        await run_in_context(RequestContext(cancel_event=cancel), "search", call)
    assert calls == []


@pytest.mark.asyncio
async def test_call_errors_propagate_unchanged() -> None:
    async def boom() -> None:
        raise ValueError("bad")

    ctx = RequestContext(deadline_seconds=1.0, cancel_event=asyncio.Event())
    with pytest.raises(ValueError, match="bad"):
        await run_in_context(ctx, "search", boom)
