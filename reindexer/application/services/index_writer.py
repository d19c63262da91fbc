"""Concurrent write-back of transformed hits with a completion barrier.

Each qualifying hit is written by its own asyncio task. The barrier is an
``asyncio.TaskGroup``: leaving the group means every task spawned in it
has reached a terminal state. ``write`` scopes the group to one hit (the
caller sees one write in flight at a time); ``write_all`` dispatches the
whole batch into a single group and waits once.
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterable, Sequence

from reindexer.application.dtos.pipeline import WriteOutcome
from reindexer.application.dtos.search import Hit, WriteRequest
from reindexer.application.interfaces.store import IDocumentStore
from reindexer.application.services.document_transformer import encode_payload
from reindexer.application.services.response_decoder import decode_write_result
from reindexer.shared.context import BACKGROUND, RequestContext, run_in_context
from reindexer.shared.enums import WriteRefresh
from reindexer.shared.telemetry.logging import get_logger
from reindexer.shared.telemetry.tracing import add_span_event, traced

logger = get_logger(__name__)


class ConcurrentIndexWriter:
    """Writes hits to ``collection`` through the shared store client."""

    def __init__(
        self,
        store: IDocumentStore,
        collection: str,
        *,
        refresh: WriteRefresh = WriteRefresh.FALSE,
        context: RequestContext = BACKGROUND,
    ) -> None:
        self._store = store
        self.collection = collection
        self.refresh = WriteRefresh(refresh)
        self._context = context

    def build_request(self, hit: Hit) -> WriteRequest:
        """Serialize the hit's payload into a request owned by one write task.

        Raises:
            TransformError: The payload cannot be serialized.
        """
        return WriteRequest(
            collection=self.collection,
            document_id=hit.id,
            body=encode_payload(hit.id, hit.source),
            refresh=self.refresh,
        )

    @traced("reindexer.write")
    async def _run_write(self, request: WriteRequest) -> WriteOutcome:
        """Task body: perform one write and return its outcome instead of raising."""
        logger.debug("output=%s", request.body.decode("utf-8"))
        try:
            raw = await run_in_context(
                self._context,
                "index",
                lambda: self._store.index(
                    request.collection,
                    request.document_id,
                    request.body,
                    refresh=self.refresh.value,
                ),
            )
            result = decode_write_result(raw, request.document_id)
        except Exception as e:
            return WriteOutcome(request.document_id, error=e)
        return WriteOutcome(request.document_id, result=result)

    async def write(self, hit: Hit) -> WriteOutcome:
        """Serialize ``hit``, dispatch one write task and wait until it is terminal."""
        return await self.write_request(self.build_request(hit))

    async def write_request(self, request: WriteRequest) -> WriteOutcome:
        """Dispatch one already serialized write and wait until it is terminal."""
        async with asyncio.TaskGroup() as tg:
            task = tg.create_task(self._run_write(request))
            add_span_event("write.dispatched", {"document_id": request.document_id})
        return task.result()

    async def write_all(self, hits: Iterable[Hit]) -> list[WriteOutcome]:
        """Dispatch one task per hit, wait once for all, return outcomes in hit order.

        Requests are built before any task starts, so a serialization failure
        raises TransformError without dispatching anything.
        """
        return await self.write_requests([self.build_request(hit) for hit in hits])

    async def write_requests(self, requests: Sequence[WriteRequest]) -> list[WriteOutcome]:
        """Dispatch already serialized writes into one TaskGroup; outcomes keep request order."""
        async with asyncio.TaskGroup() as tg:
            tasks = [tg.create_task(self._run_write(r)) for r in requests]
            add_span_event("write.dispatched", {"count": len(tasks)})
        return [task.result() for task in tasks]
