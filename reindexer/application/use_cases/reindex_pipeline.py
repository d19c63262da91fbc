"""Search -> select -> transform -> concurrent reindex pipeline.

Hits are processed in the order the store returned them. Query-phase
errors abort the run (PipelineAborted); transform and write rejections
are logged per hit and processing continues with the next hit.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass

from reindexer.application.dtos.pipeline import HitOutcome, PipelineSummary, WriteOutcome
from reindexer.application.dtos.search import (
    FilterPredicate,
    Hit,
    QueryOptions,
    SearchQuery,
    ServerInfo,
    WriteRequest,
)
from reindexer.application.interfaces.store import IDocumentStore
from reindexer.application.services.document_transformer import DocumentTransformer
from reindexer.application.services.error_classifier import ErrorClassifier
from reindexer.application.services.hit_selector import HitPredicate, HitSelector, identifier_equals
from reindexer.application.services.index_writer import ConcurrentIndexWriter
from reindexer.application.services.query_executor import QueryExecutor
from reindexer.core.config import Settings
from reindexer.domain.exceptions import ReindexException, TransformError
from reindexer.shared.context import RequestContext
from reindexer.shared.enums import BarrierMode, FilterOperator, HitStatus, PipelinePhase
from reindexer.shared.telemetry.logging import get_logger, log_separator
from reindexer.shared.telemetry.tracing import set_span_error, traced

logger = get_logger(__name__)


@dataclass(frozen=True)
class _Transformed:
    """A transformed hit serialized for write-back; its outcome is not known yet."""

    request: WriteRequest


class ReindexPipeline:
    """Runs one search and writes back every qualifying hit."""

    def __init__(
        self,
        executor: QueryExecutor,
        transformer: DocumentTransformer,
        writer: ConcurrentIndexWriter,
        *,
        predicate: HitPredicate,
        classifier: ErrorClassifier | None = None,
        barrier_mode: BarrierMode = BarrierMode.PER_HIT,
        presence_field: str | None = None,
    ) -> None:
        self._executor = executor
        self._transformer = transformer
        self._writer = writer
        self._predicate = predicate
        self._classifier = classifier or ErrorClassifier()
        self._barrier_mode = BarrierMode(barrier_mode)
        self._presence_field = presence_field

    async def log_server_info(self, client_version: str, ctx: RequestContext) -> ServerInfo:
        """Fetch and log the client and server versions. Failure is fatal."""
        try:
            info = await self._executor.server_info(ctx)
        except ReindexException as e:
            self._classifier.check(e, PipelinePhase.QUERY)
            raise
        logger.info("Client: %s", client_version)
        logger.info("Server: %s", info.version)
        log_separator(logger, "~")
        return info

    @traced("reindexer.pipeline")
    async def run(self, query: SearchQuery) -> PipelineSummary:
        """Execute the pipeline for ``query``.

        Raises:
            PipelineAborted: A fatal error (query failure, transport failure on
                a write); ``error`` holds the cause.
        """
        try:
            result = await self._executor.execute(query)
        except ReindexException as e:
            self._classifier.check(e, PipelinePhase.QUERY)
            raise
        logger.info("[%s] %d hits; took: %dms", result.status, result.total, result.took_ms)

        summary = PipelineSummary(total_hits=result.total, hits_seen=len(result.hits))
        if self._barrier_mode is BarrierMode.PER_HIT:
            for hit in HitSelector(result, self._qualifies):
                transformed = self._transform(hit)
                if isinstance(transformed, HitOutcome):
                    summary.outcomes.append(transformed)
                    continue
                outcome = await self._writer.write_request(transformed.request)
                summary.outcomes.append(self._record(outcome))
                log_separator(logger, "-")
        else:
            slots = [self._transform(hit) for hit in HitSelector(result, self._qualifies)]
            pending = [s.request for s in slots if isinstance(s, _Transformed)]
            written = iter(await self._writer.write_requests(pending))
            for slot in slots:
                if isinstance(slot, HitOutcome):
                    summary.outcomes.append(slot)
                else:
                    summary.outcomes.append(self._record(next(written)))
            log_separator(logger, "-")

        log_separator(logger, "=")
        logger.info(
            "Processed %d hit(s): %d selected, %d written, %d write failure(s), %d transform failure(s)",
            summary.hits_seen,
            summary.hits_selected,
            summary.writes_succeeded,
            summary.writes_failed,
            summary.transforms_failed,
        )
        return summary

    def _qualifies(self, hit: Hit) -> bool:
        """Selection predicate; logs the presence field of every hit seen."""
        if self._presence_field is not None:
            value = hit.source.get(self._presence_field)
            logger.info(
                "before %s=%r, type=%s, present=%s",
                self._presence_field,
                value,
                type(value).__name__,
                self._presence_field in hit.source,
            )
        return self._predicate(hit)

    def _transform(self, hit: Hit) -> _Transformed | HitOutcome:
        present = self._transformer.field_present(hit)
        logger.info("index=%s id=%s", hit.index, hit.id)
        try:
            transformed = self._transformer.transform(hit, present)
            return _Transformed(self._writer.build_request(transformed))
        except TransformError as e:
            self._classifier.check(e, PipelinePhase.TRANSFORM)
            logger.warning("Skipping document ID=%s: %s", hit.id, e.message)
            return HitOutcome(hit.id, HitStatus.TRANSFORM_FAILED, error=e)

    def _record(self, outcome: WriteOutcome) -> HitOutcome:
        if outcome.ok:
            logger.info(
                "[%s] %s; version=%d",
                outcome.result.status,
                outcome.result.result,
                outcome.result.version,
            )
            return HitOutcome(
                outcome.document_id, HitStatus.WRITTEN, version=outcome.result.version
            )
        error = outcome.error
        self._classifier.check(error, PipelinePhase.WRITE)
        set_span_error(error)
        if isinstance(error, ReindexException):
            logger.warning("%s", error.message)
        else:
            logger.warning("Error indexing document ID=%s: %s", outcome.document_id, error)
        return HitOutcome(outcome.document_id, HitStatus.WRITE_FAILED, error=error)


def build_query(settings: Settings, ctx: RequestContext) -> SearchQuery:
    """SearchQuery for the configured source collection and filter."""
    return SearchQuery(
        collection=settings.source_collection,
        predicate=FilterPredicate(
            field=settings.filter_field,
            operator=FilterOperator(settings.filter_operator),
            value=(
                tuple(settings.filter_value)
                if isinstance(settings.filter_value, list)
                else settings.filter_value
            ),
        ),
        options=QueryOptions(
            track_total_hits=settings.track_total_hits,
            pretty=settings.pretty,
            context=RequestContext(settings.query_deadline_seconds, ctx.cancel_event),
        ),
    )


def build_pipeline(
    store: IDocumentStore,
    settings: Settings,
    ctx: RequestContext,
) -> ReindexPipeline:
    """Wire a pipeline from settings around an explicitly constructed store client."""
    writer = ConcurrentIndexWriter(
        store,
        settings.target_collection,
        refresh=settings.write_refresh,
        context=RequestContext(settings.write_deadline_seconds, ctx.cancel_event),
    )
    return ReindexPipeline(
        QueryExecutor(store),
        DocumentTransformer(settings.transform_field, settings.transform_marker),
        writer,
        predicate=identifier_equals(settings.target_document_id),
        barrier_mode=settings.barrier_mode,
        presence_field=settings.presence_field,
    )


async def run_pipeline(
    store: IDocumentStore,
    settings: Settings,
    *,
    cancel_event: asyncio.Event | None = None,
    client_version: str | None = None,
) -> PipelineSummary:
    """Log server info (when ``client_version`` is given) and run the configured pipeline."""
    ctx = RequestContext(settings.query_deadline_seconds, cancel_event)
    pipeline = build_pipeline(store, settings, ctx)
    if client_version is not None:
        await pipeline.log_server_info(client_version, ctx)
    return await pipeline.run(build_query(settings, ctx))
