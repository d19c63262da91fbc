"""Build and run filter queries against the document store."""

from __future__ import annotations

from typing import Any

from reindexer.application.dtos.search import (
    FilterPredicate,
    QueryOptions,
    SearchQuery,
    SearchResult,
    ServerInfo,
)
from reindexer.application.interfaces.store import IDocumentStore
from reindexer.application.services.response_decoder import (
    decode_search_result,
    decode_server_info,
)
from reindexer.domain.exceptions import ValidationException
from reindexer.shared.context import RequestContext, run_in_context
from reindexer.shared.enums import FilterOperator
from reindexer.shared.telemetry.logging import get_logger
from reindexer.shared.telemetry.tracing import add_span_attributes, traced

logger = get_logger(__name__)


def build_query_body(predicate: FilterPredicate) -> dict[str, Any]:
    """Return the query document for a single-clause filter.

    ``exists`` takes only the field; ``terms`` requires a list value; every
    other operator maps to ``{operator: {field: value}}``.
    """
    if not predicate.field:
        raise ValidationException("Filter field must be a non-empty string", "field")
    op = FilterOperator(predicate.operator)
    if op is FilterOperator.EXISTS:
        clause: dict[str, Any] = {"field": predicate.field}
    elif op is FilterOperator.TERMS:
        if not isinstance(predicate.value, (list, tuple)):
            raise ValidationException("terms filter requires a list value", "value")
        clause = {predicate.field: list(predicate.value)}
    else:
        if predicate.value is None:
            raise ValidationException(f"{op.value} filter requires a value", "value")
        clause = {predicate.field: predicate.value}
    return {"query": {op.value: clause}}


class QueryExecutor:
    """Issues search queries through the shared store client. No retries at this layer."""

    def __init__(self, store: IDocumentStore) -> None:
        self._store = store

    @traced("reindexer.query")
    async def execute(self, query: SearchQuery) -> SearchResult:
        """Run ``query`` and decode the response.

        Raises:
            TransportError: The call could not complete (network, deadline, cancel).
            RemoteError: The store answered with a decodable error envelope.
            DecodeError: The response body has the wrong shape.
        """
        body = build_query_body(query.predicate)
        opts = query.options
        add_span_attributes(
            collection=query.collection,
            operator=FilterOperator(query.predicate.operator).value,
        )
        raw = await run_in_context(
            opts.context,
            "search",
            lambda: self._store.search(
                query.collection,
                body,
                track_total_hits=opts.track_total_hits,
                pretty=opts.pretty,
            ),
        )
        result = decode_search_result(raw)
        add_span_attributes(hits=len(result.hits), total=result.total)
        return result

    async def search(
        self,
        collection: str,
        predicate: FilterPredicate,
        options: QueryOptions | None = None,
    ) -> SearchResult:
        """Convenience wrapper building the SearchQuery from its parts."""
        return await self.execute(
            SearchQuery(collection, predicate, options or QueryOptions())
        )

    async def server_info(self, ctx: RequestContext) -> ServerInfo:
        raw = await run_in_context(ctx, "info", self._store.info)
        return decode_server_info(raw)
