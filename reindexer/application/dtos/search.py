"""DTOs for queries, hits and write-back (no dependency on the HTTP transport)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from reindexer.shared.context import BACKGROUND, RequestContext
from reindexer.shared.enums import FilterOperator, WriteRefresh


@dataclass(frozen=True)
class FilterPredicate:
    """Single-clause filter: ``{operator: {field: value}}``."""

    field: str
    operator: FilterOperator
    value: Any = None


@dataclass(frozen=True)
class QueryOptions:
    track_total_hits: bool = True
    pretty: bool = False
    context: RequestContext = BACKGROUND


@dataclass(frozen=True)
class SearchQuery:
    """Query against one collection. Immutable once built."""

    collection: str
    predicate: FilterPredicate
    options: QueryOptions = field(default_factory=QueryOptions)


@dataclass(frozen=True)
class Hit:
    """One matched record. ``source`` is replaced wholesale by the transformer, never edited."""

    id: str
    index: str
    source: dict[str, Any]


@dataclass(frozen=True)
class SearchResult:
    """Decoded search response. Hits keep the order returned by the store."""

    status: str
    total: int
    took_ms: int
    hits: tuple[Hit, ...]


@dataclass(frozen=True)
class WriteRequest:
    """Index request for one qualifying hit; ``body`` is an independent serialized copy."""

    collection: str
    document_id: str
    body: bytes
    refresh: WriteRefresh = WriteRefresh.FALSE


@dataclass(frozen=True)
class WriteResult:
    """Successful write: status line, outcome (created/updated) and document version."""

    status: str
    result: str
    version: int


@dataclass(frozen=True)
class ServerInfo:
    """Store identity reported by the root endpoint."""

    version: str
    name: str | None = None
    cluster_name: str | None = None
