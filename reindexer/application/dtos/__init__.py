"""Application DTOs (search, write-back and pipeline outcomes)."""

from reindexer.application.dtos.pipeline import HitOutcome, PipelineSummary, WriteOutcome
from reindexer.application.dtos.search import (
    FilterPredicate,
    Hit,
    QueryOptions,
    SearchQuery,
    SearchResult,
    ServerInfo,
    WriteRequest,
    WriteResult,
)

__all__ = [
    "FilterPredicate",
    "Hit",
    "HitOutcome",
    "PipelineSummary",
    "QueryOptions",
    "SearchQuery",
    "SearchResult",
    "ServerInfo",
    "WriteOutcome",
    "WriteRequest",
    "WriteResult",
]
