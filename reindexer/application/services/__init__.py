"""Pipeline services: decoding, querying, selection, transform, write-back, classification."""

from reindexer.application.services.document_transformer import DocumentTransformer
from reindexer.application.services.error_classifier import ErrorClassifier
from reindexer.application.services.hit_selector import HitSelector, identifier_equals
from reindexer.application.services.index_writer import ConcurrentIndexWriter
from reindexer.application.services.query_executor import QueryExecutor, build_query_body

__all__ = [
    "ConcurrentIndexWriter",
    "DocumentTransformer",
    "ErrorClassifier",
    "HitSelector",
    "QueryExecutor",
    "build_query_body",
    "identifier_equals",
]
