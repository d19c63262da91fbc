"""Shared enumerations for the reindexer.

Cross-cutting enums used by configuration, application services and the
store client (write visibility, barrier mode, error classification).
"""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class WriteRefresh(_ValuesMixin, str, Enum):
    """Write-visibility option sent as the ``refresh`` parameter of an index request."""

    TRUE = "true"
    FALSE = "false"
    WAIT_FOR = "wait_for"


class BarrierMode(_ValuesMixin, str, Enum):
    """Where the completion barrier sits relative to dispatched write tasks."""

    PER_HIT = "per_hit"
    BATCH = "batch"


class FilterOperator(_ValuesMixin, str, Enum):
    """Query clause used for the filter predicate."""

    TERM = "term"
    TERMS = "terms"
    MATCH = "match"
    MATCH_PHRASE = "match_phrase"
    PREFIX = "prefix"
    WILDCARD = "wildcard"
    EXISTS = "exists"


class PipelinePhase(_ValuesMixin, str, Enum):
    """Pipeline step an error was raised from."""

    QUERY = "query"
    TRANSFORM = "transform"
    WRITE = "write"


class ErrorSeverity(_ValuesMixin, str, Enum):
    """Outcome of error classification: abort the pipeline or log and continue."""

    FATAL = "fatal"
    RECOVERABLE = "recoverable"


class HitStatus(_ValuesMixin, str, Enum):
    """Terminal state of one qualifying hit."""

    WRITTEN = "written"
    WRITE_FAILED = "write_failed"
    TRANSFORM_FAILED = "transform_failed"
