"""Decide whether an error aborts the pipeline or is logged per hit."""

from __future__ import annotations

from reindexer.domain.exceptions import (
    DecodeError,
    PipelineAborted,
    RemoteError,
    TransformError,
    WriteError,
)
from reindexer.infrastructure.exceptions import TransportError
from reindexer.shared.enums import ErrorSeverity, PipelinePhase

# (phase, exception type) -> severity. Anything not listed is fatal.
_RULES: dict[PipelinePhase, tuple[tuple[type[Exception], ErrorSeverity], ...]] = {
    PipelinePhase.QUERY: (
        (TransportError, ErrorSeverity.FATAL),
        (DecodeError, ErrorSeverity.FATAL),
        (RemoteError, ErrorSeverity.FATAL),
    ),
    PipelinePhase.TRANSFORM: (
        (TransformError, ErrorSeverity.RECOVERABLE),
    ),
    PipelinePhase.WRITE: (
        (TransportError, ErrorSeverity.FATAL),
        (WriteError, ErrorSeverity.RECOVERABLE),
        (DecodeError, ErrorSeverity.RECOVERABLE),
        (TransformError, ErrorSeverity.RECOVERABLE),
    ),
}


class ErrorClassifier:
    """Maps ``(error, phase)`` to FATAL or RECOVERABLE."""

    def classify(self, error: Exception, phase: PipelinePhase) -> ErrorSeverity:
        for exc_type, severity in _RULES.get(PipelinePhase(phase), ()):
            if isinstance(error, exc_type):
                return severity
        return ErrorSeverity.FATAL

    def is_fatal(self, error: Exception, phase: PipelinePhase) -> bool:
        return self.classify(error, phase) is ErrorSeverity.FATAL

    def check(self, error: Exception, phase: PipelinePhase) -> None:
        """Raise PipelineAborted if ``error`` is fatal in ``phase``; return otherwise."""
        if self.is_fatal(error, phase):
            raise PipelineAborted(PipelinePhase(phase).value, error) from error
