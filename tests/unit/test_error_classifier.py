"""Unit tests for ErrorClassifier (fatal vs recoverable per phase)."""

import pytest

from reindexer.application.services.error_classifier import ErrorClassifier
from reindexer.domain.exceptions import (
    DecodeError,
    PipelineAborted,
    RemoteError,
    TransformError,
    ValidationException,
    WriteError,
)
from reindexer.infrastructure.exceptions import TransportError
from reindexer.shared.enums import ErrorSeverity, PipelinePhase

FATAL = ErrorSeverity.FATAL
RECOVERABLE = ErrorSeverity.RECOVERABLE


@pytest.mark.parametrize(
    ("error", "phase", "expected"),
    [
        (TransportError("search", "timeout"), PipelinePhase.QUERY, FATAL),
        (DecodeError("SearchResult", "bad"), PipelinePhase.QUERY, FATAL),
        (RemoteError("400 Bad Request", "t", "r"), PipelinePhase.QUERY, FATAL),
        (ValidationException("bad filter"), PipelinePhase.QUERY, FATAL),
        (TransformError("d", "nan"), PipelinePhase.TRANSFORM, RECOVERABLE),
        (WriteError("d", "400 Bad Request"), PipelinePhase.WRITE, RECOVERABLE),
        (DecodeError("WriteResult", "bad"), PipelinePhase.WRITE, RECOVERABLE),
        (TransportError("index", "reset"), PipelinePhase.WRITE, FATAL),
        (RuntimeError("bug"), PipelinePhase.WRITE, FATAL),
        (RuntimeError("bug"), PipelinePhase.TRANSFORM, FATAL),
    ],
)
def test_classify(error: Exception, phase: PipelinePhase, expected: ErrorSeverity) -> None:
    assert ErrorClassifier().classify(error, phase) is expected


def test_check_raises_pipeline_aborted_with_cause() -> None:
    cause = RemoteError("400 Bad Request", "search_phase_execution_exception", "x")
    with pytest.raises(PipelineAborted) as exc_info:
        ErrorClassifier().check(cause, PipelinePhase.QUERY)
    aborted = exc_info.value
    assert aborted.error is cause
    assert aborted.phase == "query"
    assert aborted.details["cause"] == "REMOTE_ERROR"
    assert aborted.details["type"] == "search_phase_execution_exception"
    assert aborted.details["reason"] == "x"
    assert aborted.__cause__ is cause


def test_check_returns_for_recoverable() -> None:
    ErrorClassifier().check(WriteError("doc1", "409 Conflict"), PipelinePhase.WRITE)


def test_pipeline_aborted_wraps_unexpected_exception() -> None:
    aborted = PipelineAborted("write", RuntimeError("boom"))
    assert aborted.details == {"phase": "write", "cause": "RuntimeError"}
    assert "boom" in aborted.message
