"""Domain exceptions for the reindexer.

Defines the errors raised while decoding store responses, transforming
documents and writing them back. These exceptions are independent of the
HTTP transport; the error classifier maps them to fatal or recoverable.
"""

from typing import Any


class ReindexException(Exception):
    """Base exception for all reindexer errors.

    All custom exceptions inherit from this class so the pipeline can
    classify and log them uniformly.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. document_id, status).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)


class ValidationException(ReindexException):
    """Raised when a query or configuration value is invalid."""

    def __init__(self, message: str, field: str | None = None) -> None:
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class DecodeError(ReindexException):
    """Raised when a response body cannot be decoded into the expected shape."""

    def __init__(self, expected: str, reason: str) -> None:
        """Initialize with the expected shape and the decode failure.

        Args:
            expected: Name of the shape being decoded (e.g. 'SearchResult').
            reason: Why decoding failed.
        """
        super().__init__(
            f"Cannot decode {expected}: {reason}",
            "DECODE_ERROR",
            {"expected": expected, "reason": reason},
        )
        self.expected = expected
        self.reason = reason


class RemoteError(ReindexException):
    """Raised when the store answers with a non-success status and an error envelope."""

    def __init__(self, status: str, error_type: str, reason: str) -> None:
        """Initialize from a decoded error envelope.

        Args:
            status: HTTP status line (e.g. '400 Bad Request').
            error_type: Envelope error type (e.g. 'search_phase_execution_exception').
            reason: Envelope error reason.
        """
        super().__init__(
            f"[{status}] {error_type}: {reason}",
            "REMOTE_ERROR",
            {"status": status, "type": error_type, "reason": reason},
        )
        self.status = status
        self.error_type = error_type
        self.reason = reason


class WriteError(ReindexException):
    """Raised when the store rejects a single document write."""

    def __init__(
        self,
        document_id: str,
        status: str,
        error_type: str | None = None,
        reason: str | None = None,
    ) -> None:
        details: dict[str, Any] = {"document_id": document_id, "status": status}
        if error_type:
            details["type"] = error_type
        if reason:
            details["reason"] = reason
        super().__init__(
            f"[{status}] Error indexing document ID={document_id}",
            "WRITE_ERROR",
            details,
        )
        self.document_id = document_id
        self.status = status
        self.error_type = error_type
        self.reason = reason


class TransformError(ReindexException):
    """Raised when a transformed payload cannot be serialized for write-back."""

    def __init__(self, document_id: str, reason: str) -> None:
        super().__init__(
            f"Cannot transform document ID={document_id}: {reason}",
            "TRANSFORM_ERROR",
            {"document_id": document_id, "reason": reason},
        )
        self.document_id = document_id
        self.reason = reason


class PipelineAborted(ReindexException):
    """Raised when a fatal error halts the pipeline. The cause is kept on ``error``."""

    def __init__(self, phase: str, error: Exception) -> None:
        if isinstance(error, ReindexException):
            cause, message, extra = error.error_code, error.message, error.details
        else:
            cause, message, extra = error.__class__.__name__, str(error), {}
        super().__init__(
            f"Pipeline aborted during {phase}: {message}",
            "PIPELINE_ABORTED",
            {"phase": phase, "cause": cause, **extra},
        )
        self.phase = phase
        self.error = error
