"""Infrastructure exceptions for the document store transport.

Store errors extend ReindexException so the error classifier can treat
them like any other pipeline error.
"""

from reindexer.domain.exceptions import ReindexException


class StoreException(ReindexException):
    """Base exception for document store transport operations."""


class TransportError(StoreException):
    """The request could not complete (network failure, timeout or cancellation)."""

    def __init__(self, operation: str, reason: str) -> None:
        super().__init__(
            f"Error getting response for {operation}: {reason}",
            "TRANSPORT_ERROR",
            {"operation": operation, "reason": reason},
        )
        self.operation = operation
        self.reason = reason
