"""Document store port (the collaborator the pipeline consumes).

Protocols define the contract; reindexer.infrastructure.store provides
the HTTP implementation and tests provide in-memory fakes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol


@dataclass(frozen=True)
class RawResponse:
    """Undecoded store response: status code, reason phrase and body bytes."""

    status_code: int
    reason: str
    body: bytes

    @property
    def is_error(self) -> bool:
        return self.status_code >= 300

    @property
    def status(self) -> str:
        """Status line as logged, e.g. ``200 OK``."""
        return f"{self.status_code} {self.reason}".strip()


class IDocumentStore(Protocol):
    """Query and write capabilities of a remote document store.

    Implementations raise TransportError when the call cannot complete and
    return a RawResponse otherwise, including for non-success statuses.
    Implementations are shared by every write task and must be safe for
    concurrent use.
    """

    async def info(self) -> RawResponse:
        """Fetch store identity and version."""

    async def search(
        self,
        collection: str,
        body: dict[str, Any],
        *,
        track_total_hits: bool = True,
        pretty: bool = False,
    ) -> RawResponse:
        """Run a query document against ``collection``."""

    async def index(
        self,
        collection: str,
        document_id: str,
        body: bytes,
        *,
        refresh: str = "false",
    ) -> RawResponse:
        """Create or replace document ``document_id`` in ``collection``."""
