"""DTOs for per-hit outcomes and the pipeline summary."""

from __future__ import annotations

from dataclasses import dataclass, field

from reindexer.application.dtos.search import WriteResult
from reindexer.shared.enums import HitStatus


@dataclass(frozen=True)
class WriteOutcome:
    """Terminal state of one write task: exactly one of ``result`` / ``error`` is set."""

    document_id: str
    result: WriteResult | None = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class HitOutcome:
    document_id: str
    status: HitStatus
    version: int | None = None
    error: Exception | None = None


@dataclass
class PipelineSummary:
    """Counts derived from the ordered per-hit outcomes of one run."""

    total_hits: int = 0
    hits_seen: int = 0
    outcomes: list[HitOutcome] = field(default_factory=list)

    @property
    def hits_selected(self) -> int:
        return len(self.outcomes)

    @property
    def writes_succeeded(self) -> int:
        return sum(1 for o in self.outcomes if o.status is HitStatus.WRITTEN)

    @property
    def writes_failed(self) -> int:
        return sum(1 for o in self.outcomes if o.status is HitStatus.WRITE_FAILED)

    @property
    def transforms_failed(self) -> int:
        return sum(1 for o in self.outcomes if o.status is HitStatus.TRANSFORM_FAILED)
