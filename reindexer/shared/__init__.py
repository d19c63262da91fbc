"""Shared utilities: enums, request context, telemetry.

Used by domain, application, and infrastructure. No business logic.
"""

from reindexer.shared.enums import (
    BarrierMode,
    ErrorSeverity,
    FilterOperator,
    HitStatus,
    PipelinePhase,
    WriteRefresh,
)

__all__ = [
    "BarrierMode",
    "ErrorSeverity",
    "FilterOperator",
    "HitStatus",
    "PipelinePhase",
    "WriteRefresh",
]
