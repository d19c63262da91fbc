"""Shared telemetry: logging setup, OpenTelemetry config, and tracing helpers."""

from reindexer.shared.telemetry.logging import get_logger, log_separator, setup_logging
from reindexer.shared.telemetry.telemetry import TelemetryConfig
from reindexer.shared.telemetry.tracing import (
    add_span_attributes,
    add_span_event,
    set_span_error,
    traced,
)

__all__ = [
    "setup_logging",
    "get_logger",
    "log_separator",
    "TelemetryConfig",
    "traced",
    "add_span_attributes",
    "add_span_event",
    "set_span_error",
]
