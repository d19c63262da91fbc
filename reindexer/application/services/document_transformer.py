"""Prepend a fixed marker to one field of a qualifying hit's payload."""

from __future__ import annotations

import copy
import json
from dataclasses import replace
from typing import Any

from reindexer.application.dtos.search import Hit
from reindexer.domain.exceptions import TransformError
from reindexer.shared.telemetry.tracing import traced


def encode_payload(document_id: str, source: dict[str, Any]) -> bytes:
    """Serialize a payload to JSON bytes.

    Raises:
        TransformError: The payload holds values JSON cannot represent.
    """
    try:
        return json.dumps(source, ensure_ascii=False, allow_nan=False).encode("utf-8")
    except (TypeError, ValueError) as e:
        raise TransformError(document_id, str(e)) from e


def _as_text(value: Any) -> str:
    """Textual form of a field value: strings as-is, None as empty, the rest as JSON."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    try:
        return json.dumps(value, ensure_ascii=False)
    except (TypeError, ValueError):
        return str(value)


class DocumentTransformer:
    """Builds the write-back payload by prepending ``marker`` to ``field``.

    Not idempotent: transforming an already transformed hit adds a second
    marker. The input hit is never modified; a new Hit with a deep-copied
    payload is returned.
    """

    def __init__(self, field: str, marker: str) -> None:
        self.field = field
        self.marker = marker

    def field_present(self, hit: Hit) -> bool:
        return self.field in hit.source

    @traced("reindexer.transform")
    def transform(self, hit: Hit, field_present: bool | None = None) -> Hit:
        """Return ``hit`` with the marker prepended to the designated field.

        Args:
            hit: Qualifying hit.
            field_present: Result of the caller's presence check; when False the
                existing value is treated as empty. Computed when omitted.

        The payload is serialized once, by ``ConcurrentIndexWriter.build_request``.
        """
        if field_present is None:
            field_present = self.field_present(hit)
        current = _as_text(hit.source.get(self.field)) if field_present else ""
        source = copy.deepcopy(hit.source)
        source[self.field] = self.marker + current
        return replace(hit, source=source)
