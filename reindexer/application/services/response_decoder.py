"""Decode raw store responses into typed results or structured errors.

Pure and deterministic: no I/O, same bytes give the same result. Shape
checks are done by the pydantic wire schemas; any mismatch surfaces as
DecodeError instead of runtime type inspection at the call site.
"""

from __future__ import annotations

from typing import TypeVar

from pydantic import BaseModel, ValidationError

from reindexer.application.dtos.search import Hit, SearchResult, ServerInfo, WriteResult
from reindexer.application.interfaces.store import RawResponse
from reindexer.domain.exceptions import DecodeError, RemoteError, WriteError
from reindexer.schemas.store import (
    ErrorEnvelopeBody,
    IndexResponseBody,
    SearchResponseBody,
    ServerInfoBody,
)

M = TypeVar("M", bound=BaseModel)


def _parse(model: type[M], body: bytes, expected: str) -> M:
    if not body:
        raise DecodeError(expected, "empty response body")
    try:
        return model.model_validate_json(body)
    except ValidationError as e:
        errors = e.errors(include_url=False)
        first = errors[0] if errors else {}
        loc = ".".join(str(p) for p in first.get("loc", ())) or "<root>"
        raise DecodeError(expected, f"{loc}: {first.get('msg', str(e))}") from e


def decode_error(raw: RawResponse) -> RemoteError:
    """Decode an error envelope into RemoteError (returned, not raised).

    Raises:
        DecodeError: The body is not a ``{error: {type, reason}}`` envelope.
    """
    envelope = _parse(ErrorEnvelopeBody, raw.body, "ErrorEnvelope")
    return RemoteError(raw.status, envelope.error.type, envelope.error.reason)


def decode_search_result(raw: RawResponse) -> SearchResult:
    """Decode a search response.

    Raises:
        RemoteError: The store reported a non-success status with an envelope.
        DecodeError: The body (or the error envelope) has the wrong shape.
    """
    if raw.is_error:
        raise decode_error(raw)
    parsed = _parse(SearchResponseBody, raw.body, "SearchResult")
    hits = tuple(Hit(id=h.id, index=h.index, source=h.source) for h in parsed.hits.hits)
    # Untracked totals fall back to the number of hits returned.
    total = parsed.hits.total.value if parsed.hits.total is not None else len(hits)
    return SearchResult(
        status=raw.status,
        total=total,
        took_ms=parsed.took,
        hits=hits,
    )


def decode_write_result(raw: RawResponse, document_id: str) -> WriteResult:
    """Decode an index response.

    A rejected write raises WriteError; the envelope type/reason are attached
    when the body carries one, otherwise only the status is reported.

    Raises:
        WriteError: The store rejected the write.
        DecodeError: A success body is missing ``result`` or ``_version``.
    """
    if raw.is_error:
        try:
            remote = decode_error(raw)
        except DecodeError:
            raise WriteError(document_id, raw.status) from None
        raise WriteError(document_id, raw.status, remote.error_type, remote.reason)
    parsed = _parse(IndexResponseBody, raw.body, "WriteResult")
    return WriteResult(status=raw.status, result=parsed.result, version=parsed.version)


def decode_server_info(raw: RawResponse) -> ServerInfo:
    """Decode the root endpoint response (``version.number``)."""
    if raw.is_error:
        raise decode_error(raw)
    parsed = _parse(ServerInfoBody, raw.body, "ServerInfo")
    return ServerInfo(
        version=parsed.version.number,
        name=parsed.name,
        cluster_name=parsed.cluster_name,
    )
