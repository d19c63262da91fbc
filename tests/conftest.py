"""Pytest configuration and fixtures for the reindexer.

FakeStore implements IDocumentStore in memory: canned responses per
operation, optional per-document delays, and an ordered event log of
write start/end used by the barrier tests.
"""

from __future__ import annotations

import asyncio
import json
from typing import Any

import httpx
import pytest

from reindexer.application.interfaces.store import RawResponse


def json_response(status_code: int, body: Any) -> RawResponse:
    """RawResponse with a JSON body and the standard reason phrase."""
    return RawResponse(
        status_code=status_code,
        reason=httpx.codes.get_reason_phrase(status_code),
        body=json.dumps(body).encode(),
    )


def search_body(
    hits: list[tuple[str, dict[str, Any]]],
    *,
    index: str = ".logstash",
    took: int = 4,
    total: int | None = None,
) -> dict[str, Any]:
    """Search response body for ``(id, source)`` pairs."""
    return {
        "took": took,
        "timed_out": False,
        "hits": {
            "total": {"value": len(hits) if total is None else total, "relation": "eq"},
            "hits": [
                {"_id": doc_id, "_index": index, "_source": source}
                for doc_id, source in hits
            ],
        },
    }


def index_body(doc_id: str, result: str = "created", version: int = 1) -> dict[str, Any]:
    return {"_index": "test", "_id": doc_id, "result": result, "_version": version}


def error_body(error_type: str, reason: str, status: int = 400) -> dict[str, Any]:
    return {"error": {"type": error_type, "reason": reason}, "status": status}


class FakeStore:
    """In-memory IDocumentStore double."""

    def __init__(self) -> None:
        self.info_response: RawResponse | Exception = json_response(
            200, {"name": "node-1", "cluster_name": "dev", "version": {"number": "7.17.0"}}
        )
        self.search_response: RawResponse | Exception = json_response(200, search_body([]))
        self.search_delay: float = 0.0
        self.index_responses: dict[str, RawResponse | Exception] = {}
        self.delays: dict[str, float] = {}
        self.events: list[tuple[str, str]] = []
        self.search_calls: list[dict[str, Any]] = []
        self.index_calls: list[dict[str, Any]] = []

    async def info(self) -> RawResponse:
        if isinstance(self.info_response, Exception):
            raise self.info_response
        return self.info_response

    async def search(
        self,
        collection: str,
        body: dict[str, Any],
        *,
        track_total_hits: bool = True,
        pretty: bool = False,
    ) -> RawResponse:
        self.search_calls.append(
            {
                "collection": collection,
                "body": body,
                "track_total_hits": track_total_hits,
                "pretty": pretty,
            }
        )
        if self.search_delay:
            await asyncio.sleep(self.search_delay)
        if isinstance(self.search_response, Exception):
            raise self.search_response
        return self.search_response

    async def index(
        self,
        collection: str,
        document_id: str,
        body: bytes,
        *,
        refresh: str = "false",
    ) -> RawResponse:
        self.events.append(("start", document_id))
        await asyncio.sleep(self.delays.get(document_id, 0))
        self.events.append(("end", document_id))
        self.index_calls.append(
            {
                "collection": collection,
                "document_id": document_id,
                "body": json.loads(body),
                "refresh": refresh,
            }
        )
        response = self.index_responses.get(
            document_id, json_response(201, index_body(document_id))
        )
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def store() -> FakeStore:
    return FakeStore()
