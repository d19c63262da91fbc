"""Thin document store REST client over httpx.

Speaks the Elasticsearch-style REST API: ``GET /`` for server info,
``POST /<collection>/_search`` for queries and
``PUT /<collection>/_doc/<id>`` for writes. All HTTP calls use
httpx.AsyncClient so they do not block the event loop; the client is
shared by the query and every concurrent write task.
"""

from __future__ import annotations

import json
from typing import Any
from urllib.parse import quote

import httpx

from reindexer.application.interfaces.store import RawResponse
from reindexer.infrastructure.exceptions import TransportError
from reindexer.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


def _flag(value: bool) -> str:
    return "true" if value else "false"


async def _request_async(
    client: httpx.AsyncClient,
    operation: str,
    method: str,
    url: str,
    *,
    params: dict[str, str] | None = None,
    content: bytes | None = None,
) -> RawResponse:
    """Perform one HTTP request. Non-2xx statuses are returned, not raised."""
    headers = {"Accept": "application/json"}
    if content is not None:
        headers["Content-Type"] = "application/json"
    try:
        resp = await client.request(
            method, url, params=params, content=content, headers=headers
        )
    except httpx.RequestError as e:
        raise TransportError(operation, str(e) or e.__class__.__name__) from e
    logger.debug("%s %s -> %s", method, resp.request.url, resp.status_code)
    return RawResponse(
        status_code=resp.status_code,
        reason=resp.reason_phrase,
        body=resp.content,
    )


class DocumentStoreRESTClient:
    """Lightweight document store client (implements IDocumentStore)."""

    def __init__(
        self,
        base_url: str,
        *,
        auth: httpx.Auth | None = None,
        timeout: float = 30.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._http = (
            http_client
            if http_client is not None
            else httpx.AsyncClient(auth=auth, timeout=timeout)
        )
        self._owns_http = http_client is None

    async def aclose(self) -> None:
        """Close the HTTP client only if we created it (do not close injected client)."""
        if self._owns_http:
            await self._http.aclose()

    async def __aenter__(self) -> "DocumentStoreRESTClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    def _url(self, *segments: str) -> str:
        path = "/".join(quote(s, safe="") for s in segments)
        return f"{self._base_url}/{path}" if path else f"{self._base_url}/"

    async def info(self) -> RawResponse:
        return await _request_async(self._http, "info", "GET", self._url())

    async def search(
        self,
        collection: str,
        body: dict[str, Any],
        *,
        track_total_hits: bool = True,
        pretty: bool = False,
    ) -> RawResponse:
        params = {"track_total_hits": _flag(track_total_hits)}
        if pretty:
            params["pretty"] = "true"
        return await _request_async(
            self._http,
            "search",
            "POST",
            self._url(collection, "_search"),
            params=params,
            content=json.dumps(body).encode(),
        )

    async def index(
        self,
        collection: str,
        document_id: str,
        body: bytes,
        *,
        refresh: str = "false",
    ) -> RawResponse:
        return await _request_async(
            self._http,
            "index",
            "PUT",
            self._url(collection, "_doc", document_id),
            params={"refresh": refresh},
            content=body,
        )
