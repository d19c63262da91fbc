"""Wire schemas for document store responses.

Pydantic models mirror the JSON bodies returned by the store; the
response decoder validates raw bytes against them and converts the
result into application DTOs.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class _WireModel(BaseModel):
    """Base for store bodies: unknown keys are ignored, aliases map ``_id`` etc."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class TotalHitsBody(_WireModel):
    value: int
    relation: str = "eq"


class HitBody(_WireModel):
    id: str = Field(alias="_id")
    index: str = Field(alias="_index")
    source: dict[str, Any] = Field(default_factory=dict, alias="_source")


class HitsBody(_WireModel):
    total: TotalHitsBody | None = None
    hits: list[HitBody]


class SearchResponseBody(_WireModel):
    """Successful ``_search`` body: ``{took, hits: {total?: {value}, hits: [...]}}``.

    ``hits.total`` is absent when the search ran with ``track_total_hits=false``.
    """

    took: int
    timed_out: bool = False
    hits: HitsBody


class IndexResponseBody(_WireModel):
    """Successful index body: ``{_id, _index, result, _version}``."""

    id: str | None = Field(default=None, alias="_id")
    index: str | None = Field(default=None, alias="_index")
    result: str
    version: int = Field(alias="_version")


class ErrorDetailBody(_WireModel):
    type: str
    reason: str


class ErrorEnvelopeBody(_WireModel):
    """Error body: ``{status, error: {type, reason}}``."""

    error: ErrorDetailBody
    status: int | None = None


class VersionBody(_WireModel):
    number: str


class ServerInfoBody(_WireModel):
    """Root endpoint body: ``{name, cluster_name, version: {number}}``."""

    name: str | None = None
    cluster_name: str | None = None
    version: VersionBody
