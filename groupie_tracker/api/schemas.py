"""Pydantic response schemas for the groupie tracker API.

Catalog records are returned as the domain models themselves
(:class:`AggregateRecord`, :class:`SearchSuggestion`); the schemas here wrap
them with the range and venue option data a listing page renders.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from groupie_tracker.models.aggregate import AggregateRecord


class YearRangeResponse(BaseModel):
    creation_min: int = 0
    creation_max: int = 0
    first_album_min: int = 0
    first_album_max: int = 0


class MemberRangeResponse(BaseModel):
    min: int = 0
    max: int = 0


class CatalogListResponse(BaseModel):
    """Performer listing with filter-form option data."""

    artists: list[AggregateRecord] = Field(default_factory=list)
    years: YearRangeResponse
    members: MemberRangeResponse
    locations: list[str] = Field(default_factory=list)
    query: str = ""
    filtered: bool = False


class HealthResponse(BaseModel):
    """Application health check response."""

    status: str
    version: str
    join_mode: str
    collections: dict[str, int]


class ErrorResponse(BaseModel):
    """Standard error body."""

    error: str
    detail: str
