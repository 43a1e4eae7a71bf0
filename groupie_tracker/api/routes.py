"""FastAPI routes exposing the catalog as JSON.

Endpoint                         Method  Description
-------------------------------------------------------------------------
/api/v1/artists                  GET     All performers + filter options
/api/v1/artists/{performer_id}   GET     One fully joined performer
/api/v1/filter                   GET     Range / venue filtered listing
/api/v1/search?q=                GET     Full substring search listing
/api/v1/suggestions?q=           GET     Autocomplete suggestions (max 10)
/api/v1/health                   GET     Status and collection sizes

The catalog service is resolved from ``app.state`` through ``Depends``,
so tests can mount the router on a bare app with their own service.
"""

from __future__ import annotations

from typing import Annotated

import structlog
from fastapi import APIRouter, Depends, Query, Request

from groupie_tracker import __version__
from groupie_tracker.api.schemas import (
    CatalogListResponse,
    HealthResponse,
    MemberRangeResponse,
    YearRangeResponse,
)
from groupie_tracker.models.aggregate import AggregateRecord, FilterCriteria, SearchSuggestion
from groupie_tracker.services.catalog_service import CatalogOverview, CatalogService
from groupie_tracker.utils.logging import get_logger

_logger: structlog.BoundLogger = get_logger(__name__)

router = APIRouter(prefix="/api/v1")


def _get_catalog(request: Request) -> CatalogService:
    """Return the catalog service from application state."""
    return request.app.state.catalog


CatalogDep = Annotated[CatalogService, Depends(_get_catalog)]


def _listing(overview: CatalogOverview, *, query: str = "", filtered: bool = False) -> CatalogListResponse:
    return CatalogListResponse(
        artists=overview.records,
        years=YearRangeResponse(**overview.years._asdict()),
        members=MemberRangeResponse(**overview.members._asdict()),
        locations=overview.venues,
        query=query,
        filtered=filtered,
    )


@router.get("/artists", response_model=CatalogListResponse)
async def list_artists(catalog: CatalogDep) -> CatalogListResponse:
    return _listing(await catalog.overview())


@router.get(
    "/artists/{performer_id}",
    response_model=AggregateRecord,
    responses={404: {"description": "Unknown performer id"}},
)
async def get_artist(performer_id: int, catalog: CatalogDep) -> AggregateRecord:
    """Fully joined record; ``NotFoundError`` surfaces as a 404 via the error middleware."""
    return await catalog.full_by_id(performer_id)


@router.get("/filter", response_model=CatalogListResponse)
async def filter_artists(
    catalog: CatalogDep,
    creation_min: int = 0,
    creation_max: int = 0,
    album_min: int = 0,
    album_max: int = 0,
    members_min: int = 0,
    members_max: int = 0,
    locations: Annotated[list[str] | None, Query()] = None,
) -> CatalogListResponse:
    criteria = FilterCriteria(
        creation_date_min=creation_min,
        creation_date_max=creation_max,
        first_album_min=album_min,
        first_album_max=album_max,
        members_min=members_min,
        members_max=members_max,
        venues=locations or [],
    )
    overview = await catalog.filter_overview(criteria)
    _logger.debug("filter_request", results=len(overview.records))
    return _listing(overview, filtered=True)


@router.get("/search", response_model=CatalogListResponse)
async def search_artists(
    catalog: CatalogDep,
    q: Annotated[str, Query(max_length=200)] = "",
) -> CatalogListResponse:
    overview = await catalog.search_overview(q)
    return _listing(overview, query=q.strip().lower(), filtered=True)


@router.get("/suggestions", response_model=list[SearchSuggestion])
async def suggestions(
    catalog: CatalogDep,
    q: Annotated[str, Query(max_length=200)] = "",
) -> list[SearchSuggestion]:
    return await catalog.search_suggestions(q)


@router.get("/health", response_model=HealthResponse)
async def health(catalog: CatalogDep) -> HealthResponse:
    counts = await catalog.counts()
    return HealthResponse(
        status="ok" if counts.get("performers", 0) > 0 else "empty",
        version=__version__,
        join_mode=catalog.store.join_mode.value,
        collections=counts,
    )
