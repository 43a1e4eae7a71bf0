"""HTTP catalog source implementing ICatalogSource.

Fetches the four JSON collections with plain ``GET`` requests (no auth).
The ``httpx.AsyncClient`` is injected so tests can stub it and so the
application shares one connection pool.  Each request carries its own
timeout; a timeout surfaces as a FetchError like any other network failure.
"""

from __future__ import annotations

from typing import Any

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError

from groupie_tracker.config.settings import Settings
from groupie_tracker.interfaces.catalog_source import ICatalogSource
from groupie_tracker.models.catalog import (
    CatalogSection,
    DateIndex,
    DateRecord,
    Performer,
    RelationIndex,
    RelationRecord,
    VenueIndex,
    VenueRecord,
)
from groupie_tracker.utils.errors import FetchError
from groupie_tracker.utils.logging import get_logger

_USER_AGENT = "groupie-tracker/0.1.0"
_PERFORMERS_ADAPTER = TypeAdapter(list[Performer])


class HttpCatalogSource(ICatalogSource):
    """Catalog source backed by the remote JSON API."""

    def __init__(self, http_client: httpx.AsyncClient, settings: Settings) -> None:
        self._http = http_client
        self._urls = settings.source_urls()
        self._timeout = settings.fetch_timeout
        self._logger = get_logger(__name__)

    async def _get(self, section: CatalogSection) -> bytes:
        url = self._urls[section.value]
        try:
            response = await self._http.get(
                url,
                headers={"User-Agent": _USER_AGENT, "Accept": "application/json"},
                timeout=self._timeout,
            )
        except httpx.TimeoutException as exc:
            raise FetchError(section.value, exc, message=f"timed out after {self._timeout}s") from exc
        except httpx.HTTPError as exc:
            raise FetchError(section.value, exc) from exc

        if not response.is_success:
            raise FetchError(section.value, f"status code: {response.status_code}")

        self._logger.debug(
            "catalog_section_downloaded",
            section=section.value,
            url=url,
            bytes=len(response.content),
        )
        return response.content

    @staticmethod
    def _decode(section: CatalogSection, body: bytes, decoder: Any) -> Any:
        try:
            return decoder(body)
        except ValidationError as exc:
            raise FetchError(
                section.value, exc, message=f"invalid payload ({exc.error_count()} errors)"
            ) from exc

    async def _fetch_index(self, section: CatalogSection, envelope: type[BaseModel]) -> list[Any]:
        body = await self._get(section)
        return self._decode(section, body, envelope.model_validate_json).index

    # -- ICatalogSource implementation -----------------------------------------

    async def fetch_performers(self) -> list[Performer]:
        body = await self._get(CatalogSection.PERFORMERS)
        return self._decode(CatalogSection.PERFORMERS, body, _PERFORMERS_ADAPTER.validate_json)

    async def fetch_venues(self) -> list[VenueRecord]:
        return await self._fetch_index(CatalogSection.VENUES, VenueIndex)

    async def fetch_dates(self) -> list[DateRecord]:
        return await self._fetch_index(CatalogSection.DATES, DateIndex)

    async def fetch_relations(self) -> list[RelationRecord]:
        return await self._fetch_index(CatalogSection.RELATIONS, RelationIndex)

    def get_source_name(self) -> str:
        return "http"
