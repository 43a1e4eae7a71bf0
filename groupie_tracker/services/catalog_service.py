"""Query facade consumed by the presentation layer.

Bundles the fetcher, joiner, filter and search services behind the
operations the web layer needs.  Each method is one logical query and
holds the store's read lock for its duration.
"""

from __future__ import annotations

from dataclasses import dataclass

from groupie_tracker.models.aggregate import (
    AggregateRecord,
    FilterCriteria,
    MemberCountRange,
    SearchSuggestion,
    YearRange,
)
from groupie_tracker.models.catalog import Performer
from groupie_tracker.services.catalog_fetcher import CatalogFetcher, FetchReport
from groupie_tracker.services.catalog_store import CatalogSnapshot, CatalogStore
from groupie_tracker.services.filter_service import (
    FilterService,
    filter_performers,
    member_count_range,
    unique_venues,
    year_range,
)
from groupie_tracker.services.joiner import PerformerJoiner
from groupie_tracker.services.search_service import SearchService


@dataclass(frozen=True)
class CatalogOverview:
    """Performers plus the option data a listing page needs.

    ``records`` carry ``first_album_year`` but no joined venue data.
    """

    records: list[AggregateRecord]
    years: YearRange
    members: MemberCountRange
    venues: list[str]


class CatalogService:
    """Entry point for every read and for the (re)fetch of the catalog."""

    def __init__(
        self,
        store: CatalogStore,
        fetcher: CatalogFetcher,
        joiner: PerformerJoiner,
        filter_service: FilterService,
        search_service: SearchService,
    ) -> None:
        self._store = store
        self._fetcher = fetcher
        self._joiner = joiner
        self._filter = filter_service
        self._search = search_service

    @property
    def store(self) -> CatalogStore:
        return self._store

    async def fetch_all(self, raise_on_error: bool = True) -> FetchReport:
        return await self._fetcher.fetch_all(raise_on_error=raise_on_error)

    async def all_performers(self) -> tuple[Performer, ...]:
        return await self._store.all_performers()

    async def overview(self) -> CatalogOverview:
        async with self._store.read() as snapshot:
            return self._overview_of(snapshot, filter_performers(snapshot.performers, FilterCriteria()))

    async def full_by_id(self, performer_id: int) -> AggregateRecord:
        """Joined record; raises NotFoundError for an unknown id."""
        return await self._joiner.join(performer_id)

    async def filter(self, criteria: FilterCriteria) -> list[AggregateRecord]:
        return await self._filter.filter(criteria)

    async def filter_overview(self, criteria: FilterCriteria) -> CatalogOverview:
        """Filtered records with the same option data as :meth:`overview`."""
        async with self._store.read() as snapshot:
            return self._overview_of(snapshot, self._filter.filter_in(snapshot, criteria))

    async def search_full(self, query: str | None) -> list[AggregateRecord]:
        return await self._search.search_full(query)

    async def search_overview(self, query: str | None) -> CatalogOverview:
        async with self._store.read() as snapshot:
            return self._overview_of(snapshot, self._search.search_in(snapshot, query))

    async def search_suggestions(self, query: str | None) -> list[SearchSuggestion]:
        return await self._search.suggestions(query)

    async def year_range(self) -> YearRange:
        return year_range(await self._store.all_performers())

    async def member_count_range(self) -> MemberCountRange:
        return member_count_range(await self._store.all_performers())

    async def counts(self) -> dict[str, int]:
        return await self._store.counts()

    @staticmethod
    def _overview_of(snapshot: CatalogSnapshot, records: list[AggregateRecord]) -> CatalogOverview:
        # Ranges and venue options always describe the whole catalog so the
        # filter form keeps its bounds after narrowing.
        return CatalogOverview(
            records=records,
            years=year_range(snapshot.performers),
            members=member_count_range(snapshot.performers),
            venues=unique_venues(snapshot.relations),
        )
