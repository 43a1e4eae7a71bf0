"""Substring search over the catalog and typed autocomplete suggestions.

Both operations lower-case and strip the query first; a blank query
returns nothing rather than everything.

* Full search matches name, members, decimal creation year, first-album
  date and joined venue names (venues through the location normalizer),
  and returns fully joined records.
* Suggestions skip venues, tag each hit with the field it came from and
  deduplicate on (category, value).  Every match is collected before the
  list is cut to ``limit``.
"""

from __future__ import annotations

from collections.abc import Iterable

import structlog

from groupie_tracker.models.aggregate import AggregateRecord, SearchSuggestion, SuggestionCategory
from groupie_tracker.models.catalog import Performer
from groupie_tracker.services.catalog_store import CatalogSnapshot, CatalogStore
from groupie_tracker.services.joiner import PerformerJoiner
from groupie_tracker.utils.logging import get_logger
from groupie_tracker.utils.text_normalizer import contains_ci, normalize_query, search_in_locations

DEFAULT_SUGGESTION_LIMIT = 10


def _matches_fields(performer: Performer, query: str) -> bool:
    """Name, members, creation year or first-album date contains *query*."""
    if contains_ci(performer.name, query):
        return True
    if any(contains_ci(member, query) for member in performer.members):
        return True
    if query in str(performer.creation_date):
        return True
    return contains_ci(performer.first_album, query)


def suggest(
    performers: Iterable[Performer],
    query: str | None,
    limit: int = DEFAULT_SUGGESTION_LIMIT,
) -> list[SearchSuggestion]:
    """Autocomplete suggestions for *query*, at most *limit* of them.

    *limit* never raises the cap above ``DEFAULT_SUGGESTION_LIMIT``.

    The same value under the same category is suggested once, attributed to
    the first performer (in input order) that produced it.
    """
    query = normalize_query(query)
    if not query:
        return []

    suggestions: list[SearchSuggestion] = []
    seen: set[tuple[SuggestionCategory, str]] = set()

    def _add(category: SuggestionCategory, value: str, performer_id: int) -> None:
        key = (category, value)
        if key in seen:
            return
        seen.add(key)
        suggestions.append(SearchSuggestion(value=value, category=category, id=performer_id))

    for performer in performers:
        if contains_ci(performer.name, query):
            _add(SuggestionCategory.ARTIST, performer.name, performer.id)

        for member in performer.members:
            if contains_ci(member, query):
                _add(SuggestionCategory.MEMBER, member, performer.id)

        creation = str(performer.creation_date)
        if query in creation:
            _add(SuggestionCategory.CREATION_DATE, creation, performer.id)

        if contains_ci(performer.first_album, query):
            _add(SuggestionCategory.FIRST_ALBUM_DATE, performer.first_album, performer.id)

    return suggestions[: max(min(limit, DEFAULT_SUGGESTION_LIMIT), 0)]


class SearchService:
    """Full-text search and suggestions against the store.

    Parameters
    ----------
    store:
        The catalog store to read from.
    joiner:
        Joiner used to attach venues, dates and relations to matches.
    suggestion_limit:
        Maximum number of autocomplete suggestions returned, capped at
        ``DEFAULT_SUGGESTION_LIMIT``.
    """

    def __init__(
        self,
        store: CatalogStore,
        joiner: PerformerJoiner,
        suggestion_limit: int = DEFAULT_SUGGESTION_LIMIT,
    ) -> None:
        self._store = store
        self._joiner = joiner
        self._suggestion_limit = suggestion_limit
        self._logger: structlog.BoundLogger = get_logger(__name__)

    @property
    def suggestion_limit(self) -> int:
        return self._suggestion_limit

    def search_in(self, snapshot: CatalogSnapshot, query: str | None) -> list[AggregateRecord]:
        """Full search within an already-held snapshot."""
        query = normalize_query(query)
        if not query:
            return []

        results: list[AggregateRecord] = []
        for performer in snapshot.performers:
            full = self._joiner.join_performer(snapshot, performer)
            if _matches_fields(performer, query) or search_in_locations(full.venues, query):
                results.append(full)
        return results

    async def search_full(self, query: str | None) -> list[AggregateRecord]:
        async with self._store.read() as snapshot:
            results = self.search_in(snapshot, query)

        self._logger.debug("catalog_searched", query=query, results=len(results))
        return results

    async def suggestions(self, query: str | None) -> list[SearchSuggestion]:
        async with self._store.read() as snapshot:
            return suggest(snapshot.performers, query, limit=self._suggestion_limit)
