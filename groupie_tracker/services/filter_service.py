"""Range filters, venue sub-filter and range discovery.

The numeric pass (:func:`filter_performers`) is a pure function over a
performer sequence.  The venue sub-filter needs joined venue lists, so
:class:`FilterService` runs both passes inside one read of the store.

Bounds are checked in a fixed order: creation year, first-album year,
member count.  Any bound ``<= 0`` is treated as absent, which means a real
bound of ``0`` cannot be expressed.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

import structlog

from groupie_tracker.models.aggregate import (
    AggregateRecord,
    FilterCriteria,
    MemberCountRange,
    YearRange,
)
from groupie_tracker.models.catalog import Performer, RelationRecord
from groupie_tracker.services.catalog_store import CatalogSnapshot, CatalogStore
from groupie_tracker.services.joiner import PerformerJoiner
from groupie_tracker.utils.logging import get_logger
from groupie_tracker.utils.text_normalizer import normalize_location, search_in_locations


def _outside(value: int, lower: int, upper: int) -> bool:
    if lower > 0 and value < lower:
        return True
    if upper > 0 and value > upper:
        return True
    return False


def filter_performers(
    performers: Iterable[Performer],
    criteria: FilterCriteria,
) -> list[AggregateRecord]:
    """Apply the numeric bounds of *criteria* to *performers*.

    Survivors keep their input order and are wrapped as AggregateRecords
    with ``first_album_year`` set; venue, date and relation fields are left
    empty.  The venue names in *criteria* are ignored here.
    """
    filtered: list[AggregateRecord] = []

    for performer in performers:
        if _outside(performer.creation_date, criteria.creation_date_min, criteria.creation_date_max):
            continue

        first_album_year = performer.first_album_year
        if _outside(first_album_year, criteria.first_album_min, criteria.first_album_max):
            continue

        if _outside(performer.member_count, criteria.members_min, criteria.members_max):
            continue

        filtered.append(AggregateRecord(performer=performer, first_album_year=first_album_year))

    return filtered


def year_range(performers: Sequence[Performer]) -> YearRange:
    """Return (creation min, creation max, first-album min, first-album max).

    Unparseable first-album dates (year ``0``) do not take part in the album
    range.  An empty input, or one without any parseable album date, yields
    zeros for the corresponding pair.
    """
    if not performers:
        return YearRange(0, 0, 0, 0)

    creation_years = [p.creation_date for p in performers]
    album_years = [y for y in (p.first_album_year for p in performers) if y > 0]

    return YearRange(
        creation_min=min(creation_years),
        creation_max=max(creation_years),
        first_album_min=min(album_years, default=0),
        first_album_max=max(album_years, default=0),
    )


def member_count_range(performers: Sequence[Performer]) -> MemberCountRange:
    """Return the (min, max) member count, ``(0, 0)`` for an empty input."""
    if not performers:
        return MemberCountRange(0, 0)

    counts = [p.member_count for p in performers]
    return MemberCountRange(min(counts), max(counts))


def unique_venues(relations: Iterable[RelationRecord]) -> list[str]:
    """Every venue named in *relations*, deduplicated by normalized form.

    The first spelling encountered is kept.  The result is sorted by
    normalized form so the option list is stable across fetches.
    """
    seen: dict[str, str] = {}
    for relation in relations:
        for venue in relation.dates_locations:
            seen.setdefault(normalize_location(venue), venue)
    return [seen[key] for key in sorted(seen)]


class FilterService:
    """Runs the full filter (numeric pass, then venue sub-filter) on the store."""

    def __init__(self, store: CatalogStore, joiner: PerformerJoiner) -> None:
        self._store = store
        self._joiner = joiner
        self._logger: structlog.BoundLogger = get_logger(__name__)

    def filter_in(self, snapshot: CatalogSnapshot, criteria: FilterCriteria) -> list[AggregateRecord]:
        """Filter within an already-held snapshot."""
        filtered = filter_performers(snapshot.performers, criteria)

        if not criteria.has_venue_filter():
            return filtered

        # Venue filtering needs a second, fully joined pass.
        kept: list[AggregateRecord] = []
        for record in filtered:
            full = self._joiner.join_performer(snapshot, record.performer)
            if any(search_in_locations(full.venues, venue) for venue in criteria.venues):
                kept.append(full)
        return kept

    async def filter(self, criteria: FilterCriteria) -> list[AggregateRecord]:
        async with self._store.read() as snapshot:
            results = self.filter_in(snapshot, criteria)

        self._logger.debug(
            "catalog_filtered",
            criteria=criteria.model_dump(),
            results=len(results),
        )
        return results
