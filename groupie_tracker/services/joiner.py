"""Compose one performer with its venue, date and relation records.

Only a missing performer is an error.  A missing auxiliary record leaves
the matching field empty and is named in ``AggregateRecord.missing``; this
is how the catalog degrades when the four remote collections disagree in
length or content.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from groupie_tracker.models.aggregate import AggregateRecord
from groupie_tracker.models.catalog import CatalogSection, Performer
from groupie_tracker.utils.errors import NotFoundError

if TYPE_CHECKING:
    from groupie_tracker.services.catalog_store import CatalogSnapshot, CatalogStore


def join_in_snapshot(snapshot: CatalogSnapshot, performer_id: int) -> AggregateRecord:
    """Build the joined record for *performer_id* from *snapshot*.

    Raises
    ------
    NotFoundError
        If no performer has this id.
    """
    performer = snapshot.performer_by_id(performer_id)
    if performer is None:
        raise NotFoundError(performer_id)
    return join_performer(snapshot, performer)


def join_performer(snapshot: CatalogSnapshot, performer: Performer) -> AggregateRecord:
    """Attach auxiliary records to a performer already taken from *snapshot*."""
    missing: list[CatalogSection] = []

    venue = snapshot.venue_for(performer.id)
    if venue is None:
        missing.append(CatalogSection.VENUES)

    dates = snapshot.dates_for(performer.id)
    if dates is None:
        missing.append(CatalogSection.DATES)

    relation = snapshot.relation_for(performer.id)
    if relation is None:
        missing.append(CatalogSection.RELATIONS)

    return AggregateRecord(
        performer=performer,
        venues=list(venue.locations) if venue is not None else [],
        dates=list(dates.dates) if dates is not None else [],
        dates_venues=dict(relation.dates_locations) if relation is not None else {},
        first_album_year=performer.first_album_year,
        missing=missing,
    )


class PerformerJoiner:
    """Joiner bound to a store.

    :meth:`join` is a complete logical query.  Services that already hold
    a snapshot call :meth:`join_in` so the whole request sees one
    consistent view.
    """

    def __init__(self, store: CatalogStore) -> None:
        self._store = store

    @staticmethod
    def join_in(snapshot: CatalogSnapshot, performer_id: int) -> AggregateRecord:
        return join_in_snapshot(snapshot, performer_id)

    @staticmethod
    def join_performer(snapshot: CatalogSnapshot, performer: Performer) -> AggregateRecord:
        return join_performer(snapshot, performer)

    async def join(self, performer_id: int) -> AggregateRecord:
        async with self._store.read() as snapshot:
            return join_in_snapshot(snapshot, performer_id)
