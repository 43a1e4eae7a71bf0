"""Concurrency-safe holder of the four catalog collections.

The store is an ordinary object owned by the application and injected into
every component that reads or writes it; nothing here is module-global.

Writes and reads
----------------
Each ``replace_*`` call swaps one whole collection under the exclusive side
of a :class:`ReadWriteLock` and rebuilds that collection's id index.  A
query enters :meth:`CatalogStore.read`, which holds the shared side for the
whole query and yields a :class:`CatalogSnapshot`.  Collections are replaced,
never mutated, so the snapshot stays internally consistent even after the
lock is released.

Cross-collection consistency (performers and venues agreeing on count or
order) is not enforced.  During the fetch window a reader can see fresh
performers next to empty venues.

Joining auxiliary records
-------------------------
The remote collections are expected to be positionally aligned: the record
at position ``id - 1`` belongs to performer ``id``.  Nothing guarantees it.
:attr:`JoinMode.POSITIONAL` (the default) keeps that rule, bounds-checked,
so an id past the end of a collection joins to empty data.
:attr:`JoinMode.BY_ID` is opt-in: it ignores position and looks records up
through an index keyed on each record's own ``id``.  Either way a lookup
miss returns ``None`` and the join degrades to empty data.  Positional
mismatches are logged when a collection is replaced so operators can judge
whether to switch modes.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Generic, TypeVar

import structlog

from groupie_tracker.models.aggregate import AggregateRecord
from groupie_tracker.models.catalog import (
    CatalogSection,
    DateRecord,
    Performer,
    RelationRecord,
    VenueRecord,
)
from groupie_tracker.services.joiner import join_in_snapshot
from groupie_tracker.utils.concurrency import ReadWriteLock
from groupie_tracker.utils.errors import ConfigurationError, NotFoundError
from groupie_tracker.utils.logging import get_logger

_R = TypeVar("_R", VenueRecord, DateRecord, RelationRecord)

_logger: structlog.BoundLogger = get_logger(__name__)


class JoinMode(str, Enum):  # noqa: UP042 -- StrEnum requires Python 3.11+
    """How auxiliary records are matched to a performer id."""

    BY_ID = "by_id"
    POSITIONAL = "positional"

    @classmethod
    def parse(cls, value: str | JoinMode) -> JoinMode:
        try:
            return cls(value)
        except ValueError as exc:
            choices = ", ".join(m.value for m in cls)
            raise ConfigurationError(
                f"unknown join mode {value!r} (expected one of: {choices})",
                source_name="catalog",
            ) from exc


@dataclass(frozen=True)
class _Collection(Generic[_R]):
    """One auxiliary collection plus its id index."""

    records: tuple[_R, ...] = ()
    by_id: dict[int, _R] = field(default_factory=dict)

    @classmethod
    def build(cls, records: Sequence[_R]) -> _Collection[_R]:
        by_id: dict[int, _R] = {}
        for record in records:
            # First occurrence wins, matching a forward scan.
            by_id.setdefault(record.id, record)
        return cls(records=tuple(records), by_id=by_id)

    def lookup(self, performer_id: int, mode: JoinMode) -> _R | None:
        if mode is JoinMode.POSITIONAL:
            if 1 <= performer_id <= len(self.records):
                return self.records[performer_id - 1]
            return None
        return self.by_id.get(performer_id)


@dataclass(frozen=True)
class CatalogSnapshot:
    """Immutable view of the store taken for one logical query."""

    performers: tuple[Performer, ...] = ()
    venue_records: _Collection[VenueRecord] = field(default_factory=_Collection)
    date_records: _Collection[DateRecord] = field(default_factory=_Collection)
    relation_records: _Collection[RelationRecord] = field(default_factory=_Collection)
    join_mode: JoinMode = JoinMode.POSITIONAL

    @property
    def is_loaded(self) -> bool:
        return len(self.performers) > 0

    @property
    def relations(self) -> tuple[RelationRecord, ...]:
        return self.relation_records.records

    def performer_by_id(self, performer_id: int) -> Performer | None:
        """Linear scan by id equality; ids are not assumed sorted."""
        for performer in self.performers:
            if performer.id == performer_id:
                return performer
        return None

    def venue_for(self, performer_id: int) -> VenueRecord | None:
        return self.venue_records.lookup(performer_id, self.join_mode)

    def dates_for(self, performer_id: int) -> DateRecord | None:
        return self.date_records.lookup(performer_id, self.join_mode)

    def relation_for(self, performer_id: int) -> RelationRecord | None:
        return self.relation_records.lookup(performer_id, self.join_mode)

    def counts(self) -> dict[str, int]:
        return {
            CatalogSection.PERFORMERS.value: len(self.performers),
            CatalogSection.VENUES.value: len(self.venue_records.records),
            CatalogSection.DATES.value: len(self.date_records.records),
            CatalogSection.RELATIONS.value: len(self.relation_records.records),
        }


class CatalogStore:
    """Owner of the catalog collections.

    Parameters
    ----------
    join_mode:
        How auxiliary records are matched to performers.  Defaults to
        :attr:`JoinMode.POSITIONAL`.
    """

    def __init__(self, join_mode: JoinMode | str = JoinMode.POSITIONAL) -> None:
        self._lock = ReadWriteLock()
        self._snapshot = CatalogSnapshot(join_mode=JoinMode.parse(join_mode))

    @property
    def join_mode(self) -> JoinMode:
        return self._snapshot.join_mode

    # ------------------------------------------------------------------
    # Writers -- each replaces exactly one collection
    # ------------------------------------------------------------------

    async def replace_performers(self, performers: Sequence[Performer]) -> None:
        async with self._lock.write():
            self._snapshot = replace(self._snapshot, performers=tuple(performers))
        _logger.info("catalog_replaced", section=CatalogSection.PERFORMERS.value, count=len(performers))

    async def replace_venues(self, venues: Sequence[VenueRecord]) -> None:
        collection = _Collection.build(venues)
        _check_alignment(CatalogSection.VENUES, collection.records)
        async with self._lock.write():
            self._snapshot = replace(self._snapshot, venue_records=collection)
        _logger.info("catalog_replaced", section=CatalogSection.VENUES.value, count=len(venues))

    async def replace_dates(self, dates: Sequence[DateRecord]) -> None:
        collection = _Collection.build(dates)
        _check_alignment(CatalogSection.DATES, collection.records)
        async with self._lock.write():
            self._snapshot = replace(self._snapshot, date_records=collection)
        _logger.info("catalog_replaced", section=CatalogSection.DATES.value, count=len(dates))

    async def replace_relations(self, relations: Sequence[RelationRecord]) -> None:
        collection = _Collection.build(relations)
        _check_alignment(CatalogSection.RELATIONS, collection.records)
        async with self._lock.write():
            self._snapshot = replace(self._snapshot, relation_records=collection)
        _logger.info("catalog_replaced", section=CatalogSection.RELATIONS.value, count=len(relations))

    # ------------------------------------------------------------------
    # Readers
    # ------------------------------------------------------------------

    @asynccontextmanager
    async def read(self) -> AsyncIterator[CatalogSnapshot]:
        """Hold the shared lock for one logical query and yield a snapshot."""
        async with self._lock.read():
            yield self._snapshot

    async def all_performers(self) -> tuple[Performer, ...]:
        async with self.read() as snapshot:
            return snapshot.performers

    async def performer_by_id(self, performer_id: int) -> Performer | None:
        async with self.read() as snapshot:
            return snapshot.performer_by_id(performer_id)

    async def full_by_id(self, performer_id: int) -> AggregateRecord | None:
        """Joined record for *performer_id*, or ``None`` if the id is absent."""
        async with self.read() as snapshot:
            try:
                return join_in_snapshot(snapshot, performer_id)
            except NotFoundError:
                return None

    async def counts(self) -> dict[str, int]:
        async with self.read() as snapshot:
            return snapshot.counts()


def _check_alignment(section: CatalogSection, records: Sequence[VenueRecord | DateRecord | RelationRecord]) -> None:
    """Log positions whose record id is not ``position + 1``."""
    misaligned = [pos for pos, record in enumerate(records) if record.id != pos + 1]
    if misaligned:
        _logger.warning(
            "catalog_misaligned",
            section=section.value,
            misaligned=len(misaligned),
            first_position=misaligned[0],
            first_id=records[misaligned[0]].id,
        )
