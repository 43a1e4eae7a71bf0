"""Abstract base class for remote catalog sources.

A source retrieves each of the four collections independently.  The
fetcher calls all four concurrently, so implementations must not rely on
any ordering between them.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from groupie_tracker.models.catalog import DateRecord, Performer, RelationRecord, VenueRecord


class ICatalogSource(ABC):
    """Contract for services that provide the four catalog collections.

    Every method raises :class:`groupie_tracker.utils.errors.FetchError`
    tagged with the collection name on network failure, non-2xx status or
    an undecodable body.
    """

    @abstractmethod
    async def fetch_performers(self) -> list[Performer]:
        """Retrieve the performer collection."""

    @abstractmethod
    async def fetch_venues(self) -> list[VenueRecord]:
        """Retrieve the per-performer venue records, in remote order."""

    @abstractmethod
    async def fetch_dates(self) -> list[DateRecord]:
        """Retrieve the per-performer concert date records, in remote order."""

    @abstractmethod
    async def fetch_relations(self) -> list[RelationRecord]:
        """Retrieve the per-performer venue -> dates maps, in remote order."""

    @abstractmethod
    def get_source_name(self) -> str:
        """Return a short identifier for logging, e.g. ``"http"``."""
