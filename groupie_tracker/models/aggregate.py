"""Per-request models built from the base catalog.

AggregateRecord and SearchSuggestion are constructed for one query and
discarded once the response is produced.  FilterCriteria carries the
user's bounds into the filter engine.
"""

from __future__ import annotations

from enum import Enum
from typing import NamedTuple

from pydantic import BaseModel, ConfigDict, Field

from groupie_tracker.models.catalog import CatalogSection, Performer


class AggregateRecord(BaseModel):
    """A performer joined with its venues, dates and venue -> dates map.

    ``missing`` lists the auxiliary sections that had no record for this
    performer.  Their fields are left empty rather than raising.  Records
    produced by the numeric filter pass have not been joined at all and
    carry empty auxiliary fields with an empty ``missing`` list.
    """

    model_config = ConfigDict(frozen=True)

    performer: Performer
    venues: list[str] = Field(default_factory=list)
    dates: list[str] = Field(default_factory=list)
    dates_venues: dict[str, list[str]] = Field(default_factory=dict)
    first_album_year: int = 0
    missing: list[CatalogSection] = Field(default_factory=list)

    @property
    def id(self) -> int:
        return self.performer.id

    @property
    def name(self) -> str:
        return self.performer.name


class FilterCriteria(BaseModel):
    """Numeric bounds and venue names for the filter engine.

    Any bound ``<= 0`` means "no bound".  A genuine bound of ``0`` therefore
    cannot be expressed.
    """

    model_config = ConfigDict(frozen=True)

    creation_date_min: int = 0
    creation_date_max: int = 0
    first_album_min: int = 0
    first_album_max: int = 0
    members_min: int = 0
    members_max: int = 0
    venues: list[str] = Field(default_factory=list)

    def has_venue_filter(self) -> bool:
        return len(self.venues) > 0


class SuggestionCategory(str, Enum):  # noqa: UP042 -- StrEnum requires Python 3.11+
    """Which performer field produced an autocomplete suggestion."""

    ARTIST = "artist/band"
    MEMBER = "member"
    CREATION_DATE = "creation date"
    FIRST_ALBUM_DATE = "first album date"


class SearchSuggestion(BaseModel):
    """One autocomplete entry.  Serialised as ``{value, type, id}``."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    value: str
    category: SuggestionCategory = Field(alias="type")
    id: int


class YearRange(NamedTuple):
    creation_min: int
    creation_max: int
    first_album_min: int
    first_album_max: int


class MemberCountRange(NamedTuple):
    min: int
    max: int
