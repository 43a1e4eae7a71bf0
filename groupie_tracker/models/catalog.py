"""Base catalog models decoded from the four remote collections.

The remote API uses camelCase field names (``creationDate``,
``datesLocations``); each model maps them onto snake_case attributes via
aliases and also accepts the snake_case names, so fixtures and tests can
build models either way.  All models are frozen: the catalog is read-only
once fetched.

Payload shapes:
    performers -> ``[Performer, ...]``
    venues     -> ``{"index": [VenueRecord, ...]}``
    dates      -> ``{"index": [DateRecord, ...]}``
    relations  -> ``{"index": [RelationRecord, ...]}``
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from groupie_tracker.utils.text_normalizer import extract_year


class CatalogSection(str, Enum):  # noqa: UP042 -- StrEnum requires Python 3.11+
    """The four independently fetched remote collections.

    Used as the ``source`` tag on FetchError, as the key of fetch reports,
    and in ``AggregateRecord.missing`` to name absent auxiliary data.
    """

    PERFORMERS = "performers"
    VENUES = "venues"
    DATES = "dates"
    RELATIONS = "relations"


_CATALOG_CONFIG = ConfigDict(frozen=True, populate_by_name=True)


class Performer(BaseModel):
    """A band or solo artist.

    ``locations``, ``concert_dates`` and ``relations`` are URLs pointing at
    the auxiliary collections; the engine only carries them through.
    """

    model_config = _CATALOG_CONFIG

    id: int
    image: str = ""
    name: str
    members: list[str] = Field(default_factory=list)
    creation_date: int = Field(default=0, alias="creationDate")
    first_album: str = Field(default="", alias="firstAlbum")  # DD-MM-YYYY
    locations: str = ""
    concert_dates: str = Field(default="", alias="concertDates")
    relations: str = ""

    @property
    def member_count(self) -> int:
        return len(self.members)

    @property
    def first_album_year(self) -> int:
        """Year parsed from ``first_album``; ``0`` when unparseable."""
        return extract_year(self.first_album)


class VenueRecord(BaseModel):
    """Concert venues of one performer (remote ``locations`` collection)."""

    model_config = _CATALOG_CONFIG

    id: int
    locations: list[str] = Field(default_factory=list)
    dates: str = ""


class DateRecord(BaseModel):
    """Concert dates of one performer."""

    model_config = _CATALOG_CONFIG

    id: int
    dates: list[str] = Field(default_factory=list)


class RelationRecord(BaseModel):
    """Venue name -> concert dates for one performer."""

    model_config = _CATALOG_CONFIG

    id: int
    dates_locations: dict[str, list[str]] = Field(default_factory=dict, alias="datesLocations")


class VenueIndex(BaseModel):
    """Envelope of the venues payload."""

    model_config = _CATALOG_CONFIG

    index: list[VenueRecord] = Field(default_factory=list)


class DateIndex(BaseModel):
    """Envelope of the dates payload."""

    model_config = _CATALOG_CONFIG

    index: list[DateRecord] = Field(default_factory=list)


class RelationIndex(BaseModel):
    """Envelope of the relations payload."""

    model_config = _CATALOG_CONFIG

    index: list[RelationRecord] = Field(default_factory=list)
