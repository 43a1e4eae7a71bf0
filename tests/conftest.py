"""Shared pytest fixtures for the groupie tracker test suite."""

from __future__ import annotations

from typing import Any

import pytest

from groupie_tracker.models.catalog import DateRecord, Performer, RelationRecord, VenueRecord
from groupie_tracker.services.catalog_store import CatalogStore

# ---------------------------------------------------------------------------
# Raw payloads, shaped like the remote API
# ---------------------------------------------------------------------------

_API = "https://groupietrackers.herokuapp.com/api"


@pytest.fixture
def performers_payload() -> list[dict[str, Any]]:
    return [
        {
            "id": 1,
            "image": f"{_API}/images/queen.jpeg",
            "name": "Queen",
            "members": ["Freddie Mercury", "Brian May", "John Daecon", "Roger Meddows-Taylor"],
            "creationDate": 1970,
            "firstAlbum": "14-12-1973",
            "locations": f"{_API}/locations/1",
            "concertDates": f"{_API}/dates/1",
            "relations": f"{_API}/relation/1",
        },
        {
            "id": 2,
            "image": f"{_API}/images/pinkfloyd.jpeg",
            "name": "Pink Floyd",
            "members": ["Roger Waters", "Nick Mason", "David Gilmour"],
            "creationDate": 1965,
            "firstAlbum": "05-08-1967",
            "locations": f"{_API}/locations/2",
            "concertDates": f"{_API}/dates/2",
            "relations": f"{_API}/relation/2",
        },
        {
            "id": 3,
            "image": f"{_API}/images/philcollins.jpeg",
            "name": "Phil Collins",
            "members": ["Phil Collins"],
            "creationDate": 1980,
            "firstAlbum": "13-02-1981",
            "locations": f"{_API}/locations/3",
            "concertDates": f"{_API}/dates/3",
            "relations": f"{_API}/relation/3",
        },
    ]


@pytest.fixture
def venues_payload() -> dict[str, Any]:
    return {
        "index": [
            {
                "id": 1,
                "locations": ["north_carolina-usa", "georgia-usa", "los_angeles-usa"],
                "dates": f"{_API}/dates/1",
            },
            {
                "id": 2,
                "locations": ["london-uk", "dusseldorf-germany"],
                "dates": f"{_API}/dates/2",
            },
            {
                "id": 3,
                "locations": ["playa_del_carmen-mexico", "london-uk"],
                "dates": f"{_API}/dates/3",
            },
        ]
    }


@pytest.fixture
def dates_payload() -> dict[str, Any]:
    return {
        "index": [
            {"id": 1, "dates": ["*23-08-2019", "22-08-2019", "20-08-2019"]},
            {"id": 2, "dates": ["09-05-2019", "07-05-2019"]},
            {"id": 3, "dates": ["05-12-2019", "11-11-2019"]},
        ]
    }


@pytest.fixture
def relations_payload() -> dict[str, Any]:
    return {
        "index": [
            {
                "id": 1,
                "datesLocations": {
                    "north_carolina-usa": ["23-08-2019"],
                    "georgia-usa": ["22-08-2019"],
                    "los_angeles-usa": ["20-08-2019"],
                },
            },
            {
                "id": 2,
                "datesLocations": {
                    "london-uk": ["09-05-2019"],
                    "dusseldorf-germany": ["07-05-2019"],
                },
            },
            {
                "id": 3,
                "datesLocations": {
                    "playa_del_carmen-mexico": ["05-12-2019"],
                    "london-uk": ["11-11-2019"],
                },
            },
        ]
    }


# ---------------------------------------------------------------------------
# Decoded models
# ---------------------------------------------------------------------------


@pytest.fixture
def performers(performers_payload: list[dict[str, Any]]) -> list[Performer]:
    return [Performer.model_validate(item) for item in performers_payload]


@pytest.fixture
def venue_records(venues_payload: dict[str, Any]) -> list[VenueRecord]:
    return [VenueRecord.model_validate(item) for item in venues_payload["index"]]


@pytest.fixture
def date_records(dates_payload: dict[str, Any]) -> list[DateRecord]:
    return [DateRecord.model_validate(item) for item in dates_payload["index"]]


@pytest.fixture
def relation_records(relations_payload: dict[str, Any]) -> list[RelationRecord]:
    return [RelationRecord.model_validate(item) for item in relations_payload["index"]]


@pytest.fixture
async def store(
    performers: list[Performer],
    venue_records: list[VenueRecord],
    date_records: list[DateRecord],
    relation_records: list[RelationRecord],
) -> CatalogStore:
    """A by-id store holding the full three-performer catalog."""
    catalog_store = CatalogStore()
    await catalog_store.replace_performers(performers)
    await catalog_store.replace_venues(venue_records)
    await catalog_store.replace_dates(date_records)
    await catalog_store.replace_relations(relation_records)
    return catalog_store
