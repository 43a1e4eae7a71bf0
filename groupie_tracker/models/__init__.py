"""Groupie tracker domain models -- re-exports all public model classes.

    - catalog.py   -- base collections decoded from the remote API
    - aggregate.py -- joined records, filter criteria, suggestions, ranges
"""

from __future__ import annotations

from groupie_tracker.models.aggregate import (
    AggregateRecord,
    FilterCriteria,
    MemberCountRange,
    SearchSuggestion,
    SuggestionCategory,
    YearRange,
)
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

__all__ = [
    "AggregateRecord",
    "CatalogSection",
    "DateIndex",
    "DateRecord",
    "FilterCriteria",
    "MemberCountRange",
    "Performer",
    "RelationIndex",
    "RelationRecord",
    "SearchSuggestion",
    "SuggestionCategory",
    "VenueIndex",
    "VenueRecord",
    "YearRange",
]
