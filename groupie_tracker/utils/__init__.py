"""Utility modules for the groupie tracker catalog.

- **errors** -- exception hierarchy rooted at GroupieTrackerError.
- **concurrency** -- asyncio readers/writer lock and settled fan-out.
- **logging** -- structlog setup with console/JSON renderers.
- **text_normalizer** -- location normalization, substring matching and
  ``DD-MM-YYYY`` year extraction.
"""

from groupie_tracker.utils.concurrency import ReadWriteLock, gather_settled
from groupie_tracker.utils.errors import (
    ConfigurationError,
    FetchError,
    GroupieTrackerError,
    NotFoundError,
)
from groupie_tracker.utils.logging import configure_logging, get_logger
from groupie_tracker.utils.text_normalizer import (
    contains_ci,
    extract_year,
    location_contains,
    normalize_location,
    normalize_query,
    search_in_locations,
)

__all__ = [
    "ConfigurationError",
    "FetchError",
    "GroupieTrackerError",
    "NotFoundError",
    "ReadWriteLock",
    "configure_logging",
    "contains_ci",
    "extract_year",
    "gather_settled",
    "get_logger",
    "location_contains",
    "normalize_location",
    "normalize_query",
    "search_in_locations",
]
