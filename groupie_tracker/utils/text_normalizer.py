"""Text normalization and matching rules for catalog search and filters.

Two concerns live here:

1. **Location normalization** -- the remote API spells venues as
   ``seattle-washington-usa`` or ``new_york-usa`` while users type
   ``Seattle Washington``.  :func:`normalize_location` folds case and the
   three separator styles (``_``, ``-``, space) so both sides compare
   uniformly.  This is the only rule used for venue names.

2. **Plain substring matching** -- names, members, years and release dates
   use case-insensitive containment of the lower-cased query.

:func:`extract_year` also lives here because every filter and search path
needs the first-release year parsed the same way.
"""

import re

_SEPARATORS = re.compile(r"[_-]")
_YEAR = re.compile(r"[+-]?[0-9]+")


def normalize_location(location: str) -> str:
    """Lower-case, turn ``_`` and ``-`` into spaces, strip the ends.

    >>> normalize_location("New_York_City")
    'new york city'
    """
    return _SEPARATORS.sub(" ", location.lower()).strip()


def location_contains(location: str, query: str) -> bool:
    """Return True if the normalized *query* is inside the normalized *location*."""
    return normalize_location(query) in normalize_location(location)


def search_in_locations(locations: list[str], query: str) -> bool:
    """Return True if any of *locations* contains *query*."""
    return any(location_contains(location, query) for location in locations)


def normalize_query(query: str | None) -> str:
    """Strip and lower-case a free-text query.  ``None`` becomes ``""``."""
    if not query:
        return ""
    return query.strip().lower()


def contains_ci(candidate: str, query: str) -> bool:
    """Case-insensitive containment.

    *query* is expected to be lower-cased already (see
    :func:`normalize_query`); only *candidate* is folded here.
    """
    return query in candidate.lower()


def extract_year(date_str: str) -> int:
    """Extract the year from a ``DD-MM-YYYY`` string.

    The string must split on ``-`` into exactly three parts.  Anything else,
    including a non-numeric third part, yields ``0``.

    >>> extract_year("14-12-2000")
    2000
    >>> extract_year("invalid")
    0
    """
    if not isinstance(date_str, str):
        return 0

    parts = date_str.split("-")
    if len(parts) != 3:
        return 0

    # int() alone would also accept " 2000" and "2_000".
    if not _YEAR.fullmatch(parts[2]):
        return 0
    return int(parts[2])
