"""Exception hierarchy for the groupie tracker catalog.

All application exceptions inherit from :class:`GroupieTrackerError`, which
carries an optional ``source_name`` naming the remote collection or
component that failed.

    GroupieTrackerError  (base)
    +-- FetchError          (network / status / decode failure on one source)
    +-- NotFoundError       (performer id absent from the catalog)
    +-- ConfigurationError  (invalid settings at startup)

Filter and search operations never raise; malformed input simply yields
empty results.
"""

from __future__ import annotations


class GroupieTrackerError(Exception):
    """Base exception for all groupie tracker errors.

    ``__str__`` prefixes the source name in brackets, e.g.
    ``[venues] status code: 503``.
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        source_name: str | None = None,
    ) -> None:
        self._message = message
        self._source_name = source_name
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def source_name(self) -> str | None:
        return self._source_name

    def __str__(self) -> str:
        if self._source_name:
            return f"[{self._source_name}] {self._message}"
        return self._message


class FetchError(GroupieTrackerError):
    """Raised when one remote collection cannot be fetched or decoded.

    ``source`` is the collection name (``performers``, ``venues``, ``dates``
    or ``relations``); ``cause`` is the underlying exception, also chained
    as ``__cause__`` by the raising code.
    """

    def __init__(
        self,
        source: str,
        cause: BaseException | str | None = None,
        message: str | None = None,
    ) -> None:
        self._source = source
        self._cause = cause
        if message is None:
            message = f"fetch failed: {cause}" if cause is not None else "fetch failed"
        super().__init__(message=message, source_name=source)

    @property
    def source(self) -> str:
        return self._source

    @property
    def cause(self) -> BaseException | str | None:
        return self._cause


class NotFoundError(GroupieTrackerError):
    """Raised when a performer id is not present in the catalog."""

    def __init__(self, performer_id: int, message: str | None = None) -> None:
        self._performer_id = performer_id
        super().__init__(
            message=message or f"performer {performer_id} not found",
            source_name="catalog",
        )

    @property
    def performer_id(self) -> int:
        return self._performer_id


class ConfigurationError(GroupieTrackerError):
    """Raised when configuration is invalid or missing at startup."""

    def __init__(
        self,
        message: str = "Invalid or missing configuration",
        source_name: str | None = None,
    ) -> None:
        super().__init__(message=message, source_name=source_name)
