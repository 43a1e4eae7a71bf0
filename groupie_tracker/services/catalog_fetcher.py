"""Concurrent population of the catalog store from a remote source.

Four tasks run side by side, one per collection.  Each task writes its own
collection into the store as soon as it has decoded it, so a partial
failure still leaves the succeeded collections in place.  The caller waits
for all four (a barrier, not a race): a failing task never cancels its
siblings.

:meth:`CatalogFetcher.fetch_all` returns a :class:`FetchReport` with one
outcome per collection and, by default, raises the first FetchError in
collection order once every task has finished.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from typing import Any

import structlog

from groupie_tracker.interfaces.catalog_source import ICatalogSource
from groupie_tracker.models.catalog import CatalogSection
from groupie_tracker.services.catalog_store import CatalogStore
from groupie_tracker.utils.concurrency import gather_settled
from groupie_tracker.utils.errors import FetchError
from groupie_tracker.utils.logging import get_logger

_Fetch = Callable[[], Awaitable[Sequence[Any]]]
_Replace = Callable[[Sequence[Any]], Awaitable[None]]


@dataclass(frozen=True)
class FetchOutcome:
    """Result of fetching one collection."""

    section: CatalogSection
    count: int = 0
    error: FetchError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class FetchReport:
    """Per-collection outcomes of one :meth:`CatalogFetcher.fetch_all` run."""

    outcomes: tuple[FetchOutcome, ...]

    @property
    def ok(self) -> bool:
        return all(outcome.ok for outcome in self.outcomes)

    @property
    def errors(self) -> list[FetchError]:
        return [outcome.error for outcome in self.outcomes if outcome.error is not None]

    def first_error(self) -> FetchError | None:
        errors = self.errors
        return errors[0] if errors else None

    def raise_for_errors(self) -> None:
        error = self.first_error()
        if error is not None:
            raise error

    def counts(self) -> dict[str, int]:
        return {outcome.section.value: outcome.count for outcome in self.outcomes}


class CatalogFetcher:
    """Fan-out fetch of the four collections into a :class:`CatalogStore`."""

    def __init__(self, source: ICatalogSource, store: CatalogStore) -> None:
        self._source = source
        self._store = store
        self._logger: structlog.BoundLogger = get_logger(__name__)

    def _plan(self) -> list[tuple[CatalogSection, _Fetch, _Replace]]:
        return [
            (CatalogSection.PERFORMERS, self._source.fetch_performers, self._store.replace_performers),
            (CatalogSection.VENUES, self._source.fetch_venues, self._store.replace_venues),
            (CatalogSection.DATES, self._source.fetch_dates, self._store.replace_dates),
            (CatalogSection.RELATIONS, self._source.fetch_relations, self._store.replace_relations),
        ]

    async def _fetch_section(
        self,
        section: CatalogSection,
        fetch: _Fetch,
        replace: _Replace,
    ) -> int:
        records = await fetch()
        await replace(records)
        self._logger.debug("catalog_section_fetched", section=section.value, count=len(records))
        return len(records)

    async def fetch_all(self, raise_on_error: bool = True) -> FetchReport:
        """Fetch all four collections concurrently and wait for every one.

        Parameters
        ----------
        raise_on_error:
            When ``True`` (startup behaviour) the first FetchError, in the
            order performers, venues, dates, relations, is raised after all
            tasks have finished.  Collections that did succeed stay written.

        Returns
        -------
        FetchReport
            One outcome per collection.
        """
        plan = self._plan()
        results = await gather_settled(
            [self._fetch_section(section, fetch, replace) for section, fetch, replace in plan],
            labels=[section.value for section, _, _ in plan],
            logger=self._logger,
            error_msg="catalog_section_failed",
        )

        outcomes: list[FetchOutcome] = []
        for (section, _, _), result in zip(plan, results):
            if isinstance(result, FetchError):
                outcomes.append(FetchOutcome(section=section, error=result))
            elif isinstance(result, Exception):
                # Anything the source did not wrap is still reported per section.
                error = FetchError(section.value, result)
                error.__cause__ = result
                outcomes.append(FetchOutcome(section=section, error=error))
            elif isinstance(result, BaseException):
                raise result
            else:
                outcomes.append(FetchOutcome(section=section, count=result))

        report = FetchReport(outcomes=tuple(outcomes))
        self._logger.info(
            "catalog_fetch_complete",
            source=self._source.get_source_name(),
            ok=report.ok,
            counts=report.counts(),
            failed=[e.source for e in report.errors],
        )

        if raise_on_error:
            report.raise_for_errors()
        return report

    async def run_periodic(self, interval: float) -> None:
        """Re-fetch every *interval* seconds until cancelled.

        Failures are logged and the previous collections stay in place
        for any section that failed.
        """
        while True:
            await asyncio.sleep(interval)
            report = await self.fetch_all(raise_on_error=False)
            if not report.ok:
                self._logger.warning(
                    "catalog_refresh_partial",
                    failed=[str(e) for e in report.errors],
                )
