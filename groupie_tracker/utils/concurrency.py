"""Shared concurrency primitives for the catalog store and fetcher.

Two helpers are exposed:

1. **ReadWriteLock** -- an asyncio readers/writer lock.  Any number of
   queries may hold the shared side at once; a collection replacement holds
   the exclusive side and waits for in-flight readers to drain.  Waiting
   writers block new readers so a refresh cannot starve.

2. **gather_settled** -- ``asyncio.gather`` with ``return_exceptions=True``
   and a per-task log line for every failure.  One failing task never
   cancels its siblings.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator, Awaitable
from contextlib import asynccontextmanager
from typing import TypeVar

import structlog

from groupie_tracker.utils.logging import get_logger

_T = TypeVar("_T")

_logger: structlog.BoundLogger = get_logger(__name__)


class ReadWriteLock:
    """Shared/exclusive lock for coroutines on a single event loop."""

    def __init__(self) -> None:
        self._cond = asyncio.Condition()
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @property
    def readers(self) -> int:
        return self._readers

    @property
    def write_locked(self) -> bool:
        return self._writer

    @asynccontextmanager
    async def read(self) -> AsyncIterator[None]:
        """Hold the shared side for the body of the ``async with`` block."""
        async with self._cond:
            await self._cond.wait_for(
                lambda: not self._writer and self._writers_waiting == 0
            )
            self._readers += 1
        try:
            yield
        finally:
            async with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @asynccontextmanager
    async def write(self) -> AsyncIterator[None]:
        """Hold the exclusive side for the body of the ``async with`` block."""
        async with self._cond:
            self._writers_waiting += 1
            try:
                await self._cond.wait_for(lambda: not self._writer and self._readers == 0)
            except BaseException:
                # Cancelled while queued: readers blocked on us may proceed.
                self._writers_waiting -= 1
                self._cond.notify_all()
                raise
            self._writers_waiting -= 1
            self._writer = True
        try:
            yield
        finally:
            async with self._cond:
                self._writer = False
                self._cond.notify_all()


async def gather_settled(
    coros: list[Awaitable[_T]],
    labels: list[str] | None = None,
    logger: structlog.BoundLogger | None = None,
    error_msg: str = "task_failed",
) -> list[_T | BaseException]:
    """Run awaitables concurrently and wait for every one of them.

    Parameters
    ----------
    coros:
        Awaitables to run concurrently.
    labels:
        Optional name per awaitable, used in the failure log line.
    logger:
        Structured logger for failures.  Defaults to this module's logger.
    error_msg:
        Event name logged for each failure.

    Returns
    -------
    list[_T | BaseException]
        Results or exceptions, in the same order as ``coros``.
    """
    if logger is None:
        logger = _logger

    results = await asyncio.gather(*coros, return_exceptions=True)

    for idx, result in enumerate(results):
        if isinstance(result, BaseException):
            label = labels[idx] if labels else str(idx)
            logger.warning(error_msg, task=label, error=str(result))

    return results
