"""Unit tests for the readers/writer lock and settled fan-out."""

from __future__ import annotations

import asyncio
from unittest.mock import MagicMock

import pytest

from groupie_tracker.utils.concurrency import ReadWriteLock, gather_settled


# ======================================================================
# ReadWriteLock
# ======================================================================


class TestReadWriteLock:
    """Tests for shared/exclusive locking."""

    @pytest.mark.asyncio
    async def test_readers_share(self) -> None:
        lock = ReadWriteLock()
        async with lock.read():
            async with lock.read():
                assert lock.readers == 2
        assert lock.readers == 0

    @pytest.mark.asyncio
    async def test_writer_waits_for_readers(self) -> None:
        lock = ReadWriteLock()
        order: list[str] = []
        release_reader = asyncio.Event()

        async def reader() -> None:
            async with lock.read():
                order.append("read_start")
                await release_reader.wait()
                order.append("read_end")

        async def writer() -> None:
            async with lock.write():
                order.append("write")

        reader_task = asyncio.create_task(reader())
        await asyncio.sleep(0)
        writer_task = asyncio.create_task(writer())
        await asyncio.sleep(0)

        assert order == ["read_start"]
        assert not lock.write_locked

        release_reader.set()
        await asyncio.gather(reader_task, writer_task)
        assert order == ["read_start", "read_end", "write"]

    @pytest.mark.asyncio
    async def test_waiting_writer_blocks_new_readers(self) -> None:
        lock = ReadWriteLock()
        order: list[str] = []
        release_first = asyncio.Event()

        async def first_reader() -> None:
            async with lock.read():
                await release_first.wait()
                order.append("first_read")

        async def writer() -> None:
            async with lock.write():
                order.append("write")

        async def late_reader() -> None:
            async with lock.read():
                order.append("late_read")

        tasks = [asyncio.create_task(first_reader())]
        await asyncio.sleep(0)
        tasks.append(asyncio.create_task(writer()))
        await asyncio.sleep(0)
        tasks.append(asyncio.create_task(late_reader()))
        await asyncio.sleep(0)

        release_first.set()
        await asyncio.gather(*tasks)
        assert order == ["first_read", "write", "late_read"]

    @pytest.mark.asyncio
    async def test_cancelled_writer_unblocks_readers(self) -> None:
        lock = ReadWriteLock()
        release_first = asyncio.Event()

        async def first_reader() -> None:
            async with lock.read():
                await release_first.wait()

        async def writer() -> None:
            async with lock.write():
                pass

        reader_task = asyncio.create_task(first_reader())
        await asyncio.sleep(0)
        writer_task = asyncio.create_task(writer())
        await asyncio.sleep(0)

        writer_task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await writer_task

        async with lock.read():
            assert lock.readers == 2

        release_first.set()
        await reader_task
        assert lock.readers == 0

    @pytest.mark.asyncio
    async def test_write_lock_released_on_error(self) -> None:
        lock = ReadWriteLock()
        with pytest.raises(RuntimeError):
            async with lock.write():
                assert lock.write_locked
                raise RuntimeError("boom")
        assert not lock.write_locked


# ======================================================================
# gather_settled
# ======================================================================


class TestGatherSettled:
    """Tests for gather_settled."""

    @pytest.mark.asyncio
    async def test_returns_results_in_order(self) -> None:
        async def value(n: int) -> int:
            await asyncio.sleep(0)
            return n

        assert await gather_settled([value(1), value(2), value(3)]) == [1, 2, 3]

    @pytest.mark.asyncio
    async def test_failure_does_not_cancel_siblings(self) -> None:
        finished: list[str] = []

        async def ok() -> str:
            await asyncio.sleep(0.01)
            finished.append("ok")
            return "ok"

        async def fail() -> str:
            raise ValueError("bad")

        results = await gather_settled([fail(), ok()])
        assert isinstance(results[0], ValueError)
        assert results[1] == "ok"
        assert finished == ["ok"]

    @pytest.mark.asyncio
    async def test_logs_each_failure_with_label(self) -> None:
        logger = MagicMock()

        async def fail() -> None:
            raise ValueError("bad")

        async def ok() -> None:
            return None

        await gather_settled([ok(), fail()], labels=["a", "b"], logger=logger, error_msg="step_failed")
        logger.warning.assert_called_once_with("step_failed", task="b", error="bad")
