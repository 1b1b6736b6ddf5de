"""Unit tests for shared utilities: throttled_gather and logging setup."""

from __future__ import annotations

import asyncio

import pytest
from structlog.testing import capture_logs

from src.utils.concurrency import throttled_gather
from src.utils.logging import configure_logging, get_logger


class TestThrottledGather:
    @pytest.mark.asyncio
    async def test_results_in_input_order(self) -> None:
        async def _value(v: int, delay: float) -> int:
            await asyncio.sleep(delay)
            return v

        results = await throttled_gather([_value(1, 0.03), _value(2, 0.0), _value(3, 0.01)])
        assert results == [1, 2, 3]

    @pytest.mark.asyncio
    async def test_respects_semaphore(self) -> None:
        running = 0
        peak = 0

        async def _work() -> None:
            nonlocal running, peak
            running += 1
            peak = max(peak, running)
            await asyncio.sleep(0.01)
            running -= 1

        await throttled_gather([_work() for _ in range(6)], semaphore=asyncio.Semaphore(2))
        assert peak == 2

    @pytest.mark.asyncio
    async def test_raises_first_failure(self) -> None:
        async def _fail() -> None:
            raise RuntimeError("nope")

        async def _ok() -> int:
            return 1

        with pytest.raises(RuntimeError):
            await throttled_gather([_ok(), _fail()])

    @pytest.mark.asyncio
    async def test_failure_cancels_running_siblings(self) -> None:
        finished: list[str] = []
        cancelled: list[str] = []

        async def _slow() -> str:
            try:
                await asyncio.sleep(1)
            except asyncio.CancelledError:
                cancelled.append("slow")
                raise
            finished.append("slow")
            return "slow"

        async def _fail() -> None:
            await asyncio.sleep(0.01)
            raise RuntimeError("nope")

        with pytest.raises(RuntimeError, match="nope"):
            await throttled_gather([_slow(), _fail()])

        assert cancelled == ["slow"]
        assert finished == []

    @pytest.mark.asyncio
    async def test_return_exceptions(self) -> None:
        async def _fail() -> None:
            raise RuntimeError("nope")

        async def _ok() -> int:
            return 1

        results = await throttled_gather([_ok(), _fail()], return_exceptions=True)
        assert results[0] == 1
        assert isinstance(results[1], RuntimeError)

    @pytest.mark.asyncio
    async def test_empty(self) -> None:
        assert await throttled_gather([]) == []


class TestLogging:
    def test_configure_and_get_logger(self) -> None:
        configure_logging(log_level="DEBUG", json_output=True)
        logger = get_logger("lifelog.test")
        with capture_logs() as captured:
            logger.info("log_created", log_id="abc")
        assert captured[0]["event"] == "log_created"
        assert captured[0]["log_id"] == "abc"
