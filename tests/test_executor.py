"""Rate-limited executor tests."""

import asyncio
from unittest.mock import AsyncMock

import pytest

from nmcp_tools.adapters.notion.exceptions import (
    NotionAdapterError,
    NotionRateLimitError,
    NotionResourceNotFoundError,
)
from nmcp_tools.executor import RateLimitedExecutor


@pytest.fixture
def executor(recording_sleep):
    return RateLimitedExecutor(default_retry_after=5.0, sleep=recording_sleep)


@pytest.mark.asyncio
async def test_success_runs_once_without_waiting(executor, recording_sleep):
    operation = AsyncMock(return_value={"ok": True})

    result = await executor.run(operation)

    assert result == {"ok": True}
    assert operation.await_count == 1
    assert recording_sleep.calls == []


@pytest.mark.asyncio
async def test_rate_limited_then_success_waits_advised_duration(executor, recording_sleep):
    attempt_times = []

    async def operation():
        attempt_times.append(recording_sleep.now)
        if len(attempt_times) == 1:
            raise NotionRateLimitError("Rate limit exceeded", retry_after=2)
        return "done"

    result = await executor.run(operation)

    assert result == "done"
    assert recording_sleep.calls == [2]
    assert attempt_times[1] - attempt_times[0] >= 2


@pytest.mark.asyncio
async def test_missing_advised_wait_uses_default(executor, recording_sleep):
    operation = AsyncMock(side_effect=[NotionRateLimitError("Rate limit exceeded"), "done"])

    assert await executor.run(operation) == "done"
    assert recording_sleep.calls == [5.0]


@pytest.mark.asyncio
async def test_second_rate_limit_surfaces_unmodified(executor, recording_sleep):
    first = NotionRateLimitError("first", retry_after=1)
    second = NotionRateLimitError("second", retry_after=1)
    operation = AsyncMock(side_effect=[first, second, "never"])

    with pytest.raises(NotionRateLimitError) as exc_info:
        await executor.run(operation)

    assert exc_info.value is second
    assert operation.await_count == 2
    assert recording_sleep.calls == [1]


@pytest.mark.asyncio
async def test_other_failure_after_retry_surfaces_unmodified(executor):
    missing = NotionResourceNotFoundError("Resource not found")
    operation = AsyncMock(side_effect=[NotionRateLimitError("slow down", retry_after=0), missing])

    with pytest.raises(NotionResourceNotFoundError) as exc_info:
        await executor.run(operation)

    assert exc_info.value is missing
    assert operation.await_count == 2


@pytest.mark.asyncio
async def test_non_rate_limit_failure_is_immediate(executor, recording_sleep):
    error = NotionAdapterError("Notion API error (500): boom")
    operation = AsyncMock(side_effect=error)

    with pytest.raises(NotionAdapterError) as exc_info:
        await executor.run(operation)

    assert exc_info.value is error
    assert operation.await_count == 1
    assert recording_sleep.calls == []


@pytest.mark.asyncio
async def test_real_sleep_suspends_for_advised_wait():
    executor = RateLimitedExecutor()
    loop = asyncio.get_running_loop()
    attempt_times = []

    async def operation():
        attempt_times.append(loop.time())
        if len(attempt_times) == 1:
            raise NotionRateLimitError("Rate limit exceeded", retry_after=0.05)
        return "done"

    assert await executor.run(operation) == "done"
    assert attempt_times[1] - attempt_times[0] >= 0.04


@pytest.mark.asyncio
async def test_waiting_call_does_not_block_other_calls():
    executor = RateLimitedExecutor()
    order = []
    calls = {"slow": 0}

    async def slow():
        calls["slow"] += 1
        if calls["slow"] == 1:
            raise NotionRateLimitError("Rate limit exceeded", retry_after=0.05)
        order.append("slow")
        return "slow"

    async def fast():
        order.append("fast")
        return "fast"

    results = await asyncio.gather(executor.run(slow), executor.run(fast))

    assert results == ["slow", "fast"]
    assert order == ["fast", "slow"]
