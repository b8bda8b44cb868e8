"""Unit tests for bounded retry execution."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from docdb.listing.core import (
    ConsistencySelectorError,
    ExhaustedRetriesError,
    RetryPolicy,
    TransportError,
)
from docdb.listing.runtime import RetryExecutor, RetryState


def flaky(failures: int, *, retryable: bool = True, result="page"):
    """Operation failing ``failures`` times before returning ``result``."""
    errors = [TransportError(f"fail {i}", retryable=retryable) for i in range(failures)]
    return AsyncMock(side_effect=[*errors, result])


class TestRetryExecutor:
    """Test RetryExecutor bounds and propagation."""

    @pytest.mark.asyncio
    async def test_success_first_attempt(self):
        observer = MagicMock()
        executor = RetryExecutor(RetryPolicy(max_retries=3), observer)
        operation = flaky(0)

        result = await executor.run(operation, collection_name="users", result_size=len)

        assert result == "page"
        assert operation.await_count == 1
        observer.on_retry.assert_not_called()
        observer.on_fetch_complete.assert_called_once()
        kwargs = observer.on_fetch_complete.call_args.kwargs
        assert kwargs["collection_name"] == "users"
        assert kwargs["result_size"] == 4
        assert kwargs["response_time_ms"] >= 0

    @pytest.mark.asyncio
    @pytest.mark.parametrize("failures", [1, 2, 3])
    async def test_recovers_within_bound(self, failures):
        """Test k < max_retries retryable failures succeed after k+1 attempts."""
        executor = RetryExecutor(RetryPolicy(max_retries=3), MagicMock())
        operation = flaky(failures)

        assert await executor.run(operation) == "page"
        assert operation.await_count == failures + 1

    @pytest.mark.asyncio
    async def test_exhausts_after_max_retries_plus_one(self):
        """Test persistent retryable failures stop after max_retries+1 attempts."""
        executor = RetryExecutor(RetryPolicy(max_retries=2), MagicMock())
        operation = flaky(10)

        with pytest.raises(ExhaustedRetriesError) as exc_info:
            await executor.run(operation)

        assert operation.await_count == 3
        assert exc_info.value.attempts == 3
        assert str(exc_info.value.last_error) == "fail 2"
        assert exc_info.value.__cause__ is exc_info.value.last_error

    @pytest.mark.asyncio
    async def test_zero_retries(self):
        executor = RetryExecutor(RetryPolicy(max_retries=0), MagicMock())
        operation = flaky(1)

        with pytest.raises(ExhaustedRetriesError):
            await executor.run(operation)
        assert operation.await_count == 1

    @pytest.mark.asyncio
    async def test_non_retryable_fails_after_one_attempt(self):
        executor = RetryExecutor(RetryPolicy(max_retries=3), MagicMock())
        operation = flaky(1, retryable=False)

        with pytest.raises(TransportError) as exc_info:
            await executor.run(operation)

        assert not isinstance(exc_info.value, ExhaustedRetriesError)
        assert operation.await_count == 1

    @pytest.mark.asyncio
    async def test_other_errors_propagate_immediately(self):
        executor = RetryExecutor(RetryPolicy(max_retries=3), MagicMock())
        operation = AsyncMock(side_effect=ConsistencySelectorError("bad"))

        with pytest.raises(ConsistencySelectorError):
            await executor.run(operation)
        assert operation.await_count == 1

    @pytest.mark.asyncio
    async def test_retry_hook_reports_attempts(self):
        observer = MagicMock()
        executor = RetryExecutor(RetryPolicy(max_retries=3), observer)

        await executor.run(flaky(2), collection_name="users")

        attempts = [c.kwargs["attempt"] for c in observer.on_retry.call_args_list]
        assert attempts == [1, 2]
        assert all(c.kwargs["max_retries"] == 3 for c in observer.on_retry.call_args_list)
        assert all(c.kwargs["collection_name"] == "users" for c in observer.on_retry.call_args_list)

    @pytest.mark.asyncio
    async def test_no_sleep_by_default(self):
        executor = RetryExecutor(RetryPolicy(max_retries=3), MagicMock())
        with patch("docdb.listing.runtime.retry.asyncio.sleep", new=AsyncMock()) as sleep:
            await executor.run(flaky(2))
        sleep.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_configured_delay_between_attempts(self):
        policy = RetryPolicy(max_retries=3, retry_delay=0.5, backoff_multiplier=2.0)
        executor = RetryExecutor(policy, MagicMock())
        with patch("docdb.listing.runtime.retry.asyncio.sleep", new=AsyncMock()) as sleep:
            await executor.run(flaky(3))
        assert [c.args[0] for c in sleep.await_args_list] == [0.5, 1.0, 2.0]

    @pytest.mark.asyncio
    async def test_response_time_covers_all_attempts(self):
        """Test reported fetch time spans retries, not just the final attempt."""
        observer = MagicMock()
        executor = RetryExecutor(RetryPolicy(max_retries=3), observer)
        clock = MagicMock(side_effect=[10.0, 12.5])
        with patch("docdb.listing.runtime.retry.perf_counter", new=clock):
            await executor.run(flaky(2))

        assert clock.call_count == 2
        kwargs = observer.on_fetch_complete.call_args.kwargs
        assert kwargs["response_time_ms"] == pytest.approx(2500.0)


class TestRetryState:
    def test_can_retry(self):
        state = RetryState(max_retries=2)
        assert state.can_retry
        state.attempt = 2
        assert not state.can_retry
