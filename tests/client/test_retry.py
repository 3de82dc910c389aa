"""Tests for retry_with_backoff."""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

import pytest

from themesync.client.api import ThrottledError
from themesync.client.retry import retry_with_backoff


class TestRetryWithBackoff:
    """Tests for retry_with_backoff function."""

    @pytest.mark.asyncio
    async def test_succeeds_on_first_try(self) -> None:
        """Should return result when function succeeds first try."""
        counter = {"calls": 0}

        async def succeed() -> str:
            counter["calls"] += 1
            return "success"

        result = await retry_with_backoff(succeed, max_retries=3)

        assert result == "success"
        assert counter["calls"] == 1

    @pytest.mark.asyncio
    async def test_retries_on_failure(self) -> None:
        """Should retry on failure and eventually succeed."""
        counter = {"calls": 0}

        async def fail_twice() -> str:
            counter["calls"] += 1
            if counter["calls"] < 3:
                raise ConnectionError("Network error")
            return "success"

        with patch("themesync.client.retry.asyncio.sleep", new=AsyncMock()) as sleep:
            result = await retry_with_backoff(
                fail_twice,
                max_retries=5,
                retryable_exceptions=(ConnectionError,),
            )

        assert result == "success"
        assert counter["calls"] == 3
        assert [c.args[0] for c in sleep.await_args_list] == [1.0, 2.0]

    @pytest.mark.asyncio
    async def test_raises_after_max_retries(self) -> None:
        """Should raise after exhausting retries."""
        counter = {"calls": 0}

        async def always_fail() -> str:
            counter["calls"] += 1
            raise ConnectionError("Network error")

        with patch("themesync.client.retry.asyncio.sleep", new=AsyncMock()):
            with pytest.raises(ConnectionError):
                await retry_with_backoff(always_fail, max_retries=2)

        assert counter["calls"] == 3

    @pytest.mark.asyncio
    async def test_does_not_retry_other_exceptions(self) -> None:
        """Should propagate exceptions outside retryable_exceptions at once."""
        counter = {"calls": 0}

        async def bad_value() -> str:
            counter["calls"] += 1
            raise ValueError("bad")

        with pytest.raises(ValueError):
            await retry_with_backoff(bad_value, retryable_exceptions=(ConnectionError,))

        assert counter["calls"] == 1

    @pytest.mark.asyncio
    async def test_honors_retry_after(self) -> None:
        """Should wait the server-provided delay instead of the backoff."""
        counter = {"calls": 0}

        async def throttled_once() -> str:
            counter["calls"] += 1
            if counter["calls"] == 1:
                raise ThrottledError("Rate limited", retry_after=4.0)
            return "ok"

        with patch("themesync.client.retry.asyncio.sleep", new=AsyncMock()) as sleep:
            await retry_with_backoff(throttled_once, initial_backoff=1.0)

        sleep.assert_awaited_once_with(4.0)

    @pytest.mark.asyncio
    async def test_delay_capped_at_max_backoff(self) -> None:
        """Should never sleep longer than max_backoff."""
        counter = {"calls": 0}

        async def throttled_once() -> str:
            counter["calls"] += 1
            if counter["calls"] == 1:
                raise ThrottledError("Rate limited", retry_after=600.0)
            return "ok"

        with patch("themesync.client.retry.asyncio.sleep", new=AsyncMock()) as sleep:
            await retry_with_backoff(throttled_once, max_backoff=10.0)

        sleep.assert_awaited_once_with(10.0)
