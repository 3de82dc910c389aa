"""Tests for bounded batch execution."""

from __future__ import annotations

import asyncio

import pytest

from themesync.client.sync.batch import Operation, run_batch
from themesync.client.sync.types import BatchError, OperationAction


def operation(key: str, result: bool = True, error: Exception | None = None) -> Operation:
    async def run() -> bool:
        await asyncio.sleep(0)
        if error is not None:
            raise error
        return result

    return Operation(key=key, action=OperationAction.DOWNLOAD, run=run)


class TestRunBatch:
    """Tests for run_batch."""

    @pytest.mark.asyncio
    async def test_empty_batch(self) -> None:
        """No operations, empty successful result."""
        result = await run_batch([])

        assert result.results == []
        assert result.ok

    @pytest.mark.asyncio
    async def test_results_in_input_order(self) -> None:
        """One result per operation, in the order given."""
        result = await run_batch([operation("a"), operation("b"), operation("c")])

        assert [r.key for r in result.results] == ["a", "b", "c"]
        assert result.ok

    @pytest.mark.asyncio
    async def test_failure_does_not_abort_siblings(self) -> None:
        """A raising operation is recorded; the others still complete."""
        completed: list[str] = []

        def tracked(key: str) -> Operation:
            async def run() -> bool:
                await asyncio.sleep(0.01)
                completed.append(key)
                return True

            return Operation(key=key, action=OperationAction.DELETE_LOCAL, run=run)

        result = await run_batch(
            [tracked("a"), operation("boom", error=OSError("disk full")), tracked("b")]
        )

        assert sorted(completed) == ["a", "b"]
        assert [r.key for r in result.failed] == ["boom"]
        assert isinstance(result.failed[0].error, OSError)
        assert not result.ok

    @pytest.mark.asyncio
    async def test_raise_for_errors_aggregates(self) -> None:
        """BatchError carries every failure."""
        result = await run_batch(
            [operation("a", error=OSError("x")), operation("b"), operation("c", error=OSError("y"))]
        )

        with pytest.raises(BatchError) as exc_info:
            result.raise_for_errors()

        assert [f.key for f in exc_info.value.failures] == ["a", "c"]

    @pytest.mark.asyncio
    async def test_skipped_operations_succeed(self) -> None:
        """Returning False marks the operation skipped, not failed."""
        result = await run_batch([operation("gone", result=False)])

        assert result.ok
        assert result.results[0].skipped

    @pytest.mark.asyncio
    async def test_concurrency_is_bounded(self) -> None:
        """Never more than max_concurrency operations in flight."""
        in_flight = 0
        peak = 0

        def tracked(key: str) -> Operation:
            async def run() -> bool:
                nonlocal in_flight, peak
                in_flight += 1
                peak = max(peak, in_flight)
                await asyncio.sleep(0.01)
                in_flight -= 1
                return True

            return Operation(key=key, action=OperationAction.UPLOAD, run=run)

        await run_batch([tracked(str(i)) for i in range(10)], max_concurrency=3)

        assert peak == 3
