"""Bounded concurrent execution of per-key operations.

Every operation runs in its own task, at most max_concurrency at a time.
A failing operation never cancels its siblings; each outcome is recorded
in the returned BatchResult once the whole batch has settled.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass

from themesync.client.sync.types import BatchResult, OperationAction, OperationResult
from themesync.core.config import DEFAULT_MAX_CONCURRENCY

logger = logging.getLogger(__name__)


@dataclass
class Operation:
    """One unit of work in a batch.

    ``run`` returns False when there turned out to be nothing to do.
    """

    key: str
    action: OperationAction
    run: Callable[[], Awaitable[bool]]


async def run_batch(
    operations: Iterable[Operation],
    max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
) -> BatchResult:
    """Run operations concurrently and aggregate their outcomes.

    Args:
        operations: Operations to run; keys must not collide across actions.
        max_concurrency: Maximum operations in flight.

    Returns:
        BatchResult with one OperationResult per operation, in input order.
    """
    semaphore = asyncio.Semaphore(max_concurrency)

    async def guarded(op: Operation) -> OperationResult:
        async with semaphore:
            try:
                applied = await op.run()
            except Exception as e:
                logger.warning(f"{op.action.value} failed for {op.key}: {e}")
                return OperationResult(key=op.key, action=op.action, error=e)
        return OperationResult(key=op.key, action=op.action, skipped=not applied)

    results = await asyncio.gather(*(guarded(op) for op in operations))
    return BatchResult(results=list(results))
