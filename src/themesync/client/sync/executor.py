"""Application of a reconciliation plan.

This module provides:
- ReconciliationExecutor: Runs the local deletes, downloads, remote deletes
  and the bulk upload of a ReconciliationPlan concurrently, and reports
  the aggregated per-key outcome
- Operation builders shared with the change poller
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from themesync.client.sync.batch import Operation, run_batch
from themesync.client.sync.types import (
    BatchResult,
    OperationAction,
    ReconciliationPlan,
    SyncContext,
)
from themesync.core.config import DEFAULT_MAX_CONCURRENCY

if TYPE_CHECKING:
    from themesync.client.uploader import ThemeUploader
    from themesync.core.types import Checksum

logger = logging.getLogger(__name__)


def download_operation(ctx: SyncContext, key: str, notify: bool = False) -> Operation:
    """Fetch a remote asset and write it locally.

    An asset that vanished remotely is skipped without error.
    """

    async def run() -> bool:
        asset = await ctx.client.fetch_theme_asset(ctx.theme.id, key)
        if asset is None:
            logger.debug(f"Skipping download of {key}: no longer on remote theme")
            return False
        await ctx.local_fs.write(asset)
        if notify:
            ctx.output(f"Synced: get '{asset.key}' from remote theme")
        return True

    return Operation(key=key, action=OperationAction.DOWNLOAD, run=run)


def delete_local_operation(ctx: SyncContext, key: str, notify: bool = False) -> Operation:
    """Delete an asset from the local store (idempotent)."""

    async def run() -> bool:
        await ctx.local_fs.delete(key)
        if notify:
            ctx.output(f"Synced: remove '{key}' from local theme")
        return True

    return Operation(key=key, action=OperationAction.DELETE_LOCAL, run=run)


def delete_remote_operation(ctx: SyncContext, key: str) -> Operation:
    """Delete an asset from the remote theme; already absent is fine."""

    async def run() -> bool:
        return await ctx.client.delete_theme_asset(ctx.theme.id, key)

    return Operation(key=key, action=OperationAction.DELETE_REMOTE, run=run)


class ReconciliationExecutor:
    """Applies a ReconciliationPlan.

    Usage:
        executor = ReconciliationExecutor(ctx, uploader)
        result = await executor.execute(plan, remote_checksums)
        if not result.ok:
            ...
    """

    def __init__(
        self,
        ctx: SyncContext,
        uploader: ThemeUploader,
        max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
    ) -> None:
        """Initialize the executor.

        Args:
            ctx: Theme, client and local store.
            uploader: Bulk upload collaborator for keep-local files.
            max_concurrency: Maximum operations in flight.
        """
        self._ctx = ctx
        self._uploader = uploader
        self._max_concurrency = max_concurrency

    async def _upload(self, keys: list[str], remote_checksums: list[Checksum]) -> BatchResult:
        if not keys:
            return BatchResult()
        # Deletions are handled by the other categories of the plan
        return await self._uploader.upload_theme(
            self._ctx.theme,
            remote_checksums,
            self._ctx.local_fs,
            no_delete=True,
            keys=keys,
        )

    async def execute(
        self,
        plan: ReconciliationPlan,
        remote_checksums: Iterable[Checksum] = (),
    ) -> BatchResult:
        """Apply every action of the plan concurrently.

        Args:
            plan: Disjoint key sets to act on.
            remote_checksums: Remote state the plan was computed from, used
                by the uploader to skip unchanged files.

        Returns:
            BatchResult covering all four categories.
        """
        ctx = self._ctx
        operations: list[Operation] = []
        operations.extend(delete_local_operation(ctx, key) for key in plan.local_files_to_delete)
        operations.extend(download_operation(ctx, key) for key in plan.files_to_download)
        operations.extend(delete_remote_operation(ctx, key) for key in plan.remote_files_to_delete)

        batch, uploads = await asyncio.gather(
            run_batch(operations, self._max_concurrency),
            self._upload(plan.files_to_upload, list(remote_checksums)),
        )
        batch.extend(uploads)

        if batch.failed:
            logger.warning(f"Reconciliation finished with {len(batch.failed)} failure(s)")
        else:
            logger.debug(f"Reconciliation applied {len(batch.results)} operation(s)")
        return batch
