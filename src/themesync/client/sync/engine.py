"""Theme editor sync session.

Runs the initial reconciliation between the local theme directory and the
remote theme, then hands over to the ChangePoller.

Flow:
    identify_files_to_reconcile ─► resolve_reconciliation_strategy
        ─► ReconciliationExecutor ─► fetch_checksums ─► ChangePoller
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from themesync.client.sync.classifier import identify_files_to_reconcile, without_ignored
from themesync.client.sync.executor import ReconciliationExecutor
from themesync.client.sync.poller import ChangePoller, ConflictCallback
from themesync.client.sync.resolver import resolve_reconciliation_strategy
from themesync.client.sync.types import BatchResult, SyncContext
from themesync.core.config import SyncConfig

if TYPE_CHECKING:
    from themesync.client.prompt import StrategyPrompt
    from themesync.client.uploader import ThemeUploader
    from themesync.core.types import Checksum

logger = logging.getLogger(__name__)


async def reconcile_theme_files(
    ctx: SyncContext,
    remote_checksums: Iterable[Checksum],
    prompt: StrategyPrompt,
    uploader: ThemeUploader,
    config: SyncConfig | None = None,
) -> BatchResult:
    """Bring local and remote in line once, asking the user how.

    Args:
        ctx: Theme, client, local store and output sink.
        remote_checksums: Remote state to reconcile against.
        prompt: Strategy prompt collaborator.
        uploader: Bulk upload collaborator.
        config: Concurrency settings.

    Returns:
        Aggregated outcome of the applied plan (empty if nothing differed).
    """
    config = config or SyncConfig()
    remote_checksums = without_ignored(remote_checksums, ctx.local_fs)

    partitions = identify_files_to_reconcile(remote_checksums, ctx.local_fs.files)
    if partitions.is_empty:
        logger.debug("Local and remote checksums match - no need to reconcile theme assets")
        return BatchResult()

    plan = await resolve_reconciliation_strategy(partitions, prompt)
    executor = ReconciliationExecutor(ctx, uploader, max_concurrency=config.max_concurrency)
    return await executor.execute(plan, remote_checksums)


async def initialize_theme_editor_sync(
    ctx: SyncContext,
    remote_checksums: Iterable[Checksum],
    prompt: StrategyPrompt,
    uploader: ThemeUploader,
    config: SyncConfig | None = None,
    on_conflict: ConflictCallback | None = None,
) -> ChangePoller:
    """Reconcile, then start polling the remote theme for changes.

    Args:
        ctx: Theme, client, local store and output sink.
        remote_checksums: Remote checksums fetched at session start.
        prompt: Strategy prompt collaborator.
        uploader: Bulk upload collaborator.
        config: Poll interval and concurrency settings.
        on_conflict: Conflict policy passed to the poller.

    Returns:
        The started ChangePoller; the caller owns its lifetime.
    """
    config = config or SyncConfig()

    logger.debug("Initiating theme asset reconciliation process")
    result = await reconcile_theme_files(ctx, remote_checksums, prompt, uploader, config)
    for failure in result.failed:
        logger.warning(f"Could not {failure.action.value} '{failure.key}': {failure.error}")

    updated_checksums = await ctx.client.fetch_checksums(ctx.theme.id)

    poller = ChangePoller(
        ctx,
        updated_checksums,
        poll_interval=config.poll_interval,
        max_concurrency=config.max_concurrency,
        on_conflict=on_conflict,
    )
    poller.start()
    return poller
