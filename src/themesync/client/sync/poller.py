"""Remote change poller.

This module provides:
- RemoteChanges: Keys changed or deleted on the remote since the baseline
- compute_remote_changes: Checksum diff between baseline and latest
- ChangePoller: The long-running poll loop

Architecture:
    fetch checksums ─► diff vs baseline ─► ConflictGuard ─► apply batch
          ▲                                                      │
          └──────────── sleep(poll_interval) ◄── advance baseline┘

The baseline only advances when a cycle applied every change. A failed or
aborted cycle leaves it untouched, so the same changes are picked up again
on the next tick.

A key that aborted a cycle on conflict stays flagged. Later cycles abort on
it again until the local file matches the remote or the last synced
version, or the remote change goes away. Re-reading the file alone never
clears the flag.

Keys matching the local ignore patterns are dropped from every remote
snapshot before diffing.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field

from themesync.client.sync.batch import run_batch
from themesync.client.sync.classifier import without_ignored
from themesync.client.sync.conflict import abort_if_multiple_sources_change
from themesync.client.sync.executor import delete_local_operation, download_operation
from themesync.client.sync.types import ConflictError, SyncContext
from themesync.core.config import DEFAULT_MAX_CONCURRENCY, DEFAULT_POLL_INTERVAL
from themesync.core.types import Checksum, PollerState

logger = logging.getLogger(__name__)

ConflictCallback = Callable[[ConflictError], None]


def stop_on_conflict(error: ConflictError) -> None:
    """Conflict policy that ends the poll loop.

    The error is re-raised out of the loop task and surfaces from
    ChangePoller.wait().
    """
    raise error


@dataclass
class RemoteChanges:
    """Result of diffing the latest remote checksums against the baseline."""

    changed: list[str] = field(default_factory=list)
    deleted: list[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        """True when the remote did not change."""
        return not (self.changed or self.deleted)


def compute_remote_changes(
    baseline: Mapping[str, Checksum],
    latest: Iterable[Checksum],
) -> RemoteChanges:
    """Diff the latest remote checksums against the baseline.

    Args:
        baseline: Last known remote checksums keyed by asset key.
        latest: Freshly fetched remote checksums.

    Returns:
        RemoteChanges with changed keys (new or different checksum) in
        latest order and deleted keys in baseline order.
    """
    changes = RemoteChanges()
    latest_keys: set[str] = set()

    for checksum in latest:
        latest_keys.add(checksum.key)
        previous = baseline.get(checksum.key)
        if previous is None or previous.checksum != checksum.checksum:
            changes.changed.append(checksum.key)

    changes.deleted = [key for key in baseline if key not in latest_keys]
    return changes


class ChangePoller:
    """Polls the remote theme and applies its changes locally.

    Ticks are strictly sequential: the next fetch starts only after the
    previous cycle has settled.

    Usage:
        poller = ChangePoller(ctx, baseline, on_conflict=handle_conflict)
        poller.start()
        ...
        await poller.stop()

    A conflict aborts the cycle and is passed to on_conflict; the loop
    keeps running unless the callback raises, in which case the exception
    ends the loop and surfaces from wait().
    """

    def __init__(
        self,
        ctx: SyncContext,
        baseline: Iterable[Checksum],
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
        on_conflict: ConflictCallback | None = None,
    ) -> None:
        """Initialize the poller.

        Args:
            ctx: Theme, client, local store and output sink.
            baseline: Remote checksums the local store is known to match.
            poll_interval: Seconds between two ticks.
            max_concurrency: Maximum operations in flight per cycle.
            on_conflict: Called with the error when a cycle aborts on conflict.
        """
        self._ctx = ctx
        self._baseline: dict[str, Checksum] = {
            c.key: c for c in without_ignored(baseline, ctx.local_fs)
        }
        self._poll_interval = poll_interval
        self._max_concurrency = max_concurrency
        self._on_conflict = on_conflict
        self._state = PollerState.IDLE
        self._task: asyncio.Task[None] | None = None
        self._conflicted: set[str] = set()

    @property
    def baseline(self) -> dict[str, Checksum]:
        """Copy of the current baseline."""
        return dict(self._baseline)

    @property
    def state(self) -> PollerState:
        """Current state of the poll cycle."""
        return self._state

    @property
    def conflicted(self) -> set[str]:
        """Keys whose conflict is still unresolved."""
        return set(self._conflicted)

    @property
    def running(self) -> bool:
        """Check if the poll loop task is alive."""
        return self._task is not None and not self._task.done()

    async def poll_once(self) -> RemoteChanges:
        """Run a single fetch, diff, guard and apply cycle.

        Returns:
            The remote changes that were applied.

        Raises:
            ConflictError: A changed key was also edited locally, now or in
                an earlier cycle that is still unresolved; nothing was
                written.
            BatchError: Some changes could not be applied.
            Exception: Any transport or disk error while fetching.
        """
        ctx = self._ctx
        self._state = PollerState.POLLING
        try:
            fetched = await ctx.client.fetch_checksums(ctx.theme.id)
            latest = without_ignored(fetched, ctx.local_fs)
            changes = compute_remote_changes(self._baseline, latest)

            await self._guard_unresolved_conflicts(latest, changes)
            try:
                await abort_if_multiple_sources_change(ctx.local_fs, changes.changed)
            except ConflictError as e:
                self._conflicted.add(e.key)
                raise

            if not changes.is_empty:
                self._state = PollerState.APPLYING
                operations = [download_operation(ctx, key, notify=True) for key in changes.changed]
                operations.extend(
                    delete_local_operation(ctx, key, notify=True) for key in changes.deleted
                )
                result = await run_batch(operations, self._max_concurrency)
                result.raise_for_errors()
        except Exception:
            self._state = PollerState.ERROR_RECOVERED
            raise

        self._baseline = {c.key: c for c in latest}
        self._state = PollerState.IDLE
        return changes

    async def _guard_unresolved_conflicts(
        self,
        latest: list[Checksum],
        changes: RemoteChanges,
    ) -> None:
        """Abort again on keys flagged by an earlier conflict.

        A flag is cleared once the remote change is gone, or once the local
        file matches either the latest remote version or the baseline one.
        """
        if not self._conflicted:
            return

        local_fs = self._ctx.local_fs
        remote = {c.key: c.checksum for c in latest}
        pending = set(changes.changed) | set(changes.deleted)

        for key in sorted(self._conflicted):
            if key not in pending:
                logger.debug(f"Remote change to {key} went away, conflict cleared")
                self._conflicted.discard(key)
                continue

            await local_fs.read(key)
            local = local_fs.files.get(key)
            local_checksum = local.checksum if local is not None else None
            synced = self._baseline.get(key)

            if local_checksum == remote.get(key) or (
                synced is not None and local_checksum == synced.checksum
            ):
                logger.debug(f"Local copy of {key} no longer diverges, conflict cleared")
                self._conflicted.discard(key)
                continue

            raise ConflictError(key)

    async def _tick(self) -> None:
        try:
            await self.poll_once()
        except ConflictError as e:
            logger.error(str(e))
            if self._on_conflict is not None:
                self._on_conflict(e)
        except Exception as e:
            logger.warning(f"Error while checking for changes in the theme editor: {e}")
        finally:
            if self._state == PollerState.ERROR_RECOVERED:
                self._state = PollerState.IDLE

    async def run(self) -> None:
        """Poll forever, one tick every poll_interval seconds."""
        logger.debug("Checking for changes in the theme editor")
        while True:
            await asyncio.sleep(self._poll_interval)
            await self._tick()

    def start(self) -> asyncio.Task[None]:
        """Start the poll loop as a background task.

        Returns:
            The loop task, owned by the caller for cancellation.
        """
        if self._task is not None and not self._task.done():
            logger.warning("ChangePoller already running")
            return self._task

        self._task = asyncio.create_task(self.run(), name="ChangePoller")
        return self._task

    async def stop(self) -> None:
        """Cancel the poll loop and wait for it to finish.

        A loop that already ended on its own is left for wait() to report.
        """
        task, self._task = self._task, None
        if task is None or task.done():
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task

    async def wait(self) -> None:
        """Wait until the poll loop ends.

        Raises:
            Whatever ended the loop, e.g. a ConflictError re-raised by
            on_conflict.
        """
        if self._task is not None:
            await self._task
