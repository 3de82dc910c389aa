"""Bulk theme upload.

This module provides:
- ThemeUploader: Pushes local assets whose checksum differs from the
  remote theme and, unless told otherwise, removes remote assets that no
  longer exist locally
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from themesync.client.sync.batch import Operation, run_batch
from themesync.client.sync.types import BatchResult, OperationAction
from themesync.core.config import DEFAULT_MAX_CONCURRENCY

if TYPE_CHECKING:
    from themesync.client.api import ThemeClient
    from themesync.client.theme_fs import ThemeFileSystem
    from themesync.core.types import Checksum, Theme

logger = logging.getLogger(__name__)


class ThemeUploader:
    """Uploads a local theme to its remote counterpart."""

    def __init__(self, client: ThemeClient, max_concurrency: int = DEFAULT_MAX_CONCURRENCY) -> None:
        self._client = client
        self._max_concurrency = max_concurrency

    def _upload_operation(self, theme: Theme, local_fs: ThemeFileSystem, key: str) -> Operation:
        async def run() -> bool:
            asset = local_fs.files.get(key)
            if asset is None:
                logger.debug(f"Skipping upload of {key}: not present locally")
                return False
            await self._client.upload_asset(theme.id, asset)
            logger.debug(f"Uploaded {key}")
            return True

        return Operation(key=key, action=OperationAction.UPLOAD, run=run)

    def _delete_operation(self, theme: Theme, key: str) -> Operation:
        async def run() -> bool:
            return await self._client.delete_theme_asset(theme.id, key)

        return Operation(key=key, action=OperationAction.DELETE_REMOTE, run=run)

    async def upload_theme(
        self,
        theme: Theme,
        remote_checksums: Iterable[Checksum],
        local_fs: ThemeFileSystem,
        *,
        no_delete: bool = False,
        keys: Iterable[str] | None = None,
    ) -> BatchResult:
        """Upload local changes to the remote theme.

        Args:
            theme: Target theme.
            remote_checksums: Current remote checksums, used to skip
                unchanged assets.
            local_fs: Local asset store.
            no_delete: Never delete remote assets. Remote assets matching the
                local ignore patterns are never deleted either way.
            keys: Restrict the upload (and deletion) to these keys.

        Returns:
            BatchResult of upload and delete operations.
        """
        remote = {c.key: c.checksum for c in remote_checksums}
        selected = set(keys) if keys is not None else None

        def in_scope(key: str) -> bool:
            return selected is None or key in selected

        operations: list[Operation] = []
        candidates = list(selected) if selected is not None else list(local_fs.files)
        for key in sorted(candidates):
            asset = local_fs.files.get(key)
            if asset is not None and remote.get(key) == asset.checksum:
                continue
            operations.append(self._upload_operation(theme, local_fs, key))

        if not no_delete:
            for key in remote:
                if key not in local_fs.files and in_scope(key) and not local_fs.is_ignored(key):
                    operations.append(self._delete_operation(theme, key))

        logger.debug(f"Uploading theme {theme.id}: {len(operations)} operation(s)")
        return await run_batch(operations, self._max_concurrency)
