"""Detection of concurrent local and remote edits.

Before a poll cycle overwrites local files with remote changes, every
affected key is re-read from disk. Re-reading refreshes the checksum the
local store records for that key, so a difference between the checksum
recorded before and after the read means the file was edited locally
since it was last seen.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from themesync.client.sync.types import ConflictError

if TYPE_CHECKING:
    from themesync.client.theme_fs import ThemeFileSystem

logger = logging.getLogger(__name__)


def _recorded_checksum(local_fs: ThemeFileSystem, key: str) -> str | None:
    asset = local_fs.files.get(key)
    return asset.checksum if asset is not None else None


async def abort_if_multiple_sources_change(
    local_fs: ThemeFileSystem,
    changed_on_remote: Iterable[str],
) -> None:
    """Raise if any key changed on the remote was also edited locally.

    Keys are checked one at a time and the first conflict stops the scan.

    Args:
        local_fs: Local asset store.
        changed_on_remote: Keys whose remote checksum changed this cycle.

    Raises:
        ConflictError: For the first key changed on both sides.
    """
    for key in changed_on_remote:
        before = _recorded_checksum(local_fs, key)
        await local_fs.read(key)
        after = _recorded_checksum(local_fs, key)

        if before != after:
            logger.debug(f"Local checksum of {key} moved from {before} to {after}")
            raise ConflictError(key)
