"""Classification of local vs remote theme assets.

Splits the union of local and remote keys into the partitions that need
reconciliation. Keys with equal checksums on both sides are left out.
Remote keys matching the local ignore patterns are filtered out first.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING

from themesync.client.sync.types import FilePartitions
from themesync.core.types import Asset, Checksum

if TYPE_CHECKING:
    from themesync.client.theme_fs import ThemeFileSystem


def identify_files_to_reconcile(
    remote_checksums: Iterable[Checksum],
    local_files: Mapping[str, Asset | Checksum],
) -> FilePartitions:
    """Partition keys by where local and remote diverge.

    Args:
        remote_checksums: Checksums reported by the remote theme.
        local_files: Local store contents keyed by asset key.

    Returns:
        FilePartitions with remote_only and conflicting in remote order,
        local_only in local order.
    """
    partitions = FilePartitions()
    remote_keys: set[str] = set()

    for remote in remote_checksums:
        if remote.key in remote_keys:
            continue
        remote_keys.add(remote.key)

        local = local_files.get(remote.key)
        if local is None:
            partitions.remote_only.append(remote.key)
        elif local.checksum != remote.checksum:
            partitions.conflicting.append(remote.key)

    partitions.local_only = [key for key in local_files if key not in remote_keys]
    return partitions


def without_ignored(
    remote_checksums: Iterable[Checksum],
    local_fs: ThemeFileSystem,
) -> list[Checksum]:
    """Drop remote checksums whose keys the local store ignores.

    Ignored keys stay out of sync in both directions, so they must not
    reach classification or the poller's diff.
    """
    return [c for c in remote_checksums if not local_fs.is_ignored(c.key)]
