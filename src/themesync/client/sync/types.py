"""Shared types and dataclasses for sync operations.

This module provides:
- SyncError, ConflictError, BatchError: Exception classes
- FilePartitions: Classification of local vs remote keys
- ReconciliationPlan: Concrete actions chosen for each partition
- OperationAction, OperationResult, BatchResult: Per-key batch outcomes
- SyncContext: The state shared by the executor and the poller
- Type aliases for callbacks
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

import click

if TYPE_CHECKING:
    from themesync.client.api import ThemeClient
    from themesync.client.theme_fs import ThemeFileSystem
    from themesync.core.types import Theme

# Receives one line of user-facing output per applied change
SyncOutput = Callable[[str], None]


class SyncError(Exception):
    """Base exception for sync errors."""


class ConflictError(SyncError):
    """The same asset changed both locally and on the remote theme.

    Attributes:
        key: Asset key changed on both sides.
    """

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(
            f"Detected changes to the file '{key}' on both local and remote sources. Aborting..."
        )


class BatchError(SyncError):
    """One or more operations of a batch failed.

    Attributes:
        failures: Failed operation results, in batch order.
    """

    def __init__(self, failures: list[OperationResult]) -> None:
        self.failures = failures
        details = "; ".join(f"{f.action.value} '{f.key}': {f.error}" for f in failures)
        super().__init__(f"{len(failures)} operation(s) failed: {details}")


class OperationAction(str, Enum):
    """Kind of per-key operation in a batch."""

    DELETE_LOCAL = "delete-local"
    DOWNLOAD = "download"
    UPLOAD = "upload"
    DELETE_REMOTE = "delete-remote"


@dataclass
class OperationResult:
    """Outcome of one per-key operation.

    Attributes:
        key: Asset key.
        action: What was attempted.
        error: The exception raised, None on success.
        skipped: True when there was nothing to do (e.g. asset vanished remotely).
    """

    key: str
    action: OperationAction
    error: BaseException | None = None
    skipped: bool = False

    @property
    def success(self) -> bool:
        """Whether the operation completed without error."""
        return self.error is None


@dataclass
class BatchResult:
    """Aggregated outcome of a concurrent batch."""

    results: list[OperationResult] = field(default_factory=list)

    @property
    def succeeded(self) -> list[OperationResult]:
        """Operations that completed, including skipped ones."""
        return [r for r in self.results if r.success]

    @property
    def failed(self) -> list[OperationResult]:
        """Operations that raised."""
        return [r for r in self.results if not r.success]

    @property
    def ok(self) -> bool:
        """True if no operation failed."""
        return not self.failed

    def extend(self, other: BatchResult) -> None:
        """Merge another batch's results into this one."""
        self.results.extend(other.results)

    def raise_for_errors(self) -> None:
        """Raise BatchError if any operation failed."""
        if self.failed:
            raise BatchError(self.failed)


@dataclass
class FilePartitions:
    """Keys needing reconciliation, split by where they diverge.

    Keys equal on both sides are not listed (the implicit "unchanged"
    partition).
    """

    local_only: list[str] = field(default_factory=list)
    remote_only: list[str] = field(default_factory=list)
    conflicting: list[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        """True when local and remote already match."""
        return not (self.local_only or self.remote_only or self.conflicting)


@dataclass
class ReconciliationPlan:
    """Disjoint key sets to apply during the initial reconciliation."""

    local_files_to_delete: list[str] = field(default_factory=list)
    files_to_download: list[str] = field(default_factory=list)
    files_to_upload: list[str] = field(default_factory=list)
    remote_files_to_delete: list[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        """True when no action is scheduled."""
        return not (
            self.local_files_to_delete
            or self.files_to_download
            or self.files_to_upload
            or self.remote_files_to_delete
        )


@dataclass
class SyncContext:
    """Handles shared by the reconciliation executor and the change poller.

    Attributes:
        theme: Remote theme being synchronized.
        client: Remote theme API client.
        local_fs: Local asset store.
        output: Sink for "Synced: ..." lines.
    """

    theme: Theme
    client: ThemeClient
    local_fs: ThemeFileSystem
    output: SyncOutput = click.echo
