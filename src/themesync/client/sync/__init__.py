"""Theme reconciliation and continuous sync.

Architecture:
    identify_files_to_reconcile → resolve_reconciliation_strategy
        → ReconciliationExecutor (once) → ChangePoller (forever)

Components:
- **classifier**: Splits local vs remote keys into local-only, remote-only
  and conflicting partitions
- **resolver**: Asks for one strategy per partition, builds a plan
- **executor**: Applies a plan with bounded concurrency
- **poller**: Fetches remote checksums, diffs, guards, applies, repeats
- **conflict**: Aborts a cycle when a key changed on both sides
- **engine**: Session entry point tying the above together
"""

from themesync.client.sync.batch import Operation, run_batch
from themesync.client.sync.classifier import identify_files_to_reconcile, without_ignored
from themesync.client.sync.conflict import abort_if_multiple_sources_change
from themesync.client.sync.engine import initialize_theme_editor_sync, reconcile_theme_files
from themesync.client.sync.executor import ReconciliationExecutor
from themesync.client.sync.poller import (
    ChangePoller,
    RemoteChanges,
    compute_remote_changes,
    stop_on_conflict,
)
from themesync.client.sync.resolver import PARTITION_RULES, resolve_reconciliation_strategy
from themesync.client.sync.types import (
    BatchError,
    BatchResult,
    ConflictError,
    FilePartitions,
    OperationAction,
    OperationResult,
    ReconciliationPlan,
    SyncContext,
    SyncError,
)

__all__ = [
    # Batch
    "Operation",
    "run_batch",
    # Reconciliation
    "PARTITION_RULES",
    "ReconciliationExecutor",
    "identify_files_to_reconcile",
    "reconcile_theme_files",
    "resolve_reconciliation_strategy",
    "without_ignored",
    # Polling
    "ChangePoller",
    "RemoteChanges",
    "abort_if_multiple_sources_change",
    "compute_remote_changes",
    "stop_on_conflict",
    "initialize_theme_editor_sync",
    # Types
    "BatchError",
    "BatchResult",
    "ConflictError",
    "FilePartitions",
    "OperationAction",
    "OperationResult",
    "ReconciliationPlan",
    "SyncContext",
    "SyncError",
]
