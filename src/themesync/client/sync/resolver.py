"""Strategy resolution for the initial reconciliation.

Each non-empty partition is presented to the user once; the chosen
strategy applies to every file in it.

Matrix:
| Partition   | keep-remote     | keep-local      |
|-------------|-----------------|-----------------|
| local_only  | delete locally  | upload          |
| remote_only | download        | delete remotely |
| conflicting | download        | upload          |
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from themesync.client.sync.types import FilePartitions, ReconciliationPlan
from themesync.core.types import Strategy

if TYPE_CHECKING:
    from themesync.client.prompt import StrategyPrompt

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PartitionRule:
    """How to prompt for a partition and where each answer schedules its keys."""

    partition: str  # FilePartitions attribute
    title: str
    remote_label: str
    local_label: str
    on_remote: str  # ReconciliationPlan attribute
    on_local: str  # ReconciliationPlan attribute


# Prompted in this order
PARTITION_RULES: list[PartitionRule] = [
    PartitionRule(
        partition="local_only",
        title="The files listed below are only present locally. What would you like to do?",
        remote_label="Delete files from the local directory",
        local_label="Upload local files to the remote theme",
        on_remote="local_files_to_delete",
        on_local="files_to_upload",
    ),
    PartitionRule(
        partition="remote_only",
        title="The files listed below are only present on the remote theme. What would you like to do?",
        remote_label="Download remote files to the local directory",
        local_label="Delete files from the remote theme",
        on_remote="files_to_download",
        on_local="remote_files_to_delete",
    ),
    PartitionRule(
        partition="conflicting",
        title="The files listed below differ between the local and remote versions. What would you like to do?",
        remote_label="Keep the remote version",
        local_label="Keep the local version",
        on_remote="files_to_download",
        on_local="files_to_upload",
    ),
]


def target_for(rule: PartitionRule, strategy: Strategy) -> str:
    """Plan attribute receiving the keys of a partition for a strategy."""
    return rule.on_remote if strategy == Strategy.REMOTE else rule.on_local


async def resolve_reconciliation_strategy(
    partitions: FilePartitions,
    prompt: StrategyPrompt,
) -> ReconciliationPlan:
    """Ask for one strategy per non-empty partition and build the plan.

    Args:
        partitions: Output of identify_files_to_reconcile.
        prompt: Collaborator returning the user's choice.

    Returns:
        ReconciliationPlan whose four key lists are disjoint.
    """
    plan = ReconciliationPlan()

    for rule in PARTITION_RULES:
        keys: list[str] = getattr(partitions, rule.partition)
        if not keys:
            continue

        strategy = await prompt.select(rule.title, list(keys), rule.remote_label, rule.local_label)
        target = target_for(rule, strategy)
        logger.debug(f"{rule.partition}: {strategy.value} strategy, {len(keys)} file(s) -> {target}")
        getattr(plan, target).extend(keys)

    return plan
