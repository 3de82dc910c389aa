"""Tests for strategy resolution."""

from __future__ import annotations

import pytest

from tests.fakes import FakePrompt
from themesync.client.sync.resolver import PARTITION_RULES, resolve_reconciliation_strategy
from themesync.client.sync.types import FilePartitions
from themesync.core.types import Strategy


class TestResolveReconciliationStrategy:
    """Tests for resolve_reconciliation_strategy."""

    @pytest.mark.asyncio
    async def test_empty_partitions_do_not_prompt(self) -> None:
        """Nothing to reconcile means no prompt and an empty plan."""
        prompt = FakePrompt()

        plan = await resolve_reconciliation_strategy(FilePartitions(), prompt)

        assert prompt.calls == []
        assert plan.is_empty

    @pytest.mark.asyncio
    async def test_local_only_keep_remote_deletes_locally(self) -> None:
        """keep-remote on local-only files schedules local deletion."""
        plan = await resolve_reconciliation_strategy(
            FilePartitions(local_only=["a"]), FakePrompt(Strategy.REMOTE)
        )

        assert plan.local_files_to_delete == ["a"]
        assert plan.files_to_upload == []

    @pytest.mark.asyncio
    async def test_local_only_keep_local_uploads(self) -> None:
        """keep-local on local-only files schedules upload."""
        plan = await resolve_reconciliation_strategy(
            FilePartitions(local_only=["a"]), FakePrompt(Strategy.LOCAL)
        )

        assert plan.files_to_upload == ["a"]
        assert plan.local_files_to_delete == []

    @pytest.mark.asyncio
    async def test_remote_only_keep_remote_downloads(self) -> None:
        """keep-remote on remote-only files schedules download."""
        plan = await resolve_reconciliation_strategy(
            FilePartitions(remote_only=["b"]), FakePrompt(Strategy.REMOTE)
        )

        assert plan.files_to_download == ["b"]
        assert plan.remote_files_to_delete == []

    @pytest.mark.asyncio
    async def test_remote_only_keep_local_deletes_remotely(self) -> None:
        """keep-local on remote-only files schedules remote deletion."""
        plan = await resolve_reconciliation_strategy(
            FilePartitions(remote_only=["b"]), FakePrompt(Strategy.LOCAL)
        )

        assert plan.remote_files_to_delete == ["b"]
        assert plan.files_to_download == []

    @pytest.mark.asyncio
    async def test_conflicting_keep_remote_downloads(self) -> None:
        """keep-remote on conflicting files overwrites local."""
        plan = await resolve_reconciliation_strategy(
            FilePartitions(conflicting=["c"]), FakePrompt(Strategy.REMOTE)
        )

        assert plan.files_to_download == ["c"]
        assert plan.files_to_upload == []

    @pytest.mark.asyncio
    async def test_conflicting_keep_local_uploads(self) -> None:
        """keep-local on conflicting files overwrites remote."""
        plan = await resolve_reconciliation_strategy(
            FilePartitions(conflicting=["c"]), FakePrompt(Strategy.LOCAL)
        )

        assert plan.files_to_upload == ["c"]
        assert plan.files_to_download == []

    @pytest.mark.asyncio
    async def test_one_prompt_per_partition_in_order(self) -> None:
        """Each non-empty partition is prompted once with all its keys."""
        prompt = FakePrompt(Strategy.REMOTE, Strategy.LOCAL, Strategy.REMOTE)
        partitions = FilePartitions(
            local_only=["l1", "l2"],
            remote_only=["r1"],
            conflicting=["c1", "c2"],
        )

        plan = await resolve_reconciliation_strategy(partitions, prompt)

        assert [call[1] for call in prompt.calls] == [["l1", "l2"], ["r1"], ["c1", "c2"]]
        assert [call[0] for call in prompt.calls] == [rule.title for rule in PARTITION_RULES]
        assert plan.local_files_to_delete == ["l1", "l2"]
        assert plan.remote_files_to_delete == ["r1"]
        assert plan.files_to_download == ["c1", "c2"]
        assert plan.files_to_upload == []

    @pytest.mark.asyncio
    async def test_prompt_labels(self) -> None:
        """The prompt receives the labelled choices for the partition."""
        prompt = FakePrompt()

        await resolve_reconciliation_strategy(FilePartitions(remote_only=["r"]), prompt)

        _, _, remote_label, local_label = prompt.calls[0]
        assert remote_label == "Download remote files to the local directory"
        assert local_label == "Delete files from the remote theme"

    @pytest.mark.asyncio
    async def test_skips_empty_partition_between_others(self) -> None:
        """An empty partition in the middle is skipped silently."""
        prompt = FakePrompt(Strategy.LOCAL, Strategy.LOCAL)

        plan = await resolve_reconciliation_strategy(
            FilePartitions(local_only=["l"], conflicting=["c"]), prompt
        )

        assert len(prompt.calls) == 2
        assert plan.files_to_upload == ["l", "c"]
