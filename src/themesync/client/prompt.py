"""Interactive strategy prompt.

This module provides:
- StrategyPrompt: Protocol for asking the user to pick a strategy
- ClickPrompt: Terminal implementation built on click
"""

from __future__ import annotations

import asyncio
from typing import Protocol

import click

from themesync.core.types import Strategy


class StrategyPrompt(Protocol):
    """Protocol for choosing how to reconcile a group of files."""

    async def select(
        self,
        title: str,
        keys: list[str],
        remote_label: str,
        local_label: str,
    ) -> Strategy:
        """Show the affected keys and return the chosen strategy."""
        ...


class ClickPrompt:
    """Render the file list and a numbered choice on the terminal."""

    def _ask(self, title: str, keys: list[str], remote_label: str, local_label: str) -> Strategy:
        click.echo(title)
        for key in keys:
            click.echo(f"  - {key}")
        click.echo("Reconciliation Strategy")
        click.echo(f"  [1] {remote_label}")
        click.echo(f"  [2] {local_label}")
        choice = click.prompt("Select", type=click.Choice(["1", "2"]), default="1")
        return Strategy.REMOTE if choice == "1" else Strategy.LOCAL

    async def select(
        self,
        title: str,
        keys: list[str],
        remote_label: str,
        local_label: str,
    ) -> Strategy:
        # click.prompt blocks on stdin
        return await asyncio.to_thread(self._ask, title, keys, remote_label, local_label)
