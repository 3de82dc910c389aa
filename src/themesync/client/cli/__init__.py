"""Command-line interface for themesync.

This module provides the main CLI entry point and assembles all commands.

Commands:
- configure: Save default store, token, theme and directory
- themes: List the themes of a store
- sync: Reconcile a theme directory with a remote theme and keep it in sync
"""

from __future__ import annotations

import click

from themesync.client.cli.config import (
    configure_logging,
    get_config_dir,
    get_config_file,
    load_config,
    save_config,
)
from themesync.client.cli.configure import configure
from themesync.client.cli.sync import sync
from themesync.client.cli.themes import themes


@click.group()
@click.version_option(package_name="themesync")
def cli() -> None:
    """themesync - Keep a local theme directory in sync with a remote theme."""


cli.add_command(configure)
cli.add_command(themes)
cli.add_command(sync)


def main() -> None:
    """Entry point for the CLI."""
    cli()


__all__ = [
    # Main entry points
    "cli",
    "main",
    # Config utilities
    "configure_logging",
    "get_config_dir",
    "get_config_file",
    "load_config",
    "save_config",
]
