"""Sync command for themesync CLI.

Commands:
- sync: Reconcile a local theme directory with a remote theme, then keep
  pulling remote changes
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import click

from themesync.client.cli.config import configure_logging, load_config, require_setting
from themesync.core.config import DEFAULT_POLL_INTERVAL

if TYPE_CHECKING:
    from themesync.client.sync import BatchResult


def _report_failures(result: BatchResult) -> None:
    for failure in result.failed:
        click.echo(f"  ✗ {failure.action.value} {failure.key}: {failure.error}", err=True)


@click.command()
@click.option("--store", default=None, help="Store domain (e.g., my-shop.myshopify.com).")
@click.option("--password", default=None, envvar="THEMESYNC_PASSWORD", help="Admin API access token.")
@click.option("--theme", "theme_id", type=int, default=None, help="Theme id to sync.")
@click.option(
    "--path",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Local theme directory (default: current directory).",
)
@click.option(
    "--poll-interval",
    type=float,
    default=DEFAULT_POLL_INTERVAL,
    show_default=True,
    help="Seconds between remote checks.",
)
@click.option("--once", is_flag=True, help="Reconcile once and exit, without polling.")
@click.option("--verbose", "-v", is_flag=True, help="Show debug logs.")
def sync(
    store: str | None,
    password: str | None,
    theme_id: int | None,
    path: Path | None,
    poll_interval: float,
    once: bool,
    verbose: bool,
) -> None:
    """Synchronize a local theme directory with a remote theme.

    Files that differ are listed and you choose, per group, which side
    wins. Afterwards remote changes are pulled every few seconds until
    Ctrl+C, or until a file changes on both sides.
    """
    import httpx

    from themesync.client.api import APIError, ThemeClient
    from themesync.client.prompt import ClickPrompt
    from themesync.client.sync import (
        ConflictError,
        SyncContext,
        initialize_theme_editor_sync,
        reconcile_theme_files,
        stop_on_conflict,
    )
    from themesync.client.theme_fs import ThemeFileSystem
    from themesync.client.uploader import ThemeUploader
    from themesync.core.config import AdminSession, SyncConfig

    configure_logging(verbose)
    config = load_config()
    session = AdminSession(
        store_fqdn=require_setting(store, config, "store", "--store"),
        token=require_setting(password, config, "password", "--password"),
    )
    target_theme_id = int(require_setting(
        str(theme_id) if theme_id is not None else None, config, "theme", "--theme"
    ))
    theme_path = path or Path(config.get("path", "."))
    try:
        sync_config = SyncConfig(poll_interval=poll_interval)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--poll-interval") from e

    async def run() -> None:
        async with ThemeClient(session) as client:
            theme = await client.fetch_theme(target_theme_id)
            if theme is None:
                raise click.ClickException(f"Theme {target_theme_id} not found on {session.store_fqdn}")

            local_fs = await ThemeFileSystem(theme_path).load()
            ctx = SyncContext(theme=theme, client=client, local_fs=local_fs, output=click.echo)
            uploader = ThemeUploader(client, max_concurrency=sync_config.max_concurrency)
            prompt = ClickPrompt()

            click.echo(f"Syncing '{theme.name}' ({theme.id}) on {session.store_fqdn}")
            click.echo(f"Theme directory: {local_fs.root}\n")

            remote_checksums = await client.fetch_checksums(theme.id)

            if once:
                result = await reconcile_theme_files(
                    ctx, remote_checksums, prompt, uploader, sync_config
                )
                _report_failures(result)
                if result.ok:
                    click.echo("Everything is up to date.")
                return

            poller = await initialize_theme_editor_sync(
                ctx,
                remote_checksums,
                prompt,
                uploader,
                config=sync_config,
                on_conflict=stop_on_conflict,
            )
            click.echo("\nWatching for remote changes... (Ctrl+C to stop)\n")
            try:
                await poller.wait()
            finally:
                await poller.stop()

    try:
        asyncio.run(run())
    except ConflictError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    except (APIError, httpx.HTTPError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    except KeyboardInterrupt:
        click.echo("\nStopping...")
