"""Themes command for themesync CLI.

Commands:
- themes: List the themes of a store
"""

from __future__ import annotations

import asyncio
import sys

import click

from themesync.client.cli.config import configure_logging, load_config, require_setting


@click.command()
@click.option("--store", default=None, help="Store domain (e.g., my-shop.myshopify.com).")
@click.option("--password", default=None, envvar="THEMESYNC_PASSWORD", help="Admin API access token.")
@click.option("--verbose", "-v", is_flag=True, help="Show debug logs.")
def themes(store: str | None, password: str | None, verbose: bool) -> None:
    """List the themes of the store."""
    import httpx

    from themesync.client.api import APIError, ThemeClient
    from themesync.core.config import AdminSession

    configure_logging(verbose)
    config = load_config()
    session = AdminSession(
        store_fqdn=require_setting(store, config, "store", "--store"),
        token=require_setting(password, config, "password", "--password"),
    )

    async def fetch() -> list:
        async with ThemeClient(session) as client:
            return await client.list_themes()

    try:
        found = asyncio.run(fetch())
    except (APIError, httpx.HTTPError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if not found:
        click.echo("No themes found.")
        return
    for theme in found:
        click.echo(f"{theme.id}\t{theme.role}\t{theme.name}")
