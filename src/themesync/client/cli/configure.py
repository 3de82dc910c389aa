"""Configure command for themesync CLI.

Commands:
- configure: Store connection defaults in the config file
"""

from __future__ import annotations

import click

from themesync.client.cli.config import get_config_file, load_config, save_config


@click.command()
@click.option("--store", default=None, help="Store domain (e.g., my-shop.myshopify.com).")
@click.option("--password", default=None, help="Admin API access token.")
@click.option("--theme", "theme_id", default=None, help="Theme id to sync.")
@click.option("--path", default=None, help="Local theme directory.")
def configure(
    store: str | None,
    password: str | None,
    theme_id: str | None,
    path: str | None,
) -> None:
    """Save default store, token, theme and directory.

    Prompts for any value not given on the command line.
    """
    config = load_config()

    config["store"] = store or click.prompt("Store", default=config.get("store"))
    config["password"] = password or click.prompt(
        "Admin API access token", hide_input=True, default=config.get("password")
    )
    config["theme"] = theme_id or click.prompt("Theme id", default=config.get("theme"))
    config["path"] = path or click.prompt("Theme directory", default=config.get("path", "."))

    save_config(config)
    click.echo(f"Configuration saved to {get_config_file()}")
