"""Configuration utilities for themesync CLI.

This module provides shared configuration functions used across CLI commands.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

import click


def get_config_dir() -> Path:
    """Get the configuration directory for themesync.

    Returns:
        Path to ~/.themesync or equivalent.
    """
    return Path.home() / ".themesync"


def get_config_file() -> Path:
    """Get the path to the config file."""
    return get_config_dir() / "config.json"


def load_config() -> dict[str, str]:
    """Load configuration from config file."""
    config_file = get_config_file()
    if config_file.exists():
        return dict(json.loads(config_file.read_text()))
    return {}


def save_config(config: dict[str, str]) -> None:
    """Save configuration to config file."""
    config_file = get_config_file()
    config_file.parent.mkdir(parents=True, exist_ok=True)
    config_file.write_text(json.dumps(config, indent=2))


def require_setting(value: str | None, config: dict[str, str], name: str, option: str) -> str:
    """Resolve a setting from its option or the config file.

    Raises:
        click.UsageError: If neither provides a value.
    """
    resolved = value or config.get(name)
    if not resolved:
        raise click.UsageError(
            f"Missing {option}. Pass it or run 'themesync configure' first."
        )
    return resolved


def configure_logging(verbose: bool) -> None:
    """Send themesync logs to stderr, DEBUG when verbose else WARNING."""
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))

    themesync_logger = logging.getLogger("themesync")
    themesync_logger.handlers = [handler]
    themesync_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    themesync_logger.propagate = False
