"""Core module - Shared types, checksums and configuration."""

from themesync.core.checksum import (
    compute_attachment_checksum,
    compute_checksum,
    normalize_json,
)
from themesync.core.config import (
    DEFAULT_API_VERSION,
    DEFAULT_MAX_CONCURRENCY,
    DEFAULT_POLL_INTERVAL,
    AdminSession,
    SyncConfig,
)
from themesync.core.types import Asset, Checksum, PollerState, Strategy, Theme

__all__ = [
    # Checksums
    "compute_attachment_checksum",
    "compute_checksum",
    "normalize_json",
    # Config
    "DEFAULT_API_VERSION",
    "DEFAULT_MAX_CONCURRENCY",
    "DEFAULT_POLL_INTERVAL",
    "AdminSession",
    "SyncConfig",
    # Types
    "Asset",
    "Checksum",
    "PollerState",
    "Strategy",
    "Theme",
]
