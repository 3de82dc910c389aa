"""Shared configuration classes for themesync.

This module defines configuration classes used by the theme client, the
sync engine and the CLI.
"""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_API_VERSION = "2024-10"
DEFAULT_POLL_INTERVAL = 3.0  # seconds
DEFAULT_MAX_CONCURRENCY = 10


@dataclass
class AdminSession:
    """Authenticated session against a store's Admin API.

    Attributes:
        store_fqdn: Store domain (e.g., "my-shop.myshopify.com").
        token: Admin API access token.
        api_version: Admin API version used in request paths.
        timeout: Request timeout in seconds.
        verify_ssl: Whether to verify SSL certificates (default True).
    """

    store_fqdn: str
    token: str
    api_version: str = DEFAULT_API_VERSION
    timeout: float = 30.0
    verify_ssl: bool = True

    def __post_init__(self) -> None:
        """Normalize store domain."""
        store = self.store_fqdn.strip()
        for prefix in ("https://", "http://"):
            if store.startswith(prefix):
                store = store[len(prefix):]
        store = store.rstrip("/")
        if "." not in store:
            store = f"{store}.myshopify.com"
        self.store_fqdn = store

    @property
    def base_url(self) -> str:
        """Get the Admin API base URL.

        Returns:
            URL ending with the versioned API prefix.
        """
        return f"https://{self.store_fqdn}/admin/api/{self.api_version}"


@dataclass
class SyncConfig:
    """Tuning knobs for the sync engine.

    Attributes:
        poll_interval: Seconds between two remote polls.
        max_concurrency: Maximum in-flight operations per batch.
    """

    poll_interval: float = DEFAULT_POLL_INTERVAL
    max_concurrency: int = DEFAULT_MAX_CONCURRENCY

    def __post_init__(self) -> None:
        """Validate values."""
        if self.poll_interval <= 0:
            raise ValueError("poll_interval must be positive")
        if self.max_concurrency < 1:
            raise ValueError("max_concurrency must be at least 1")
