"""Tests for core configuration classes."""

from __future__ import annotations

import pytest

from themesync.core.config import DEFAULT_API_VERSION, AdminSession, SyncConfig


class TestAdminSession:
    """Tests for AdminSession class."""

    def test_init_basic(self) -> None:
        """Should initialize with required fields."""
        session = AdminSession(store_fqdn="my-shop.myshopify.com", token="shpat_123")
        assert session.store_fqdn == "my-shop.myshopify.com"
        assert session.token == "shpat_123"
        assert session.api_version == DEFAULT_API_VERSION
        assert session.timeout == 30.0
        assert session.verify_ssl is True

    def test_scheme_and_trailing_slash_removed(self) -> None:
        """Should strip URL scheme and trailing slash."""
        session = AdminSession(store_fqdn="https://my-shop.myshopify.com/", token="t")
        assert session.store_fqdn == "my-shop.myshopify.com"

    def test_short_store_name_expanded(self) -> None:
        """Should complete a bare store name with the default domain."""
        session = AdminSession(store_fqdn="my-shop", token="t")
        assert session.store_fqdn == "my-shop.myshopify.com"

    def test_base_url(self) -> None:
        """Should build the versioned Admin API URL."""
        session = AdminSession(store_fqdn="my-shop.myshopify.com", token="t", api_version="2024-07")
        assert session.base_url == "https://my-shop.myshopify.com/admin/api/2024-07"


class TestSyncConfig:
    """Tests for SyncConfig class."""

    def test_defaults(self) -> None:
        """Should poll every 3 seconds by default."""
        config = SyncConfig()
        assert config.poll_interval == 3.0
        assert config.max_concurrency == 10

    def test_rejects_non_positive_interval(self) -> None:
        """Should refuse a zero or negative poll interval."""
        with pytest.raises(ValueError):
            SyncConfig(poll_interval=0)

    def test_rejects_zero_concurrency(self) -> None:
        """Should refuse a concurrency below one."""
        with pytest.raises(ValueError):
            SyncConfig(max_concurrency=0)
