"""HTTP client for the remote theme Admin API.

This module provides:
- ThemeClient: Async HTTP client bound to one AdminSession
- Theme listing and lookup
- Asset checksum listing and single asset fetch, upload and delete
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from themesync.client.retry import DEFAULT_INITIAL_BACKOFF, DEFAULT_MAX_RETRIES, retry_with_backoff
from themesync.core.config import AdminSession
from themesync.core.types import Asset, Checksum, Theme

logger = logging.getLogger(__name__)


class APIError(Exception):
    """Base exception for API errors."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class AuthenticationError(APIError):
    """Authentication failed."""


class NotFoundError(APIError):
    """Resource not found."""


class ThrottledError(APIError):
    """Rate limit reached (HTTP 429)."""

    def __init__(self, message: str, retry_after: float | None = None) -> None:
        super().__init__(message, 429)
        self.retry_after = retry_after


def _error_detail(response: httpx.Response, default: str) -> str:
    try:
        data = response.json()
    except ValueError:
        return response.text or default
    if isinstance(data, dict):
        detail = data.get("errors") or data.get("error") or data.get("detail")
        if detail:
            return str(detail)
    return default


class ThemeClient:
    """Async HTTP client for the theme asset API.

    Usage:
        async with ThemeClient(session) as client:
            checksums = await client.fetch_checksums(theme.id)
    """

    def __init__(
        self,
        session: AdminSession,
        max_retries: int = DEFAULT_MAX_RETRIES,
        initial_backoff: float = DEFAULT_INITIAL_BACKOFF,
    ) -> None:
        """Initialize the theme client.

        Args:
            session: Store domain, token and API version.
            max_retries: Retries on rate limiting before giving up.
            initial_backoff: First backoff delay in seconds.
        """
        self._session = session
        self._max_retries = max_retries
        self._initial_backoff = initial_backoff
        self._client = httpx.AsyncClient(
            base_url=session.base_url,
            timeout=session.timeout,
            verify=session.verify_ssl,
            headers={
                "X-Shopify-Access-Token": session.token,
                "Accept": "application/json",
            },
        )

    @property
    def session(self) -> AdminSession:
        """Session this client is bound to."""
        return self._session

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> ThemeClient:
        """Async context manager entry."""
        return self

    async def __aexit__(self, *args: object) -> None:
        """Async context manager exit."""
        await self.close()

    def _handle_response(self, response: httpx.Response) -> httpx.Response:
        """Handle API response and raise appropriate exceptions."""
        if response.status_code in (401, 403):
            raise AuthenticationError(
                _error_detail(response, "Invalid or expired token"), response.status_code
            )
        if response.status_code == 404:
            raise NotFoundError("Resource not found", 404)
        if response.status_code == 429:
            retry_after = response.headers.get("Retry-After")
            raise ThrottledError(
                "Rate limited",
                retry_after=float(retry_after) if retry_after else None,
            )
        if response.status_code >= 400:
            raise APIError(_error_detail(response, "Unknown error"), response.status_code)
        return response

    async def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        async def attempt() -> httpx.Response:
            response = await self._client.request(method, url, **kwargs)
            return self._handle_response(response)

        return await retry_with_backoff(
            attempt,
            max_retries=self._max_retries,
            initial_backoff=self._initial_backoff,
            retryable_exceptions=(ThrottledError,),
        )

    # === Themes ===

    async def list_themes(self) -> list[Theme]:
        """List all themes of the store."""
        response = await self._request("GET", "/themes.json")
        return [Theme.from_dict(t) for t in response.json().get("themes", [])]

    async def fetch_theme(self, theme_id: int) -> Theme | None:
        """Get a theme by id.

        Returns:
            The theme, or None if it does not exist.
        """
        try:
            response = await self._request("GET", f"/themes/{theme_id}.json")
        except NotFoundError:
            return None
        return Theme.from_dict(response.json()["theme"])

    # === Assets ===

    async def fetch_checksums(self, theme_id: int) -> list[Checksum]:
        """List the checksum of every asset in a theme."""
        response = await self._request(
            "GET",
            f"/themes/{theme_id}/assets.json",
            params={"fields": "key,checksum"},
        )
        checksums = [Checksum.from_dict(a) for a in response.json().get("assets", [])]
        logger.debug(f"Fetched {len(checksums)} checksums for theme {theme_id}")
        return checksums

    async def fetch_theme_asset(self, theme_id: int, key: str) -> Asset | None:
        """Fetch one asset with its content.

        Returns:
            The asset, or None if the theme has no asset with that key.
        """
        try:
            response = await self._request(
                "GET",
                f"/themes/{theme_id}/assets.json",
                params={"asset[key]": key},
            )
        except NotFoundError:
            logger.debug(f"Asset {key} not found on theme {theme_id}")
            return None
        return Asset.from_dict(response.json()["asset"])

    async def delete_theme_asset(self, theme_id: int, key: str) -> bool:
        """Delete one asset.

        Returns:
            True if the asset was deleted, False if it was already absent.
        """
        try:
            await self._request(
                "DELETE",
                f"/themes/{theme_id}/assets.json",
                params={"asset[key]": key},
            )
        except NotFoundError:
            logger.debug(f"Asset {key} already absent from theme {theme_id}")
            return False
        return True

    async def upload_asset(self, theme_id: int, asset: Asset) -> Asset:
        """Create or replace one asset.

        Returns:
            The stored asset as reported by the server (with its new checksum).
        """
        response = await self._request(
            "PUT",
            f"/themes/{theme_id}/assets.json",
            json={"asset": asset.to_dict()},
        )
        return Asset.from_dict(response.json()["asset"])
