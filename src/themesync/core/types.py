"""Shared types for themesync.

This module defines the value types exchanged between the remote theme
client, the local theme filesystem and the sync engine.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class Strategy(str, Enum):
    """Reconciliation strategy chosen for a whole partition of files."""

    LOCAL = "local"  # keep-local
    REMOTE = "remote"  # keep-remote


class PollerState(str, Enum):
    """State of the remote change poller.

    IDLE -> POLLING -> APPLYING -> IDLE on success,
    POLLING|APPLYING -> ERROR_RECOVERED -> IDLE on failure.
    """

    IDLE = "idle"
    POLLING = "polling"
    APPLYING = "applying"
    ERROR_RECOVERED = "error_recovered"


@dataclass(frozen=True)
class Checksum:
    """Content fingerprint of a single asset, keyed by path."""

    key: str
    checksum: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Checksum:
        """Create from API response dictionary."""
        return cls(key=data["key"], checksum=data.get("checksum") or "")


@dataclass
class Asset:
    """A theme file with its content.

    Attributes:
        key: Path of the asset inside the theme (e.g. "templates/index.json").
        checksum: Content fingerprint (see themesync.core.checksum).
        value: Text content, if the asset is text.
        attachment: Base64 encoded content, if the asset is binary.
    """

    key: str
    checksum: str
    value: str | None = None
    attachment: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Asset:
        """Create from API response dictionary."""
        return cls(
            key=data["key"],
            checksum=data.get("checksum") or "",
            value=data.get("value"),
            attachment=data.get("attachment"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize for an asset upload request."""
        data: dict[str, Any] = {"key": self.key}
        if self.attachment is not None:
            data["attachment"] = self.attachment
        else:
            data["value"] = self.value or ""
        return data

    def to_checksum(self) -> Checksum:
        """Project to the lightweight checksum form."""
        return Checksum(key=self.key, checksum=self.checksum)


@dataclass
class Theme:
    """Remote theme metadata."""

    id: int
    name: str
    role: str = "unpublished"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Theme:
        """Create from API response dictionary."""
        return cls(id=data["id"], name=data["name"], role=data.get("role", "unpublished"))
