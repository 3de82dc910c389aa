"""Local theme filesystem.

This module provides:
- ThemeFileSystem: The local asset store. Keeps an in-memory map of
  key -> Asset (with checksum) in step with a theme directory on disk.

Disk access runs in worker threads via asyncio.to_thread so that the sync
loop never blocks on I/O. Each read, write and delete is atomic from the
caller's point of view: the in-memory entry is only updated after the disk
operation completed.
"""

from __future__ import annotations

import asyncio
import base64
import logging
import os
from pathlib import Path

from themesync.client.ignore import IGNORE_FILE_NAME, IgnorePatterns
from themesync.core.checksum import compute_attachment_checksum, compute_checksum
from themesync.core.types import Asset

logger = logging.getLogger(__name__)

THEME_DIRECTORIES = (
    "assets",
    "blocks",
    "config",
    "layout",
    "locales",
    "sections",
    "snippets",
    "templates",
)

# Extensions stored as text values; everything else is a base64 attachment
TEXT_EXTENSIONS = frozenset(
    {".liquid", ".json", ".css", ".scss", ".js", ".mjs", ".svg", ".txt", ".md", ".html"}
)


def is_text_key(key: str) -> bool:
    """Check whether an asset key holds text content."""
    return Path(key).suffix.lower() in TEXT_EXTENSIONS


class ThemeFileSystem:
    """In-memory view of a local theme directory.

    Usage:
        fs = ThemeFileSystem(Path("my-theme"))
        await fs.load()
        fs.files["templates/index.json"].checksum
        await fs.read("templates/index.json")  # refreshes the checksum
    """

    def __init__(self, root: Path, ignore: IgnorePatterns | None = None) -> None:
        """Initialize the filesystem.

        Args:
            root: Theme root directory.
            ignore: Patterns of keys to skip. Defaults to the built-in
                patterns plus the root's .shopifyignore file.
        """
        self.root = Path(root).resolve()
        if ignore is None:
            ignore = IgnorePatterns()
            ignore.load_from_file(self.root / IGNORE_FILE_NAME)
        self._ignore = ignore
        self.files: dict[str, Asset] = {}

    def is_ignored(self, key: str) -> bool:
        """Check whether a key matches the ignore patterns."""
        return self._ignore.should_ignore(key)

    def _path_for(self, key: str) -> Path:
        path = (self.root / key).resolve()
        if self.root not in path.parents:
            raise ValueError(f"Asset key escapes theme root: {key}")
        return path

    def _scan_keys(self) -> list[str]:
        keys: list[str] = []
        for directory in THEME_DIRECTORIES:
            base = self.root / directory
            if not base.is_dir():
                continue
            for root_str, dirs, filenames in os.walk(base):
                dirs.sort()
                for filename in sorted(filenames):
                    path = Path(root_str) / filename
                    if path.is_symlink():
                        continue
                    key = path.relative_to(self.root).as_posix()
                    if not self._ignore.should_ignore(key):
                        keys.append(key)
        return keys

    def _read_from_disk(self, key: str) -> Asset | None:
        path = self._path_for(key)
        try:
            raw = path.read_bytes()
        except FileNotFoundError:
            return None

        if is_text_key(key):
            try:
                value = raw.decode("utf-8")
            except UnicodeDecodeError:
                logger.debug(f"{key} is not valid UTF-8, storing as attachment")
            else:
                return Asset(key=key, checksum=compute_checksum(key, value), value=value)

        attachment = base64.b64encode(raw).decode("ascii")
        return Asset(key=key, checksum=compute_checksum(key, raw), attachment=attachment)

    def _write_to_disk(self, asset: Asset) -> None:
        path = self._path_for(asset.key)
        path.parent.mkdir(parents=True, exist_ok=True)
        if asset.attachment is not None:
            path.write_bytes(base64.b64decode(asset.attachment))
        else:
            path.write_text(asset.value or "", encoding="utf-8")

    def _delete_from_disk(self, key: str) -> None:
        self._path_for(key).unlink(missing_ok=True)

    async def load(self) -> ThemeFileSystem:
        """Scan the theme directory and record every asset's checksum."""
        self.root.mkdir(parents=True, exist_ok=True)
        keys = await asyncio.to_thread(self._scan_keys)

        files: dict[str, Asset] = {}
        for key in keys:
            asset = await asyncio.to_thread(self._read_from_disk, key)
            if asset is not None:
                files[key] = asset
        self.files = files

        logger.debug(f"Loaded {len(files)} local assets from {self.root}")
        return self

    async def read(self, key: str) -> str | None:
        """Read an asset from disk and refresh its recorded checksum.

        Returns:
            Text value or base64 attachment, or None if the file is absent
            or ignored.
        """
        if self.is_ignored(key):
            logger.debug(f"Not reading ignored asset {key}")
            return None
        asset = await asyncio.to_thread(self._read_from_disk, key)
        if asset is None:
            self.files.pop(key, None)
            return None
        self.files[key] = asset
        return asset.value if asset.value is not None else asset.attachment

    async def write(self, asset: Asset) -> None:
        """Write an asset to disk and record it. Ignored keys are skipped."""
        if self.is_ignored(asset.key):
            logger.debug(f"Not writing ignored asset {asset.key}")
            return
        await asyncio.to_thread(self._write_to_disk, asset)
        if not asset.checksum:
            if asset.attachment is not None:
                asset.checksum = compute_attachment_checksum(asset.attachment)
            else:
                asset.checksum = compute_checksum(asset.key, asset.value or "")
        self.files[asset.key] = asset

    async def delete(self, key: str) -> None:
        """Delete an asset from disk. Succeeds if it is already absent.

        Ignored keys are left alone.
        """
        if self.is_ignored(key):
            logger.debug(f"Not deleting ignored asset {key}")
            return
        await asyncio.to_thread(self._delete_from_disk, key)
        self.files.pop(key, None)
