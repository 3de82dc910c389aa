"""Ignore patterns for theme files.

This module provides:
- IgnorePatterns: Handles gitignore-style pattern matching on asset keys
- DEFAULT_IGNORE_PATTERNS: Common patterns to ignore
"""

from __future__ import annotations

import fnmatch
from pathlib import Path

IGNORE_FILE_NAME = ".shopifyignore"

# Editor and OS droppings that never belong in a theme
DEFAULT_IGNORE_PATTERNS = [
    "**/.DS_Store",
    "**/Thumbs.db",
    "**/*.tmp",
    "**/*.swp",
    "**/*.swo",
    "**/~*",
]


class IgnorePatterns:
    """Handles ignore pattern matching for asset keys."""

    def __init__(self, patterns: list[str] | None = None) -> None:
        """Initialize with patterns.

        Args:
            patterns: List of gitignore-style patterns.
        """
        self._patterns = list(DEFAULT_IGNORE_PATTERNS)
        if patterns:
            self._patterns.extend(patterns)

    @property
    def patterns(self) -> list[str]:
        """Current pattern list."""
        return list(self._patterns)

    def add_pattern(self, pattern: str) -> None:
        """Add an ignore pattern."""
        self._patterns.append(pattern)

    def load_from_file(self, path: Path) -> None:
        """Load patterns from a .shopifyignore file."""
        if path.exists():
            with open(path, encoding="utf-8") as f:
                for line in f:
                    line = line.strip()
                    # Skip comments and empty lines
                    if line and not line.startswith("#"):
                        self._patterns.append(line)

    def should_ignore(self, key: str) -> bool:
        """Check if an asset key should be ignored.

        Args:
            key: Asset key relative to the theme root, using forward slashes.

        Returns:
            True if the key matches any pattern.
        """
        name = key.rsplit("/", 1)[-1]

        for pattern in self._patterns:
            # Directory patterns match everything below them
            if pattern.endswith("/"):
                prefix = pattern.rstrip("/")
                if key == prefix or fnmatch.fnmatch(key, f"{prefix}/*"):
                    return True
            elif "**/" in pattern:
                if fnmatch.fnmatch(key, pattern) or fnmatch.fnmatch(
                    key, pattern.replace("**/", "")
                ):
                    return True
            elif fnmatch.fnmatch(key, pattern) or fnmatch.fnmatch(name, pattern):
                return True

        return False
