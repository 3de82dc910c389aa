"""Tests for ignore pattern matching."""

from pathlib import Path

from themesync.client.ignore import IgnorePatterns


class TestIgnorePatterns:
    """Tests for IgnorePatterns.should_ignore."""

    def test_default_patterns(self) -> None:
        """OS and editor files are ignored anywhere."""
        ignore = IgnorePatterns()

        assert ignore.should_ignore("assets/.DS_Store")
        assert ignore.should_ignore("templates/index.json.swp")
        assert not ignore.should_ignore("templates/index.json")

    def test_directory_pattern(self) -> None:
        """A trailing slash ignores the whole directory."""
        ignore = IgnorePatterns(["locales/"])

        assert ignore.should_ignore("locales/en.default.json")
        assert not ignore.should_ignore("sections/locales.liquid")

    def test_glob_pattern(self) -> None:
        """Globs match against the full key."""
        ignore = IgnorePatterns(["templates/*.json"])

        assert ignore.should_ignore("templates/product.json")
        assert not ignore.should_ignore("templates/product.liquid")

    def test_filename_pattern(self) -> None:
        """Bare names match in any directory."""
        ignore = IgnorePatterns(["settings_data.json"])

        assert ignore.should_ignore("config/settings_data.json")

    def test_load_from_file(self, tmp_path: Path) -> None:
        """Comments and blank lines are skipped."""
        ignore_file = tmp_path / ".shopifyignore"
        ignore_file.write_text("# header\n\nconfig/settings_data.json\n")
        ignore = IgnorePatterns()

        ignore.load_from_file(ignore_file)

        assert "config/settings_data.json" in ignore.patterns
        assert "# header" not in ignore.patterns

    def test_load_from_missing_file(self, tmp_path: Path) -> None:
        """A missing file adds nothing."""
        ignore = IgnorePatterns()
        before = ignore.patterns

        ignore.load_from_file(tmp_path / ".shopifyignore")

        assert ignore.patterns == before
