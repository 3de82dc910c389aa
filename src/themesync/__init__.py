"""themesync - Keep a local theme directory and a remote theme in sync."""

__version__ = "0.1.0"
