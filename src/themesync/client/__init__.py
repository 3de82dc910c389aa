"""Client module - Theme API client, local theme filesystem and sync engine."""
