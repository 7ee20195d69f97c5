"""CLI command modules."""

from status_page.cli.commands import checks, database, server

__all__ = ["checks", "database", "server"]
