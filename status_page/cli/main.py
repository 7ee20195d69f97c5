"""Main CLI entry point for status-page management commands."""

import click

from status_page.cli.commands import checks, database, server
from status_page.infra.logging import setup_logging


@click.group()
@click.version_option(version="1.0.0", prog_name="status-page")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Status page CLI - run checks, manage the database and serve the API.

    \b
    Command Groups:
      checks     Run check passes and apply retention
      db         Database setup and migrations
      server     Development and production servers

    \b
    Quick Start:
      status-page db init              # Create tables
      status-page checks run           # Probe every component once
      status-page server dev           # Serve the API with auto-reload
    """
    ctx.ensure_object(dict)


cli.add_command(checks.checks)
cli.add_command(database.db)
cli.add_command(server.server)


def main() -> None:
    """Entry point for CLI."""
    setup_logging()
    cli(obj={})


if __name__ == "__main__":
    main()
