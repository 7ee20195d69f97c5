"""Database management commands.

Example:bash
    # Verify connectivity and create missing tables
    status-page db init

    # Apply Alembic migrations
    status-page db upgrade
"""

from pathlib import Path
import sys

import click

from status_page.cli.utils import coro, error, info, success
from status_page.core.settings import get_db_settings
from status_page.infra.database import Database

ALEMBIC_INI = Path("alembic.ini")


@click.group(name="db")
def db() -> None:
    """Database management commands."""


@db.command()
@coro
async def init() -> None:
    """Verify database connectivity and create all tables."""
    settings = get_db_settings()
    database = Database.from_settings(settings)
    info(f"Connecting to {database.dialect} database...")

    try:
        await database.connect(
            attempts=settings.startup_retry_attempts,
            delay=settings.startup_retry_delay,
        )
        await database.create_all()
        success("Database tables created")
    except Exception as e:
        error(f"Database initialization failed: {e}")
        sys.exit(1)
    finally:
        await database.dispose()


@db.command()
@click.option("--revision", default="head", help="Target revision")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=ALEMBIC_INI,
    show_default=True,
    help="Path to alembic.ini",
)
def upgrade(revision: str, config_path: Path) -> None:
    """Apply migrations up to REVISION."""
    from alembic import command
    from alembic.config import Config

    if not config_path.exists():
        error(f"Alembic config not found: {config_path}")
        sys.exit(1)

    info(f"Upgrading database to {revision}...")
    command.upgrade(Config(str(config_path)), revision)
    success("Migrations applied")
