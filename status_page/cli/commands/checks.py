"""Health check commands.

Example:bash
    # Run one pass and notify subscribers about changes
    status-page checks run

    # Run one pass without sending anything
    status-page checks run --no-notify

    # Drop checks older than the retention window
    status-page checks purge --days 30
"""

from datetime import UTC, datetime, timedelta
import sys

import click
import httpx

from status_page.cli.utils import coro, error, header, info, success, table, warning
from status_page.core.settings import (
    get_app_settings,
    get_db_settings,
    get_notification_settings,
    get_platform_settings,
)
from status_page.features.cron.service import CheckPassService
from status_page.features.notifications.service import build_notification_service
from status_page.features.status.checker import HealthChecker
from status_page.features.status.repository import get_status_check_repository
from status_page.infra.database import Database

STATUS_COLORS = {
    "operational": "green",
    "degraded": "yellow",
    "partial_outage": "yellow",
    "major_outage": "red",
}


@click.group(name="checks")
def checks() -> None:
    """Component health check commands."""


@checks.command()
@click.option(
    "--notify/--no-notify",
    default=True,
    help="Send Slack/Discord/email notifications for detected status changes",
)
@coro
async def run(notify: bool) -> None:
    """Run one check pass against the platform and store the results."""
    platform = get_platform_settings()
    db_settings = get_db_settings()
    database = Database.from_settings(db_settings)

    info(f"Checking components at {platform.base_url}")
    try:
        async with httpx.AsyncClient() as client:
            checker = HealthChecker.from_settings(client, platform)
            async with database.session() as session:
                outcome = await CheckPassService(
                    session, checker, retention_days=db_settings.retention_days
                ).run()

            header(f"Results at {outcome.timestamp:%Y-%m-%d %H:%M:%S} UTC")
            table(
                ["COMPONENT", "STATUS", "RESPONSE (ms)", "HTTP"],
                [
                    [r.component, r.status, r.response_time_ms, r.status_code or "-"]
                    for r in outcome.results
                ],
            )

            if not outcome.changes:
                success("No status changes")
                return

            for change in outcome.changes:
                click.secho(
                    f"  {change.component}: {change.previous_status} -> {change.new_status}",
                    fg=STATUS_COLORS.get(change.new_status, "white"),
                )

            if not notify:
                warning("Notifications skipped (--no-notify)")
                return

            notifier = build_notification_service(
                database=database,
                client=client,
                app_settings=get_app_settings(),
                settings=get_notification_settings(),
            )
            await notifier.notify_status_changes(outcome.changes)
            success(f"Notified about {len(outcome.changes)} status change(s)")
    except Exception as e:
        error(f"Check pass failed: {e}")
        sys.exit(1)
    finally:
        await database.dispose()


@checks.command()
@click.option(
    "--days",
    type=int,
    default=None,
    help="Keep this many days of checks (default: DB_RETENTION_DAYS)",
)
@coro
async def purge(days: int | None) -> None:
    """Delete status checks older than the retention window."""
    db_settings = get_db_settings()
    if days is None:
        days = db_settings.retention_days
    if days < 1:
        error("--days must be at least 1")
        sys.exit(1)

    cutoff = datetime.now(UTC) - timedelta(days=days)
    database = Database.from_settings(db_settings)
    try:
        async with database.session() as session:
            removed = await get_status_check_repository().purge_older_than(session, cutoff)
            await session.commit()
        success(f"Removed {removed} check(s) older than {days} day(s)")
    finally:
        await database.dispose()
