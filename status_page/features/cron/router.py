"""Scheduled trigger for check passes.

Endpoints:
    GET|POST /cron/check - Run one pass; notifications are sent after the response
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, BackgroundTasks, Depends

from status_page.core.dependencies import (
    HttpClientDep,
    NotifierDep,
    SessionDep,
    verify_cron_secret,
)
from status_page.core.settings import (
    DatabaseSettings,
    PlatformSettings,
    get_db_settings,
    get_platform_settings,
)
from status_page.features.status.checker import HealthChecker

from .schemas import CheckResultSummary, CheckRunResponse, StatusChangeSummary
from .service import CheckPassService

router = APIRouter(prefix="/cron", tags=["cron"])
logger = logging.getLogger(__name__)


@router.api_route(
    "/check",
    methods=["GET", "POST"],
    response_model=CheckRunResponse,
    summary="Run a check pass",
    description=(
        "Requires `Authorization: Bearer <cron secret>` when a secret is configured. "
        "Probes every component, records the results and notifies on status changes."
    ),
    dependencies=[Depends(verify_cron_secret)],
    responses={401: {"description": "Missing or wrong cron secret"}},
)
async def run_check(
    session: SessionDep,
    client: HttpClientDep,
    notifier: NotifierDep,
    background_tasks: BackgroundTasks,
    platform: Annotated[PlatformSettings, Depends(get_platform_settings)],
    db_settings: Annotated[DatabaseSettings, Depends(get_db_settings)],
) -> CheckRunResponse:
    checker = HealthChecker.from_settings(client, platform)
    service = CheckPassService(session, checker, retention_days=db_settings.retention_days)
    outcome = await service.run()

    if outcome.changes:
        background_tasks.add_task(notifier.notify_status_changes, outcome.changes)

    return CheckRunResponse(
        timestamp=outcome.timestamp,
        results=[
            CheckResultSummary(
                component=r.component, status=r.status, response_time_ms=r.response_time_ms
            )
            for r in outcome.results
        ],
        changes=len(outcome.changes),
        status_changes=[
            StatusChangeSummary(
                component=c.component,
                previous_status=c.previous_status,
                new_status=c.new_status,
            )
            for c in outcome.changes
        ],
    )
