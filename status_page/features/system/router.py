"""Service health probes and the Prometheus scrape endpoint.

Endpoints:
    GET /health        - Liveness, no dependencies touched
    GET /health/ready  - Readiness, runs SELECT 1 against the database
    GET /metrics       - Prometheus exposition
"""

from __future__ import annotations

from datetime import UTC, datetime
import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from sqlalchemy.exc import SQLAlchemyError

from status_page.core.dependencies import DatabaseDep
from status_page.core.exceptions import ServiceUnavailableException
from status_page.core.schemas.error import ProblemDetail
from status_page.core.settings import AppSettings, get_app_settings
from status_page.infra.metrics import REGISTRY

from .schemas import LivenessResponse, ReadinessResponse

router = APIRouter(tags=["observability"])
logger = logging.getLogger(__name__)


@router.get("/health", response_model=LivenessResponse, summary="Liveness probe")
async def liveness(
    settings: Annotated[AppSettings, Depends(get_app_settings)],
) -> LivenessResponse:
    return LivenessResponse(
        service=settings.service_name,
        version=settings.version,
        timestamp=datetime.now(UTC),
    )


@router.get(
    "/health/ready",
    response_model=ReadinessResponse,
    summary="Readiness probe",
    responses={503: {"description": "Database unavailable", "model": ProblemDetail}},
)
async def readiness(db: DatabaseDep) -> ReadinessResponse:
    try:
        await db.ping()
    except (SQLAlchemyError, OSError) as exc:
        logger.warning("Readiness check failed: database unreachable", exc_info=True)
        raise ServiceUnavailableException(
            detail="Database unavailable",
            type="database-unavailable",
            extra={"ready": False, "checks": {"database": False}},
        ) from exc

    return ReadinessResponse(
        ready=True,
        checks={"database": True},
        timestamp=datetime.now(UTC),
    )


@router.get("/metrics", include_in_schema=False)
async def metrics() -> Response:
    return Response(
        content=generate_latest(REGISTRY),
        media_type=CONTENT_TYPE_LATEST,
        headers={"Cache-Control": "no-cache, no-store, must-revalidate"},
    )
