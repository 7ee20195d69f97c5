"""One scheduled check pass: probe, compare, persist, purge."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING
import uuid

from status_page.core.services import BaseService
from status_page.features.status.detector import detect_status_changes
from status_page.features.status.repository import (
    StatusCheckRepository,
    get_status_check_repository,
)
from status_page.infra.logging import remove_from_log_context, set_log_context
from status_page.infra.metrics import status_changes_total

if TYPE_CHECKING:
    from collections.abc import Callable

    from sqlalchemy.ext.asyncio import AsyncSession

    from status_page.features.status.checker import HealthChecker
    from status_page.features.status.results import CheckResult, StatusChange


@dataclass(slots=True)
class CheckPassResult:
    timestamp: datetime
    results: list[CheckResult]
    changes: list[StatusChange] = field(default_factory=list)
    purged: int = 0


class CheckPassService(BaseService):
    """Run one pass and commit it.

    Order matters: previous statuses are read before the new results are
    saved, so changes compare against the last pass. The session is
    committed here because the pass is its own unit of work.
    """

    def __init__(
        self,
        session: AsyncSession,
        checker: HealthChecker,
        *,
        retention_days: int = 90,
        repository: StatusCheckRepository | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        super().__init__()
        self._session = session
        self._checker = checker
        self._retention = timedelta(days=retention_days)
        self._repository = repository or get_status_check_repository()
        self._clock = clock or (lambda: datetime.now(UTC))

    async def run(self) -> CheckPassResult:
        pass_id = uuid.uuid4().hex[:12]
        set_log_context(check_pass=pass_id)
        try:
            return await self._run()
        finally:
            remove_from_log_context("check_pass")

    async def _run(self) -> CheckPassResult:
        self.logger.info("Starting health checks")

        results = await self._checker.run_checks()
        previous = await self._repository.get_latest_statuses(self._session)
        changes = detect_status_changes(previous, results)

        timestamp = self._clock()
        await self._repository.save_results(self._session, results, timestamp)
        purged = await self._repository.purge_older_than(self._session, timestamp - self._retention)
        await self._session.commit()

        for change in changes:
            status_changes_total.labels(component=change.component.value).inc()

        self.logger.info(
            "Health checks completed",
            extra={
                "results": len(results),
                "changes": len(changes),
                "purged": purged,
            },
        )
        if changes:
            self.logger.info(
                "Status changes detected",
                extra={
                    "changes": [
                        f"{c.component}:{c.previous_status}->{c.new_status}" for c in changes
                    ]
                },
            )
        return CheckPassResult(timestamp=timestamp, results=results, changes=changes, purged=purged)
