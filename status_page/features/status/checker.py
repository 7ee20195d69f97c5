"""Concurrent health checks across all platform components."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from status_page.infra.logging import get_lazy_logger
from status_page.infra.metrics import check_duration_seconds, checks_total

from .classifier import UNREACHABLE_STATUS_CODE
from .levels import ComponentType, StatusLevel
from .probes import ComponentProbe, build_default_probes
from .results import CheckResult

if TYPE_CHECKING:
    from collections.abc import Sequence

    import httpx

    from status_page.core.settings.platform import PlatformSettings

logger = logging.getLogger(__name__)
lazy_logger = get_lazy_logger(__name__)


class HealthChecker:
    """Run every component probe concurrently and collect the results.

    The checker holds no database state; persisting results is the caller's
    job. The HTTP client is injected so tests can swap in
    ``httpx.MockTransport``.

    Example:
        >>> async with httpx.AsyncClient() as client:
        ...     checker = HealthChecker.from_settings(client, get_platform_settings())
        ...     results = await checker.run_checks()
    """

    def __init__(self, client: httpx.AsyncClient, probes: Sequence[ComponentProbe]) -> None:
        self.client = client
        self.probes = list(probes)

    @classmethod
    def from_settings(cls, client: httpx.AsyncClient, settings: PlatformSettings) -> HealthChecker:
        probes = build_default_probes(
            settings.base_url,
            headers=settings.probe_headers(),
            timeout=settings.request_timeout,
            degraded_threshold_ms=settings.degraded_threshold_ms,
        )
        return cls(client, probes)

    async def run_checks(self) -> list[CheckResult]:
        """Probe all components; results follow ``ComponentType`` order."""
        outcomes = await asyncio.gather(
            *(probe.check(self.client) for probe in self.probes),
            return_exceptions=True,
        )

        results: list[CheckResult] = []
        for probe, outcome in zip(self.probes, outcomes, strict=True):
            if isinstance(outcome, BaseException):
                if not isinstance(outcome, Exception):
                    raise outcome
                logger.error(
                    "Probe raised unexpectedly",
                    extra={"component": probe.component.value, "error": str(outcome)},
                    exc_info=outcome,
                )
                outcome = CheckResult(
                    component=probe.component,
                    status=StatusLevel.MAJOR_OUTAGE,
                    response_time_ms=0,
                    status_code=UNREACHABLE_STATUS_CODE,
                    details={"error": str(outcome) or type(outcome).__name__},
                )
            self._record(outcome)
            results.append(outcome)

        order = list(ComponentType)
        results.sort(key=lambda r: order.index(r.component))

        lazy_logger.debug(
            lambda: "Checks complete: "
            + ", ".join(f"{r.component.value}={r.status.value}" for r in results)
        )
        return results

    @staticmethod
    def _record(result: CheckResult) -> None:
        checks_total.labels(component=result.component.value, status=result.status.value).inc()
        check_duration_seconds.labels(component=result.component.value).observe(
            result.response_time_ms / 1000
        )
