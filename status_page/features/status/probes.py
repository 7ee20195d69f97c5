"""Per-component HTTP probes against the monitored platform.

Each probe issues one request, times it and turns the response into a
``CheckResult``. Probes never raise for transport problems: an unreachable
or timed-out endpoint is reported as a major outage with status code 0.

Custom probes only need to satisfy ``ComponentProbe``:

    >>> class QueueProbe:
    ...     component = ComponentType.API
    ...     async def check(self, client: httpx.AsyncClient) -> CheckResult: ...
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Any, ClassVar, Protocol, runtime_checkable

import httpx

from .classifier import (
    DEGRADED_RESPONSE_TIME_MS,
    UNREACHABLE_STATUS_CODE,
    classify_response,
)
from .levels import ComponentType, StatusLevel
from .results import CheckResult

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class ProbeResponse:
    """What a probe observed: HTTP code, latency and parsed JSON body if any."""

    status_code: int
    response_time_ms: int
    body: dict[str, Any] | None


@runtime_checkable
class ComponentProbe(Protocol):
    @property
    def component(self) -> ComponentType: ...

    async def check(self, client: httpx.AsyncClient) -> CheckResult: ...


def _nested(body: dict[str, Any] | None, *keys: str) -> Any:
    """Walk nested dicts, returning None as soon as a level is missing."""
    current: Any = body
    for key in keys:
        if not isinstance(current, dict):
            return None
        current = current.get(key)
    return current


class HttpProbe:
    """Base probe: one request to ``base_url + path``, classified by default rules."""

    component: ClassVar[ComponentType]
    method: ClassVar[str] = "GET"
    path: ClassVar[str] = "/"

    def __init__(
        self,
        base_url: str,
        *,
        headers: dict[str, str] | None = None,
        timeout: float = 10.0,
        degraded_threshold_ms: int = DEGRADED_RESPONSE_TIME_MS,
    ) -> None:
        self.url = f"{base_url.rstrip('/')}{self.path}"
        self.headers = headers or {}
        self.timeout = timeout
        self.degraded_threshold_ms = degraded_threshold_ms

    async def check(self, client: httpx.AsyncClient) -> CheckResult:
        """Probe once; ``timeout`` bounds the whole exchange including the body."""
        start = time.perf_counter()
        try:
            async with asyncio.timeout(self.timeout):
                response = await client.request(
                    self.method,
                    self.url,
                    headers=self.headers,
                    timeout=self.timeout,
                )
        except (httpx.HTTPError, TimeoutError) as exc:
            elapsed_ms = round((time.perf_counter() - start) * 1000)
            if isinstance(exc, TimeoutError):
                error = f"Timed out after {self.timeout:g}s"
            else:
                error = str(exc) or type(exc).__name__
            logger.warning(
                "Probe request failed",
                extra={"component": self.component.value, "url": self.url, "error": error},
            )
            return CheckResult(
                component=self.component,
                status=StatusLevel.MAJOR_OUTAGE,
                response_time_ms=elapsed_ms,
                status_code=UNREACHABLE_STATUS_CODE,
                details={"error": error},
            )

        elapsed_ms = round((time.perf_counter() - start) * 1000)
        observed = ProbeResponse(
            status_code=response.status_code,
            response_time_ms=elapsed_ms,
            body=self._parse_body(response),
        )
        status, details = self.evaluate(observed)
        return CheckResult(
            component=self.component,
            status=status,
            response_time_ms=elapsed_ms,
            status_code=response.status_code,
            details=details,
        )

    def _parse_body(self, response: httpx.Response) -> dict[str, Any] | None:
        if self.method == "HEAD" or not response.content:
            return None
        try:
            body = response.json()
        except ValueError:
            return None
        return body if isinstance(body, dict) else None

    def classify(self, observed: ProbeResponse) -> StatusLevel:
        return classify_response(
            observed.status_code,
            observed.response_time_ms,
            degraded_threshold_ms=self.degraded_threshold_ms,
        )

    def evaluate(self, observed: ProbeResponse) -> tuple[StatusLevel, dict[str, Any]]:
        """Return the status and details to record. Subclasses refine this."""
        return self.classify(observed), {}


class ApiProbe(HttpProbe):
    component = ComponentType.API
    path = "/api/health"

    def evaluate(self, observed: ProbeResponse) -> tuple[StatusLevel, dict[str, Any]]:
        return self.classify(observed), observed.body or {}


class DatabaseProbe(HttpProbe):
    component = ComponentType.DATABASE
    path = "/api/health/ready"

    def evaluate(self, observed: ProbeResponse) -> tuple[StatusLevel, dict[str, Any]]:
        details = observed.body or {}
        if _nested(observed.body, "checks", "database", "connected") is False:
            return StatusLevel.MAJOR_OUTAGE, details
        return self.classify(observed), details


class CacheProbe(HttpProbe):
    """Reads the cache sub-check of the platform health report.

    The HTTP status of the health endpoint itself is not classified here.
    """

    component = ComponentType.CACHE
    path = "/api/health"

    def evaluate(self, observed: ProbeResponse) -> tuple[StatusLevel, dict[str, Any]]:
        cache = _nested(observed.body, "checks", "cache")
        cache_status = cache.get("status") if isinstance(cache, dict) else None
        if cache_status == "unhealthy":
            status = StatusLevel.MAJOR_OUTAGE
        elif cache_status == "degraded":
            status = StatusLevel.DEGRADED
        else:
            status = StatusLevel.OPERATIONAL
        return status, {"cache": cache if isinstance(cache, dict) and cache else {}}


class AuthProbe(HttpProbe):
    component = ComponentType.AUTH
    method = "HEAD"
    path = "/sign-in"


class PaymentsProbe(HttpProbe):
    component = ComponentType.PAYMENTS
    path = "/api/health/system"

    def evaluate(self, observed: ProbeResponse) -> tuple[StatusLevel, dict[str, Any]]:
        if _nested(observed.body, "environment", "stripeConfigured") is False:
            return StatusLevel.PARTIAL_OUTAGE, {"stripeConfigured": False}
        return self.classify(observed), observed.body or {}


class StorageProbe(HttpProbe):
    component = ComponentType.STORAGE
    method = "HEAD"
    path = "/"


DEFAULT_PROBES: tuple[type[HttpProbe], ...] = (
    ApiProbe,
    DatabaseProbe,
    CacheProbe,
    AuthProbe,
    PaymentsProbe,
    StorageProbe,
)


def build_default_probes(
    base_url: str,
    *,
    headers: dict[str, str] | None = None,
    timeout: float = 10.0,
    degraded_threshold_ms: int = DEGRADED_RESPONSE_TIME_MS,
) -> list[HttpProbe]:
    """Instantiate one probe per component, in ``ComponentType`` order."""
    return [
        probe_cls(
            base_url,
            headers=headers,
            timeout=timeout,
            degraded_threshold_ms=degraded_threshold_ms,
        )
        for probe_cls in DEFAULT_PROBES
    ]
