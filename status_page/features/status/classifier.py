"""Map a probe's HTTP outcome onto a status level."""

from __future__ import annotations

from .levels import StatusLevel

DEGRADED_RESPONSE_TIME_MS = 2000

# Probes that could not connect or timed out report this code.
UNREACHABLE_STATUS_CODE = 0


def classify_response(
    status_code: int,
    response_time_ms: float,
    *,
    degraded_threshold_ms: int = DEGRADED_RESPONSE_TIME_MS,
) -> StatusLevel:
    """Classify one probe response.

    Rules, first match wins:
        1. 5xx or unreachable (0) -> major_outage
        2. 4xx other than 404 -> partial_outage
        3. slower than the degraded threshold -> degraded
        4. otherwise -> operational

    A 404 counts as a reachable service.
    """
    if status_code >= 500 or status_code == UNREACHABLE_STATUS_CODE:
        return StatusLevel.MAJOR_OUTAGE
    if 400 <= status_code <= 499 and status_code != 404:
        return StatusLevel.PARTIAL_OUTAGE
    if response_time_ms > degraded_threshold_ms:
        return StatusLevel.DEGRADED
    return StatusLevel.OPERATIONAL
