"""Compare a fresh check pass against stored statuses."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .levels import StatusLevel
from .results import StatusChange

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from .levels import ComponentType
    from .results import CheckResult


def detect_status_changes(
    previous: Mapping[ComponentType, StatusLevel],
    results: Iterable[CheckResult],
) -> list[StatusChange]:
    """Return one change per component whose status differs from ``previous``.

    A component without a stored status is compared against operational, so a
    first-ever check that is healthy produces no change.
    """
    changes: list[StatusChange] = []
    for result in results:
        before = previous.get(result.component, StatusLevel.OPERATIONAL)
        if before != result.status:
            changes.append(
                StatusChange(
                    component=result.component,
                    previous_status=before,
                    new_status=result.status,
                )
            )
    return changes
