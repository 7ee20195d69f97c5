"""Unit tests for status change detection."""

from __future__ import annotations

from status_page.features.status.detector import detect_status_changes
from status_page.features.status.levels import ComponentType, StatusLevel
from status_page.features.status.results import CheckResult


def _result(component: ComponentType, status: StatusLevel) -> CheckResult:
    return CheckResult(component=component, status=status, response_time_ms=100, status_code=200)


class TestDetectStatusChanges:
    def test_no_previous_and_healthy_yields_nothing(self):
        results = [_result(c, StatusLevel.OPERATIONAL) for c in ComponentType]
        assert detect_status_changes({}, results) == []

    def test_no_previous_and_unhealthy_compares_against_operational(self):
        changes = detect_status_changes({}, [_result(ComponentType.API, StatusLevel.MAJOR_OUTAGE)])

        assert len(changes) == 1
        assert changes[0].component is ComponentType.API
        assert changes[0].previous_status is StatusLevel.OPERATIONAL
        assert changes[0].new_status is StatusLevel.MAJOR_OUTAGE

    def test_recovery_is_a_change(self):
        previous = {ComponentType.CACHE: StatusLevel.DEGRADED}
        changes = detect_status_changes(previous, [_result(ComponentType.CACHE, StatusLevel.OPERATIONAL)])

        assert [(c.previous_status, c.new_status) for c in changes] == [
            (StatusLevel.DEGRADED, StatusLevel.OPERATIONAL)
        ]

    def test_unchanged_components_are_ignored(self):
        previous = {
            ComponentType.API: StatusLevel.OPERATIONAL,
            ComponentType.AUTH: StatusLevel.PARTIAL_OUTAGE,
        }
        results = [
            _result(ComponentType.API, StatusLevel.OPERATIONAL),
            _result(ComponentType.AUTH, StatusLevel.PARTIAL_OUTAGE),
            _result(ComponentType.STORAGE, StatusLevel.DEGRADED),
        ]

        changes = detect_status_changes(previous, results)
        assert [c.component for c in changes] == [ComponentType.STORAGE]
