"""Human-readable date formatting used by emails and response schemas.

All helpers accept aware datetimes or ISO-8601 strings. Naive values are
treated as UTC.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from datetime import UTC, datetime, timedelta
from typing import TypeVar

T = TypeVar("T")

DateLike = datetime | str


def _coerce(value: DateLike) -> datetime:
    if isinstance(value, str):
        value = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}{'' if count == 1 else 's'}"


def _hour12(value: datetime) -> str:
    hour = value.hour % 12 or 12
    return f"{hour}:{value.minute:02d} {'AM' if value.hour < 12 else 'PM'}"


def format_date(value: DateLike) -> str:
    """``Jan 5, 2025``"""
    d = _coerce(value)
    return f"{d:%b} {d.day}, {d.year}"


def format_time(value: DateLike) -> str:
    """``3:04 PM``"""
    return _hour12(_coerce(value))


def format_date_time(value: DateLike) -> str:
    """``Jan 5, 2025 3:04 PM``"""
    d = _coerce(value)
    return f"{format_date(d)} {_hour12(d)}"


def format_day_header(value: DateLike, *, now: datetime | None = None) -> str:
    """``Today``, ``Yesterday`` or ``January 5, 2025``."""
    d = _coerce(value)
    today = _coerce(now or datetime.now(UTC)).date()
    if d.date() == today:
        return "Today"
    if d.date() == today - timedelta(days=1):
        return "Yesterday"
    return f"{d:%B} {d.day}, {d.year}"


def format_relative_time(value: DateLike, *, now: datetime | None = None) -> str:
    """Approximate distance from ``now``, e.g. ``5 minutes ago`` or ``in about 2 hours``."""
    d = _coerce(value)
    reference = _coerce(now or datetime.now(UTC))
    seconds = (reference - d).total_seconds()
    future = seconds < 0
    seconds = abs(seconds)

    minutes = round(seconds / 60)
    if seconds < 30:
        phrase = "less than a minute"
    elif minutes < 45:
        phrase = _plural(max(minutes, 1), "minute")
    elif minutes < 90:
        phrase = "about 1 hour"
    elif minutes < 24 * 60:
        phrase = f"about {_plural(round(minutes / 60), 'hour')}"
    elif minutes < 30 * 24 * 60:
        phrase = _plural(round(minutes / (24 * 60)), "day")
    elif minutes < 365 * 24 * 60:
        months = round(minutes / (30 * 24 * 60))
        phrase = "about 1 month" if months <= 1 else _plural(months, "month")
    else:
        years = int(minutes // (365 * 24 * 60))
        phrase = "about 1 year" if years == 1 else f"over {_plural(years, 'year')}"

    return f"in {phrase}" if future else f"{phrase} ago"


def format_duration(start: DateLike, end: DateLike | None = None) -> str:
    """Elapsed time between ``start`` and ``end`` (default: now).

    Whole days win (``2 days``); otherwise ``3h 15m``, ``1 hour`` or
    ``12 minutes``.
    """
    start_dt = _coerce(start)
    end_dt = _coerce(end) if end is not None else datetime.now(UTC)

    total_minutes = int((end_dt - start_dt).total_seconds() // 60)
    hours, minutes = divmod(max(total_minutes, 0), 60)
    days = hours // 24

    if days > 0:
        return _plural(days, "day")
    if hours > 0:
        if minutes:
            return f"{hours}h {minutes}m"
        return _plural(hours, "hour")
    return _plural(minutes, "minute")


def group_by_day(
    items: Iterable[T],
    key: Callable[[T], DateLike | None],
) -> dict[str, list[T]]:
    """Group items by the UTC day of ``key(item)``, keeping input order.

    Items whose key is None are skipped.
    """
    groups: dict[str, list[T]] = {}
    for item in items:
        value = key(item)
        if value is None:
            continue
        day = _coerce(value).astimezone(UTC).date().isoformat()
        groups.setdefault(day, []).append(item)
    return groups


__all__ = [
    "format_date",
    "format_date_time",
    "format_day_header",
    "format_duration",
    "format_relative_time",
    "format_time",
    "group_by_day",
]
