"""Utility modules: date formatting and partial-update helpers."""

from status_page.utils.updates import UpdateResult, apply_updates

__all__ = [
    "UpdateResult",
    "apply_updates",
]
