"""Partial updates with change tracking for PATCH endpoints.

Example:
    result = apply_updates(maintenance, payload, fields=["status"])
    if result.applied:
        logger.info("Maintenance updated", extra={"changes": result.changes})
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


@dataclass
class UpdateResult:
    """Which fields changed and their new values."""

    applied: bool = False
    changes: dict[str, Any] = field(default_factory=dict)


def apply_updates(
    entity: Any,
    payload: Mapping[str, Any] | Any,
    *,
    fields: list[str] | None = None,
    skip_none: bool = True,
) -> UpdateResult:
    """Copy explicitly-set payload fields onto ``entity`` when they differ.

    Args:
        entity: SQLAlchemy model (or any attribute bag) to mutate.
        payload: Pydantic model (only ``exclude_unset`` fields are used) or mapping.
        fields: Restrict updates to these names; defaults to every provided field.
        skip_none: Ignore None values instead of writing them.
    """
    if hasattr(payload, "model_dump"):
        values = payload.model_dump(exclude_unset=True)
    else:
        values = dict(payload)

    names = fields if fields is not None else list(values)
    changes: dict[str, Any] = {}

    for name in names:
        if name not in values:
            continue
        new_value = values[name]
        if skip_none and new_value is None:
            continue
        if getattr(entity, name, None) != new_value:
            setattr(entity, name, new_value)
            changes[name] = new_value

    return UpdateResult(applied=bool(changes), changes=changes)


__all__ = ["UpdateResult", "apply_updates"]
