"""Database infrastructure: engine and session lifecycle."""

from __future__ import annotations

from .session import Database

__all__ = ["Database"]
