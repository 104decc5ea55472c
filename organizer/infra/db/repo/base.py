"""Base repository with shared Database handle and helpers."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Mapping, Sequence

from organizer.infra.db.connection import Database


class BaseRepo:
    """Base for resource repos: shared Database and _now_iso()."""

    def __init__(self, db: Database) -> None:
        self._db = db

    def _now_iso(self) -> str:
        return datetime.now(timezone.utc).isoformat()

    @staticmethod
    def _set_clause(changes: Mapping[str, Any], allowed: Sequence[str]) -> tuple[str, list[Any]]:
        """Build "a = ?, b = ?" for the whitelisted columns present in changes."""
        cols = [c for c in allowed if c in changes]
        return ", ".join(f"{c} = ?" for c in cols), [changes[c] for c in cols]
