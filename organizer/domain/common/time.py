from __future__ import annotations

from datetime import date, datetime, tzinfo
from typing import Optional


def ensure_aware(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        raise ValueError("datetime must be timezone-aware")
    return dt


def to_iso(dt: datetime) -> str:
    ensure_aware(dt)
    # store as ISO 8601 with offset
    return dt.isoformat()


def from_iso(s: str) -> datetime:
    # "Z" suffix is what browsers send from Date.toISOString()
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"
    return datetime.fromisoformat(s)


def parse_due_date(value: Optional[str], tz: Optional[tzinfo] = None) -> Optional[date]:
    """
    Normalize a stored due date to a calendar date.

    Accepts plain dates ("2025-03-01") and ISO datetimes. Offset-aware
    datetimes are moved into `tz` before the time of day is dropped, so a
    late-evening UTC timestamp lands on the right local day.
    Returns None for empty or unparseable values.
    """
    if not value:
        return None
    raw = value.strip()
    if not raw:
        return None
    try:
        if len(raw) == 10:
            return date.fromisoformat(raw)
        dt = from_iso(raw.replace(" ", "T", 1))
    except ValueError:
        return None
    if dt.tzinfo is not None and tz is not None:
        dt = dt.astimezone(tz)
    return dt.date()


def format_local_date(d: date) -> str:
    """Calendar date as shown to the user (dd.mm.yyyy)."""
    return d.strftime("%d.%m.%Y")
