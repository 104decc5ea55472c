"""
Five-field cron expressions ("minute hour day month weekday").

Parsing is local; finding the next matching wall-clock moment is delegated to
arq's `next_cron`. Supported syntax per field: "*", numbers, lists ("1,15"),
ranges ("1-5") and steps ("*/15", "8-18/2"). Weekday 0 and 7 both mean Sunday.
When both day-of-month and weekday are restricted, both must match.
Expressions that can never fire (such as "0 0 31 2 *") are rejected.
"""
from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, datetime
from functools import lru_cache
from typing import Optional

from arq.cron import next_cron

from organizer.domain.common.errors import ValidationError
from organizer.domain.common.time import ensure_aware

# (name, min, max) in expression order
_FIELDS = (
    ("minute", 0, 59),
    ("hour", 0, 23),
    ("day", 1, 31),
    ("month", 1, 12),
    ("weekday", 0, 7),
)

# the Gregorian calendar repeats every 400 years, weekdays included
_CALENDAR_CYCLE_YEARS = 400


def _parse_field(raw: str, name: str, lo: int, hi: int) -> Optional[set[int]]:
    if raw == "*":
        return None
    values: set[int] = set()
    for part in raw.split(","):
        step = 1
        if "/" in part:
            part, step_raw = part.split("/", 1)
            if not step_raw.isdigit() or int(step_raw) <= 0:
                raise ValidationError(f"Invalid step '{step_raw}' in cron {name} field.")
            step = int(step_raw)
        if part == "*":
            start, end = lo, hi
        elif "-" in part:
            a, b = part.split("-", 1)
            if not (a.isdigit() and b.isdigit()):
                raise ValidationError(f"Invalid range '{part}' in cron {name} field.")
            start, end = int(a), int(b)
        elif part.isdigit():
            start = end = int(part)
            if step != 1:
                end = hi
        else:
            raise ValidationError(f"Invalid value '{part}' in cron {name} field.")
        if start < lo or end > hi or start > end:
            raise ValidationError(f"Cron {name} field out of range: '{raw}' (allowed {lo}-{hi}).")
        values.update(range(start, end + 1, step))
    return values


@lru_cache(maxsize=None)
def _has_matching_day(
    month: Optional[frozenset[int]],
    day: Optional[frozenset[int]],
    weekday: Optional[frozenset[int]],
) -> bool:
    """True if some calendar date satisfies the month, day and weekday fields together."""
    months = sorted(month) if month is not None else range(1, 13)
    for year in range(2000, 2000 + _CALENDAR_CYCLE_YEARS):
        for m in months:
            last = calendar.monthrange(year, m)[1]
            days = sorted(day) if day is not None else range(1, last + 1)
            for d in days:
                if d > last:
                    break
                if weekday is None or date(year, m, d).weekday() in weekday:
                    return True
    return False


@dataclass(frozen=True)
class CronSchedule:
    expression: str
    minute: Optional[frozenset[int]]
    hour: Optional[frozenset[int]]
    day: Optional[frozenset[int]]
    month: Optional[frozenset[int]]
    weekday: Optional[frozenset[int]]  # Python convention: Monday=0 .. Sunday=6

    @classmethod
    def parse(cls, expression: str) -> "CronSchedule":
        parts = (expression or "").split()
        if len(parts) != len(_FIELDS):
            raise ValidationError(f"Cron expression must have 5 fields, got '{expression}'.")

        parsed = {
            name: _parse_field(raw, name, lo, hi)
            for raw, (name, lo, hi) in zip(parts, _FIELDS)
        }
        weekday = parsed["weekday"]
        if weekday is not None:
            # cron counts Sunday as 0 (or 7); datetime.weekday() counts Monday as 0
            weekday = {(d - 1) % 7 for d in weekday}

        def freeze(v: Optional[set[int]]) -> Optional[frozenset[int]]:
            return frozenset(v) if v is not None else None

        schedule = cls(
            expression=" ".join(parts),
            minute=freeze(parsed["minute"]),
            hour=freeze(parsed["hour"]),
            day=freeze(parsed["day"]),
            month=freeze(parsed["month"]),
            weekday=freeze(weekday),
        )
        schedule.ensure_satisfiable()
        return schedule

    def ensure_satisfiable(self) -> None:
        if not _has_matching_day(self.month, self.day, self.weekday):
            raise ValidationError(f"Cron expression '{self.expression}' never matches a calendar date.")

    def next_after(self, now: datetime) -> datetime:
        """First matching moment strictly after `now`, in now's timezone.

        Raises ValidationError for a schedule without any matching date,
        since the search below would otherwise never end.
        """
        ensure_aware(now)
        self.ensure_satisfiable()
        return next_cron(
            now,
            month=set(self.month) if self.month is not None else None,
            day=set(self.day) if self.day is not None else None,
            weekday=set(self.weekday) if self.weekday is not None else None,
            hour=set(self.hour) if self.hour is not None else None,
            minute=set(self.minute) if self.minute is not None else None,
            second=0,
            microsecond=0,
        )
