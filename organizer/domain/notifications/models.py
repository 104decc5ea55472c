from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

from organizer.constants import TRIGGER_EVENING, TRIGGER_MORNING


class TimeOfDay(str, Enum):
    MORNING = TRIGGER_MORNING
    EVENING = TRIGGER_EVENING

    @property
    def greeting(self) -> str:
        return _GREETINGS[self]

    @classmethod
    def parse(cls, value: Union["TimeOfDay", str, None]) -> Optional["TimeOfDay"]:
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return None


_GREETINGS = {
    TimeOfDay.MORNING: "🌅 <b>Good morning!</b>",
    TimeOfDay.EVENING: "🌙 <b>Good evening!</b>",
}


@dataclass(frozen=True)
class SchedulerStatus:
    enabled: bool
    active_jobs: list[str]
    timezone: str
    schedules: dict[str, str] = field(default_factory=dict)
