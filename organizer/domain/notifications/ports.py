from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Sequence

from organizer.domain.planner.models import Project, Task


class Clock(ABC):
    @abstractmethod
    def now(self) -> datetime: ...


class PlannerReader(ABC):
    """Read side of the planner store used when composing summaries."""

    @abstractmethod
    async def list_projects(self) -> Sequence[Project]: ...

    @abstractmethod
    async def list_tasks(self) -> Sequence[Task]: ...


class MessageSender(ABC):
    @abstractmethod
    async def send_message(self, text: str, **options: Any) -> bool: ...

    @abstractmethod
    async def send_task_summary(self, summary: str, time_of_day: Any) -> bool: ...

    @abstractmethod
    async def send_error_notification(self, error_text: str) -> bool: ...

    @abstractmethod
    async def test_connection(self) -> bool: ...
