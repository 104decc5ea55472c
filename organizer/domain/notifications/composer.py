"""
Task summary composition for scheduled Telegram notifications.

The composer only reads the planner store; it never writes and never raises
to its caller. Dates are compared at day granularity in the clock's timezone.
"""
from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Callable, Optional, Sequence, Union

from aiogram.utils.text_decorations import html_decoration

from organizer.constants import (
    STATUS_IN_PROGRESS,
    STATUS_TODO,
    TASK_PRIORITY_HIGH,
    TASK_PRIORITY_LOW,
    TASK_PRIORITY_NORMAL,
)
from organizer.domain.common.time import format_local_date, parse_due_date
from organizer.domain.notifications import texts
from organizer.domain.notifications.models import TimeOfDay
from organizer.domain.notifications.ports import Clock, PlannerReader
from organizer.domain.planner.models import Project, Task

logger = logging.getLogger(__name__)

PRIORITY_MARKERS = {
    TASK_PRIORITY_HIGH: "🔴 ",
    TASK_PRIORITY_NORMAL: "🟡 ",
    TASK_PRIORITY_LOW: "🟢 ",
}


def priority_marker(priority: Optional[int]) -> str:
    return PRIORITY_MARKERS.get(priority, "")


def due_date_annotation(due: Optional[date], today: date) -> str:
    """
    Relative label for a due date.

    Examples:
        >>> due_date_annotation(date(2025, 3, 1), date(2025, 3, 1))
        '(today)'
        >>> due_date_annotation(date(2025, 2, 27), date(2025, 3, 1))
        '(2 days overdue)'
    """
    if due is None:
        return ""
    if due == today:
        return "(today)"
    if due == today + timedelta(days=1):
        return "(tomorrow)"
    if due < today:
        days = (today - due).days
        return f"({days} day{'s' if days > 1 else ''} overdue)"
    return f"({format_local_date(due)})"


class NotificationComposer:
    def __init__(
        self,
        reader: PlannerReader,
        clock: Clock,
        max_tasks_per_project: Optional[int] = None,
    ) -> None:
        self._reader = reader
        self._clock = clock
        self._max_tasks = max_tasks_per_project
        self._extra_sections: dict[TimeOfDay, Callable[[Sequence[Task], date], str]] = {
            TimeOfDay.EVENING: self._tomorrow_section,
        }

    def today(self) -> date:
        return self._clock.now().date()

    def _due(self, task: Task) -> Optional[date]:
        return parse_due_date(task.due_date, self._clock.now().tzinfo)

    async def generate_task_summary(self) -> str:
        try:
            projects, tasks = await self._load()
        except Exception:
            logger.error("Failed to load projects/tasks for summary", exc_info=True)
            return texts.SUMMARY_ERROR
        return self._compose(projects, tasks, self.today())

    async def generate_time_specific_summary(self, time_of_day: Union[TimeOfDay, str]) -> str:
        try:
            projects, tasks = await self._load()
        except Exception:
            label = time_of_day.value if isinstance(time_of_day, TimeOfDay) else time_of_day
            logger.error(f"Failed to load projects/tasks for {label} summary", exc_info=True)
            return texts.SUMMARY_ERROR

        today = self.today()
        summary = self._compose(projects, tasks, today)

        extra = self._extra_sections.get(TimeOfDay.parse(time_of_day))
        if extra is None:
            return summary
        section = extra(tasks, today)
        if section:
            summary = f"{summary}\n\n{section}"
        return summary

    def overdue_tasks(self, tasks: Sequence[Task], today: date) -> list[Task]:
        out = []
        for task in tasks:
            if task.is_done:
                continue
            due = self._due(task)
            if due is not None and due < today:
                out.append(task)
        return out

    def tomorrow_tasks(self, tasks: Sequence[Task], today: date) -> list[Task]:
        tomorrow = today + timedelta(days=1)
        return [t for t in tasks if not t.is_done and self._due(t) == tomorrow]

    async def _load(self) -> tuple[Sequence[Project], Sequence[Task]]:
        projects = await self._reader.list_projects()
        tasks = await self._reader.list_tasks()
        return projects, tasks

    def _compose(self, projects: Sequence[Project], tasks: Sequence[Task], today: date) -> str:
        if not projects:
            return texts.NO_PROJECTS

        lines = [texts.SUMMARY_HEADER, ""]
        has_active = False

        for project in projects:
            active = [t for t in tasks if t.project_id == project.id and not t.is_done]
            if not active:
                continue
            has_active = True
            lines.append(texts.PROJECT_HEADER.format(title=html_decoration.quote(project.title)))

            in_progress = [t for t in active if t.status == STATUS_IN_PROGRESS]
            todo = [t for t in active if t.status == STATUS_TODO]

            if in_progress:
                lines.append(texts.IN_PROGRESS_HEADER)
                for task in self._cap(in_progress):
                    lines.append(self._task_line(task, today, with_priority=False))
            if todo:
                lines.append(texts.TODO_HEADER)
                for task in self._cap(todo):
                    lines.append(self._task_line(task, today, with_priority=True))
            lines.append("")

        if not has_active:
            return texts.ALL_DONE

        active_count = sum(1 for t in tasks if not t.is_done)
        overdue_count = len(self.overdue_tasks(tasks, today))

        lines.append(texts.OVERVIEW_HEADER)
        lines.append(texts.OVERVIEW_ACTIVE.format(count=active_count))
        if overdue_count > 0:
            lines.append(texts.OVERVIEW_OVERDUE.format(count=overdue_count))
        return "\n".join(lines)

    def _cap(self, tasks: list[Task]) -> list[Task]:
        if self._max_tasks is None:
            return tasks
        return tasks[: self._max_tasks]

    def _task_line(self, task: Task, today: date, with_priority: bool) -> str:
        due = self._due(task)
        annotation = due_date_annotation(due, today)
        if annotation:
            warn = "⚠️ " if due is not None and due < today else ""
            annotation = f" {warn}<i>{annotation}</i>"
        return texts.TASK_LINE.format(
            marker=priority_marker(task.priority) if with_priority else "",
            title=html_decoration.quote(task.title),
            annotation=annotation,
        )

    def _tomorrow_section(self, tasks: Sequence[Task], today: date) -> str:
        planned = self.tomorrow_tasks(tasks, today)
        if not planned:
            return ""
        lines = [texts.TOMORROW_HEADER]
        lines.extend(texts.TOMORROW_LINE.format(title=html_decoration.quote(t.title)) for t in planned)
        return "\n".join(lines)
