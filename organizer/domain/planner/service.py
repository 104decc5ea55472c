from __future__ import annotations

from typing import Any, Mapping, Optional

from organizer.constants import PROJECT_PRIORITY_MEDIUM, STATUS_TODO
from organizer.domain.common.errors import NotFoundError, ValidationError
from organizer.domain.planner.models import Project, Task
from organizer.domain.planner.rules import (
    validate_due_date,
    validate_project_priority,
    validate_status,
    validate_task_priority,
    validate_title,
)
from organizer.infra.db.repo.projects_sqlite import ProjectsRepo
from organizer.infra.db.repo.tasks_sqlite import TasksRepo


class PlannerService:
    """
    Project/task business rules. Every write is validated before any
    statement runs, so a rejected request never leaves a partial row.
    """

    def __init__(self, projects: ProjectsRepo, tasks: TasksRepo) -> None:
        self._projects = projects
        self._tasks = tasks

    async def list_projects(self) -> list[Project]:
        return await self._projects.list_projects()

    async def create_project(
        self,
        title: Optional[str],
        description: Optional[str] = None,
        status: Optional[str] = None,
        priority: Optional[str] = None,
        linked_event_id: Optional[int] = None,
        due_date: Optional[str] = None,
        color: Optional[str] = None,
    ) -> Project:
        return await self._projects.create_project(
            title=validate_title(title),
            description=description,
            status=validate_status(status or STATUS_TODO),
            priority=validate_project_priority(priority or PROJECT_PRIORITY_MEDIUM),
            linked_event_id=linked_event_id,
            due_date=validate_due_date(due_date),
            color=color,
        )

    async def update_project(self, project_id: int, changes: Mapping[str, Any]) -> Project:
        changes = self._validate_common(changes)
        if "priority" in changes:
            validate_project_priority(changes["priority"])
        project = await self._projects.update_project(project_id, changes)
        if project is None:
            raise NotFoundError("Project not found.")
        return project

    async def delete_project(self, project_id: int) -> None:
        if not await self._projects.delete_project(project_id):
            raise NotFoundError("Project not found.")

    async def list_tasks(self, project_id: Optional[int] = None) -> list[Task]:
        return await self._tasks.list_tasks(project_id)

    async def create_task(
        self,
        title: Optional[str],
        project_id: Optional[int],
        description: Optional[str] = None,
        status: Optional[str] = None,
        due_date: Optional[str] = None,
        priority: Optional[int] = None,
        result: Optional[str] = None,
        images: tuple[str, ...] = (),
    ) -> Task:
        title = validate_title(title)
        if project_id is None:
            raise ValidationError("Project id is required.")
        if await self._projects.get_project(project_id) is None:
            raise ValidationError(f"Project {project_id} does not exist.")
        return await self._tasks.create_task(
            project_id=project_id,
            title=title,
            description=description,
            status=validate_status(status or STATUS_TODO),
            due_date=validate_due_date(due_date),
            priority=validate_task_priority(priority),
            result=result,
            images=images,
        )

    async def update_task(self, task_id: int, changes: Mapping[str, Any]) -> Task:
        changes = self._validate_common(changes)
        if "priority" in changes:
            validate_task_priority(changes["priority"])
        if "project_id" in changes:
            if changes["project_id"] is None or await self._projects.get_project(changes["project_id"]) is None:
                raise ValidationError("Task must belong to an existing project.")
        task = await self._tasks.update_task(task_id, changes)
        if task is None:
            raise NotFoundError("Task not found.")
        return task

    async def delete_task(self, task_id: int) -> None:
        if not await self._tasks.delete_task(task_id):
            raise NotFoundError("Task not found.")

    @staticmethod
    def _validate_common(changes: Mapping[str, Any]) -> dict[str, Any]:
        out = dict(changes)
        if "title" in out:
            out["title"] = validate_title(out["title"])
        if "status" in out:
            validate_status(out["status"])
        if "due_date" in out:
            out["due_date"] = validate_due_date(out["due_date"])
        return out
