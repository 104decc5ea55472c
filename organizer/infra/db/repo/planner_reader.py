from __future__ import annotations

from typing import Sequence

from organizer.domain.notifications.ports import PlannerReader
from organizer.domain.planner.models import Project, Task
from organizer.infra.db.repo.projects_sqlite import ProjectsRepo
from organizer.infra.db.repo.tasks_sqlite import TasksRepo


class SqlitePlannerReader(PlannerReader):
    def __init__(self, projects: ProjectsRepo, tasks: TasksRepo) -> None:
        self._projects = projects
        self._tasks = tasks

    async def list_projects(self) -> Sequence[Project]:
        return await self._projects.list_projects()

    async def list_tasks(self) -> Sequence[Task]:
        return await self._tasks.list_tasks()
