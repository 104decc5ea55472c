from __future__ import annotations

from typing import Any, Mapping, Optional

from organizer.domain.planner.models import Project
from organizer.infra.db.repo.base import BaseRepo

_COLUMNS = "id, title, description, status, priority, linked_event_id, due_date, color, created_at, updated_at"
_UPDATABLE = ("title", "description", "status", "priority", "linked_event_id", "due_date", "color")


class ProjectsRepo(BaseRepo):
    """projects table. Deleting a project cascades to its tasks via the FK."""

    async def list_projects(self) -> list[Project]:
        rows = await self._db.fetchall(
            f"SELECT {_COLUMNS} FROM projects ORDER BY created_at DESC, id DESC;"
        )
        return [Project(**dict(r)) for r in rows]

    async def get_project(self, project_id: int) -> Optional[Project]:
        row = await self._db.fetchone(f"SELECT {_COLUMNS} FROM projects WHERE id = ?;", (project_id,))
        return Project(**dict(row)) if row else None

    async def create_project(
        self,
        title: str,
        description: Optional[str],
        status: str,
        priority: str,
        linked_event_id: Optional[int],
        due_date: Optional[str],
        color: Optional[str],
    ) -> Project:
        now = self._now_iso()
        project_id = await self._db.insert(
            """
            INSERT INTO projects (title, description, status, priority, linked_event_id, due_date, color, created_at, updated_at)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?);
            """,
            (title, description, status, priority, linked_event_id, due_date, color, now, now),
        )
        project = await self.get_project(project_id)
        if project is None:
            raise RuntimeError(f"Project {project_id} missing right after insert")
        return project

    async def update_project(self, project_id: int, changes: Mapping[str, Any]) -> Optional[Project]:
        clause, params = self._set_clause(changes, _UPDATABLE)
        if clause:
            updated = await self._db.execute(
                f"UPDATE projects SET {clause}, updated_at = ? WHERE id = ?;",
                (*params, self._now_iso(), project_id),
            )
            if updated == 0:
                return None
        return await self.get_project(project_id)

    async def delete_project(self, project_id: int) -> bool:
        return await self._db.execute("DELETE FROM projects WHERE id = ?;", (project_id,)) > 0
