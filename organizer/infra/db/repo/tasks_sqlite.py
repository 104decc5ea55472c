from __future__ import annotations

import json
from typing import Any, Mapping, Optional, Sequence

import aiosqlite

from organizer.domain.planner.models import Task
from organizer.infra.db.repo.base import BaseRepo

_COLUMNS = (
    "id, project_id, title, description, status, due_date, priority, result, images_json, created_at, updated_at"
)
_UPDATABLE = ("title", "description", "status", "due_date", "priority", "result", "images_json", "project_id")


def _row_to_task(row: aiosqlite.Row) -> Task:
    data = dict(row)
    images = json.loads(data.pop("images_json") or "[]")
    return Task(**data, images=tuple(images))


class TasksRepo(BaseRepo):
    """tasks table. Every task belongs to exactly one project (FK, ON DELETE CASCADE)."""

    async def list_tasks(self, project_id: Optional[int] = None) -> list[Task]:
        if project_id is None:
            rows = await self._db.fetchall(f"SELECT {_COLUMNS} FROM tasks ORDER BY created_at DESC, id DESC;")
        else:
            rows = await self._db.fetchall(
                f"SELECT {_COLUMNS} FROM tasks WHERE project_id = ? ORDER BY created_at DESC, id DESC;",
                (project_id,),
            )
        return [_row_to_task(r) for r in rows]

    async def get_task(self, task_id: int) -> Optional[Task]:
        row = await self._db.fetchone(f"SELECT {_COLUMNS} FROM tasks WHERE id = ?;", (task_id,))
        return _row_to_task(row) if row else None

    async def create_task(
        self,
        project_id: int,
        title: str,
        description: Optional[str],
        status: str,
        due_date: Optional[str],
        priority: Optional[int],
        result: Optional[str],
        images: Sequence[str] = (),
    ) -> Task:
        now = self._now_iso()
        task_id = await self._db.insert(
            """
            INSERT INTO tasks (project_id, title, description, status, due_date, priority, result, images_json, created_at, updated_at)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?);
            """,
            (
                project_id,
                title,
                description,
                status,
                due_date,
                priority,
                result,
                json.dumps(list(images), ensure_ascii=False) if images else None,
                now,
                now,
            ),
        )
        task = await self.get_task(task_id)
        if task is None:
            raise RuntimeError(f"Task {task_id} missing right after insert")
        return task

    async def update_task(self, task_id: int, changes: Mapping[str, Any]) -> Optional[Task]:
        changes = dict(changes)
        if "images" in changes:
            images = changes.pop("images")
            changes["images_json"] = json.dumps(list(images), ensure_ascii=False) if images else None
        clause, params = self._set_clause(changes, _UPDATABLE)
        if clause:
            updated = await self._db.execute(
                f"UPDATE tasks SET {clause}, updated_at = ? WHERE id = ?;",
                (*params, self._now_iso(), task_id),
            )
            if updated == 0:
                return None
        return await self.get_task(task_id)

    async def delete_task(self, task_id: int) -> bool:
        return await self._db.execute("DELETE FROM tasks WHERE id = ?;", (task_id,)) > 0
