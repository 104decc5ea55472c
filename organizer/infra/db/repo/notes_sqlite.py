from __future__ import annotations

from typing import Any, Mapping, Optional

from organizer.constants import ALL_NOTES_CATEGORY, DEFAULT_NOTE_CATEGORY
from organizer.infra.db.repo.base import BaseRepo

_UPDATABLE = ("title", "content", "category", "priority", "is_favorite", "tags", "image_path")


def _note(row: Mapping[str, Any]) -> dict[str, Any]:
    data = dict(row)
    data["is_favorite"] = bool(data.get("is_favorite"))
    return data


class NotesRepo(BaseRepo):
    async def list_notes(self, category: Optional[str] = None, search: Optional[str] = None) -> list[dict[str, Any]]:
        sql = "SELECT * FROM notes WHERE 1=1"
        params: list[Any] = []

        if category and category != ALL_NOTES_CATEGORY:
            sql += " AND category = ?"
            params.append(category)

        if search:
            pattern = f"%{search}%"
            sql += " AND (title LIKE ? OR content LIKE ? OR tags LIKE ?)"
            params.extend([pattern, pattern, pattern])

        sql += " ORDER BY priority DESC, updated_at DESC;"
        return [_note(r) for r in await self._db.fetchall(sql, params)]

    async def get_note(self, note_id: int) -> Optional[dict[str, Any]]:
        row = await self._db.fetchone("SELECT * FROM notes WHERE id = ?;", (note_id,))
        return _note(row) if row else None

    async def create_note(
        self,
        title: str,
        content: str,
        category: Optional[str] = None,
        priority: Optional[int] = None,
        is_favorite: bool = False,
        tags: Optional[str] = None,
        image_path: Optional[str] = None,
    ) -> dict[str, Any]:
        now = self._now_iso()
        note_id = await self._db.insert(
            """
            INSERT INTO notes (title, content, category, priority, is_favorite, tags, image_path, created_at, updated_at)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?);
            """,
            (
                title,
                content,
                category or DEFAULT_NOTE_CATEGORY,
                priority or 1,
                1 if is_favorite else 0,
                tags or "",
                image_path,
                now,
                now,
            ),
        )
        note = await self.get_note(note_id)
        if note is None:
            raise RuntimeError(f"Note {note_id} missing right after insert")
        return note

    async def update_note(self, note_id: int, changes: Mapping[str, Any]) -> Optional[dict[str, Any]]:
        """Apply changes; an absent image_path keeps the existing picture."""
        changes = dict(changes)
        if "is_favorite" in changes:
            changes["is_favorite"] = 1 if changes["is_favorite"] else 0
        clause, params = self._set_clause(changes, _UPDATABLE)
        if clause:
            updated = await self._db.execute(
                f"UPDATE notes SET {clause}, updated_at = ? WHERE id = ?;",
                (*params, self._now_iso(), note_id),
            )
            if updated == 0:
                return None
        return await self.get_note(note_id)

    async def delete_note(self, note_id: int) -> bool:
        return await self._db.execute("DELETE FROM notes WHERE id = ?;", (note_id,)) > 0
