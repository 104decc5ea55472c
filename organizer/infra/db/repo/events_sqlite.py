from __future__ import annotations

from typing import Any, Mapping, Optional

from organizer.infra.db.repo.base import BaseRepo

_UPDATABLE = ("title", "description", "date", "end_date", "is_recurring", "recurrence_type")

_SELECT_WITH_IMAGES = """
    SELECT e.*,
           GROUP_CONCAT(i.filename) AS image_filenames,
           GROUP_CONCAT(i.path) AS image_paths
    FROM events e
    LEFT JOIN event_images ei ON e.id = ei.event_id
    LEFT JOIN images i ON ei.image_id = i.id
"""


def _with_images(row: Mapping[str, Any]) -> dict[str, Any]:
    data = dict(row)
    filenames = data.pop("image_filenames", None)
    paths = data.pop("image_paths", None)
    data["is_recurring"] = bool(data.get("is_recurring"))
    data["images"] = (
        [{"filename": f, "path": p} for f, p in zip(filenames.split(","), paths.split(","))]
        if filenames and paths
        else []
    )
    return data


class EventsRepo(BaseRepo):
    """Calendar events plus their attached images (event_images link table)."""

    async def list_events(self) -> list[dict[str, Any]]:
        rows = await self._db.fetchall(_SELECT_WITH_IMAGES + " GROUP BY e.id ORDER BY e.date ASC;")
        return [_with_images(r) for r in rows]

    async def get_event(self, event_id: int) -> Optional[dict[str, Any]]:
        row = await self._db.fetchone(_SELECT_WITH_IMAGES + " WHERE e.id = ? GROUP BY e.id;", (event_id,))
        return _with_images(row) if row else None

    async def create_event(
        self,
        title: str,
        date: str,
        description: Optional[str] = None,
        end_date: Optional[str] = None,
        is_recurring: bool = False,
        recurrence_type: Optional[str] = None,
    ) -> dict[str, Any]:
        now = self._now_iso()
        event_id = await self._db.insert(
            """
            INSERT INTO events (title, description, date, end_date, is_recurring, recurrence_type, created_at, updated_at)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?);
            """,
            (title, description, date, end_date, 1 if is_recurring else 0, recurrence_type, now, now),
        )
        event = await self.get_event(event_id)
        if event is None:
            raise RuntimeError(f"Event {event_id} missing right after insert")
        return event

    async def update_event(self, event_id: int, changes: Mapping[str, Any]) -> bool:
        changes = dict(changes)
        if "is_recurring" in changes:
            changes["is_recurring"] = 1 if changes["is_recurring"] else 0
        clause, params = self._set_clause(changes, _UPDATABLE)
        if not clause:
            return await self.get_event(event_id) is not None
        updated = await self._db.execute(
            f"UPDATE events SET {clause}, updated_at = ? WHERE id = ?;",
            (*params, self._now_iso(), event_id),
        )
        return updated > 0

    async def list_event_images(self, event_id: int) -> list[dict[str, Any]]:
        rows = await self._db.fetchall(
            """
            SELECT i.id, i.filename, i.path
            FROM images i
            JOIN event_images ei ON i.id = ei.image_id
            WHERE ei.event_id = ?;
            """,
            (event_id,),
        )
        return [dict(r) for r in rows]

    async def delete_event(self, event_id: int) -> bool:
        # event_images rows go with the event (ON DELETE CASCADE)
        return await self._db.execute("DELETE FROM events WHERE id = ?;", (event_id,)) > 0

    async def attach_image(self, event_id: int, image_id: int) -> None:
        await self._db.insert(
            "INSERT INTO event_images (event_id, image_id, created_at) VALUES (?, ?, ?);",
            (event_id, image_id, self._now_iso()),
        )
