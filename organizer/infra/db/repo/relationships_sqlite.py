from __future__ import annotations

from typing import Any, Optional

from organizer.infra.db.repo.base import BaseRepo


class RelationshipsRepo(BaseRepo):
    async def list_relationships(self) -> list[dict[str, Any]]:
        rows = await self._db.fetchall(
            """
            SELECT r.*, i.filename AS image_filename, i.path AS image_path
            FROM relationships r
            LEFT JOIN images i ON r.image_id = i.id
            ORDER BY r.created_at DESC, r.id DESC;
            """
        )
        return [dict(r) for r in rows]

    async def create_relationship(
        self,
        name: str,
        relationship_type: Optional[str] = None,
        description: Optional[str] = None,
        anniversary_date: Optional[str] = None,
        image_id: Optional[int] = None,
    ) -> dict[str, Any]:
        now = self._now_iso()
        rel_id = await self._db.insert(
            """
            INSERT INTO relationships (name, relationship_type, description, anniversary_date, image_id, created_at, updated_at)
            VALUES (?, ?, ?, ?, ?, ?, ?);
            """,
            (name, relationship_type, description, anniversary_date, image_id, now, now),
        )
        return {
            "id": rel_id,
            "name": name,
            "relationship_type": relationship_type,
            "description": description,
            "anniversary_date": anniversary_date,
            "image_id": image_id,
        }
