from __future__ import annotations

from typing import Any, Optional, Sequence

from organizer.infra.db.repo.base import BaseRepo


class ImagesRepo(BaseRepo):
    """Metadata rows for files stored under the uploads directory."""

    async def create_image(
        self,
        filename: str,
        original_name: str,
        path: str,
        size: Optional[int],
        mime_type: Optional[str],
        description: str = "",
    ) -> dict[str, Any]:
        now = self._now_iso()
        image_id = await self._db.insert(
            """
            INSERT INTO images (filename, original_name, path, size, mime_type, description, created_at)
            VALUES (?, ?, ?, ?, ?, ?, ?);
            """,
            (filename, original_name, path, size, mime_type, description, now),
        )
        return {
            "id": image_id,
            "filename": filename,
            "original_name": original_name,
            "path": path,
            "size": size,
            "mime_type": mime_type,
            "description": description,
            "created_at": now,
        }

    async def get_image(self, image_id: int) -> Optional[dict[str, Any]]:
        row = await self._db.fetchone("SELECT * FROM images WHERE id = ?;", (image_id,))
        return dict(row) if row else None

    async def list_images(self) -> list[dict[str, Any]]:
        rows = await self._db.fetchall("SELECT * FROM images ORDER BY created_at DESC, id DESC;")
        return [dict(r) for r in rows]

    async def delete_images(self, image_ids: Sequence[int]) -> None:
        await self._db.executemany("DELETE FROM images WHERE id = ?;", [(i,) for i in image_ids])
