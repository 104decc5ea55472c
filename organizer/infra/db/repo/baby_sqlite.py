from __future__ import annotations

from typing import Any, Mapping, Optional

from organizer.infra.db.repo.base import BaseRepo

_ITEM_UPDATABLE = ("name", "description", "price", "category", "is_purchased", "link", "image_path")


def _item(row: Mapping[str, Any]) -> dict[str, Any]:
    data = dict(row)
    data["is_purchased"] = bool(data.get("is_purchased"))
    return data


class BabyRepo(BaseRepo):
    """Baby savings balance (single row, id=1) and the baby item wish list."""

    async def get_savings(self) -> dict[str, Any]:
        row = await self._db.fetchone("SELECT balance, goal, updated_at FROM baby_savings WHERE id = 1;")
        if row:
            return dict(row)
        return {"balance": 0.0, "goal": None, "updated_at": None}

    async def update_savings(self, changes: Mapping[str, Any]) -> dict[str, Any]:
        current = await self.get_savings()
        balance = changes.get("balance", current["balance"])
        goal = changes.get("goal", current["goal"])
        await self._db.execute(
            """
            INSERT INTO baby_savings (id, balance, goal, updated_at) VALUES (1, ?, ?, ?)
            ON CONFLICT(id) DO UPDATE SET balance = excluded.balance, goal = excluded.goal, updated_at = excluded.updated_at;
            """,
            (balance, goal, self._now_iso()),
        )
        return await self.get_savings()

    async def list_items(self) -> list[dict[str, Any]]:
        rows = await self._db.fetchall("SELECT * FROM baby_items ORDER BY is_purchased ASC, created_at DESC, id DESC;")
        return [_item(r) for r in rows]

    async def get_item(self, item_id: int) -> Optional[dict[str, Any]]:
        row = await self._db.fetchone("SELECT * FROM baby_items WHERE id = ?;", (item_id,))
        return _item(row) if row else None

    async def create_item(
        self,
        name: str,
        price: float = 0.0,
        description: Optional[str] = None,
        category: Optional[str] = None,
        is_purchased: bool = False,
        link: Optional[str] = None,
        image_path: Optional[str] = None,
    ) -> dict[str, Any]:
        now = self._now_iso()
        item_id = await self._db.insert(
            """
            INSERT INTO baby_items (name, description, price, category, is_purchased, link, image_path, created_at, updated_at)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?);
            """,
            (name, description, price, category, 1 if is_purchased else 0, link, image_path, now, now),
        )
        item = await self.get_item(item_id)
        if item is None:
            raise RuntimeError(f"Baby item {item_id} missing right after insert")
        return item

    async def update_item(self, item_id: int, changes: Mapping[str, Any]) -> Optional[dict[str, Any]]:
        changes = dict(changes)
        if "is_purchased" in changes:
            changes["is_purchased"] = 1 if changes["is_purchased"] else 0
        clause, params = self._set_clause(changes, _ITEM_UPDATABLE)
        if clause:
            updated = await self._db.execute(
                f"UPDATE baby_items SET {clause}, updated_at = ? WHERE id = ?;",
                (*params, self._now_iso(), item_id),
            )
            if updated == 0:
                return None
        return await self.get_item(item_id)

    async def delete_item(self, item_id: int) -> bool:
        return await self._db.execute("DELETE FROM baby_items WHERE id = ?;", (item_id,)) > 0
