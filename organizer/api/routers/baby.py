"""Baby savings balance and the baby item wish list."""
from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile

from organizer.api.dependencies import get_baby_repo, get_image_store
from organizer.api.routers.images import store_upload
from organizer.api.schemas import BabyItemResponse, MessageResponse, SavingsResponse, SavingsUpdate
from organizer.domain.common.errors import ValidationError
from organizer.infra.db.repo import BabyRepo
from organizer.infra.storage.uploads import ImageStore

router = APIRouter(prefix="/baby", tags=["baby"])


@router.get("/savings", response_model=SavingsResponse)
async def get_savings(repo: BabyRepo = Depends(get_baby_repo)):
    return await repo.get_savings()


@router.put("/savings", response_model=SavingsResponse)
async def update_savings(body: SavingsUpdate, repo: BabyRepo = Depends(get_baby_repo)):
    changes = body.model_dump(exclude_unset=True)
    if changes.get("balance") is None:
        changes.pop("balance", None)
    return await repo.update_savings(changes)


@router.get("/items", response_model=List[BabyItemResponse])
async def list_items(repo: BabyRepo = Depends(get_baby_repo)):
    """Open items first, newest first."""
    return await repo.list_items()


@router.post("/items", response_model=BabyItemResponse, status_code=201)
async def create_item(
    name: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    price: float = Form(0.0),
    category: Optional[str] = Form(None),
    is_purchased: bool = Form(False),
    link: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    repo: BabyRepo = Depends(get_baby_repo),
    store: ImageStore = Depends(get_image_store),
):
    if not name or not name.strip():
        raise ValidationError("Name is required.")
    if price < 0:
        raise ValidationError("Price must not be negative.")
    stored = await store_upload(store, image)
    return await repo.create_item(
        name=name.strip(),
        price=price,
        description=description,
        category=category,
        is_purchased=is_purchased,
        link=link,
        image_path=stored.path if stored else None,
    )


@router.put("/items/{item_id}", response_model=BabyItemResponse)
async def update_item(
    item_id: int,
    name: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    price: Optional[float] = Form(None),
    category: Optional[str] = Form(None),
    is_purchased: Optional[bool] = Form(None),
    link: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    repo: BabyRepo = Depends(get_baby_repo),
    store: ImageStore = Depends(get_image_store),
):
    existing = await repo.get_item(item_id)
    if existing is None:
        raise HTTPException(status_code=404, detail="Item not found")

    sent = {
        "name": name,
        "description": description,
        "price": price,
        "category": category,
        "is_purchased": is_purchased,
        "link": link,
    }
    changes = {k: v for k, v in sent.items() if v is not None}
    if "name" in changes and not changes["name"].strip():
        raise ValidationError("Name is required.")
    if changes.get("price", 0) < 0:
        raise ValidationError("Price must not be negative.")

    stored = await store_upload(store, image)
    if stored:
        changes["image_path"] = stored.path

    item = await repo.update_item(item_id, changes)
    if item is None:
        raise HTTPException(status_code=404, detail="Item not found")
    if stored and existing.get("image_path"):
        store.delete(existing["image_path"])
    return item


@router.delete("/items/{item_id}", response_model=MessageResponse)
async def delete_item(
    item_id: int,
    repo: BabyRepo = Depends(get_baby_repo),
    store: ImageStore = Depends(get_image_store),
):
    item = await repo.get_item(item_id)
    if item is None:
        raise HTTPException(status_code=404, detail="Item not found")
    await repo.delete_item(item_id)
    if item.get("image_path"):
        store.delete(item["image_path"])
    return MessageResponse(message="Item deleted")
