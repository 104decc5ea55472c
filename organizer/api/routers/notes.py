"""Note API endpoints. Bodies are multipart forms with an optional image."""
from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile

from organizer.api.dependencies import get_image_store, get_notes_repo
from organizer.api.routers.images import store_upload
from organizer.api.schemas import MessageResponse, NoteResponse
from organizer.domain.common.errors import ValidationError
from organizer.infra.db.repo import NotesRepo
from organizer.infra.storage.uploads import ImageStore

router = APIRouter(prefix="/notes", tags=["notes"])


@router.get("", response_model=List[NoteResponse])
async def list_notes(
    category: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    repo: NotesRepo = Depends(get_notes_repo),
):
    """Notes by priority, then most recently edited. Category "alle" means no filter."""
    return await repo.list_notes(category=category, search=search)


@router.get("/{note_id}", response_model=NoteResponse)
async def get_note(note_id: int, repo: NotesRepo = Depends(get_notes_repo)):
    note = await repo.get_note(note_id)
    if note is None:
        raise HTTPException(status_code=404, detail="Note not found")
    return note


@router.post("", response_model=NoteResponse, status_code=201)
async def create_note(
    title: Optional[str] = Form(None),
    content: Optional[str] = Form(None),
    category: Optional[str] = Form(None),
    priority: Optional[int] = Form(None),
    is_favorite: bool = Form(False),
    tags: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    repo: NotesRepo = Depends(get_notes_repo),
    store: ImageStore = Depends(get_image_store),
):
    if not title or not content:
        raise ValidationError("Title and content are required.")
    stored = await store_upload(store, image)
    return await repo.create_note(
        title=title,
        content=content,
        category=category,
        priority=priority,
        is_favorite=is_favorite,
        tags=tags,
        image_path=stored.path if stored else None,
    )


@router.put("/{note_id}", response_model=NoteResponse)
async def update_note(
    note_id: int,
    title: Optional[str] = Form(None),
    content: Optional[str] = Form(None),
    category: Optional[str] = Form(None),
    priority: Optional[int] = Form(None),
    is_favorite: Optional[bool] = Form(None),
    tags: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    repo: NotesRepo = Depends(get_notes_repo),
    store: ImageStore = Depends(get_image_store),
):
    """Update the sent fields. A new image replaces and deletes the old file."""
    existing = await repo.get_note(note_id)
    if existing is None:
        raise HTTPException(status_code=404, detail="Note not found")

    sent = {
        "title": title,
        "content": content,
        "category": category,
        "priority": priority,
        "is_favorite": is_favorite,
        "tags": tags,
    }
    changes = {k: v for k, v in sent.items() if v is not None}
    if "title" in changes and not changes["title"].strip():
        raise ValidationError("Title is required.")

    stored = await store_upload(store, image)
    if stored:
        changes["image_path"] = stored.path

    note = await repo.update_note(note_id, changes)
    if note is None:
        raise HTTPException(status_code=404, detail="Note not found")

    if stored and existing.get("image_path"):
        store.delete(existing["image_path"])
    return note


@router.delete("/{note_id}", response_model=MessageResponse)
async def delete_note(
    note_id: int,
    repo: NotesRepo = Depends(get_notes_repo),
    store: ImageStore = Depends(get_image_store),
):
    note = await repo.get_note(note_id)
    if note is None:
        raise HTTPException(status_code=404, detail="Note not found")
    await repo.delete_note(note_id)
    if note.get("image_path"):
        store.delete(note["image_path"])
    return MessageResponse(message="Note deleted")
