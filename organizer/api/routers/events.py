"""Calendar event API endpoints."""
from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from organizer.api.dependencies import get_events_repo, get_image_store, get_images_repo
from organizer.api.schemas import EventCreate, EventResponse, EventUpdate, MessageResponse
from organizer.domain.common.errors import ValidationError
from organizer.domain.planner.rules import validate_title
from organizer.infra.db.repo import EventsRepo, ImagesRepo
from organizer.infra.storage.uploads import ImageStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/events", tags=["events"])


@router.get("", response_model=List[EventResponse])
async def list_events(repo: EventsRepo = Depends(get_events_repo)):
    """All events with their images, ordered by date."""
    return await repo.list_events()


@router.get("/{event_id}", response_model=EventResponse)
async def get_event(event_id: int, repo: EventsRepo = Depends(get_events_repo)):
    event = await repo.get_event(event_id)
    if not event:
        raise HTTPException(status_code=404, detail="Event not found")
    return event


@router.post("", response_model=EventResponse, status_code=201)
async def create_event(body: EventCreate, repo: EventsRepo = Depends(get_events_repo)):
    if not body.title or not body.date:
        raise ValidationError("Title and date are required.")
    return await repo.create_event(
        title=validate_title(body.title),
        date=body.date,
        description=body.description,
        end_date=body.end_date,
        is_recurring=body.is_recurring,
        recurrence_type=body.recurrence_type,
    )


@router.put("/{event_id}", response_model=MessageResponse)
async def update_event(event_id: int, body: EventUpdate, repo: EventsRepo = Depends(get_events_repo)):
    changes = body.model_dump(exclude_unset=True)
    if "title" in changes:
        changes["title"] = validate_title(changes["title"])
    if "date" in changes and not changes["date"]:
        raise ValidationError("Date is required.")
    if not await repo.update_event(event_id, changes):
        raise HTTPException(status_code=404, detail="Event not found")
    return MessageResponse(message="Event updated")


@router.delete("/{event_id}", response_model=MessageResponse)
async def delete_event(
    event_id: int,
    repo: EventsRepo = Depends(get_events_repo),
    images_repo: ImagesRepo = Depends(get_images_repo),
    store: ImageStore = Depends(get_image_store),
):
    """Delete an event together with its image files and image rows."""
    if await repo.get_event(event_id) is None:
        raise HTTPException(status_code=404, detail="Event not found")

    images = await repo.list_event_images(event_id)
    await repo.delete_event(event_id)

    for image in images:
        store.delete(image["path"])
    if images:
        await images_repo.delete_images([i["id"] for i in images])
        logger.info(f"Deleted {len(images)} image(s) of event {event_id}")

    return MessageResponse(message="Event and its images deleted")


@router.post("/{event_id}/images/{image_id}", response_model=MessageResponse)
async def attach_image(
    event_id: int,
    image_id: int,
    repo: EventsRepo = Depends(get_events_repo),
    images_repo: ImagesRepo = Depends(get_images_repo),
):
    if await repo.get_event(event_id) is None:
        raise HTTPException(status_code=404, detail="Event not found")
    if await images_repo.get_image(image_id) is None:
        raise HTTPException(status_code=404, detail="Image not found")
    await repo.attach_image(event_id, image_id)
    return MessageResponse(message="Image added to event")
