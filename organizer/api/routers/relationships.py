from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends

from organizer.api.dependencies import get_images_repo, get_relationships_repo
from organizer.api.schemas import RelationshipCreate, RelationshipResponse
from organizer.domain.common.errors import ValidationError
from organizer.infra.db.repo import ImagesRepo, RelationshipsRepo

router = APIRouter(prefix="/relationships", tags=["relationships"])


@router.get("", response_model=List[RelationshipResponse])
async def list_relationships(repo: RelationshipsRepo = Depends(get_relationships_repo)):
    return await repo.list_relationships()


@router.post("", response_model=RelationshipResponse, status_code=201)
async def create_relationship(
    body: RelationshipCreate,
    repo: RelationshipsRepo = Depends(get_relationships_repo),
    images_repo: ImagesRepo = Depends(get_images_repo),
):
    if not body.name or not body.name.strip():
        raise ValidationError("Name is required.")
    if body.image_id is not None and await images_repo.get_image(body.image_id) is None:
        raise ValidationError(f"Image {body.image_id} does not exist.")
    return await repo.create_relationship(
        name=body.name.strip(),
        relationship_type=body.relationship_type,
        description=body.description,
        anniversary_date=body.anniversary_date,
        image_id=body.image_id,
    )
