"""Image upload endpoints, including the site-wide hero image."""
from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile

from organizer.api.dependencies import get_image_store, get_images_repo
from organizer.api.schemas import HeroImageResponse, ImageResponse
from organizer.constants import HERO_IMAGE_NAME
from organizer.domain.common.errors import ValidationError
from organizer.infra.db.repo import ImagesRepo
from organizer.infra.storage.uploads import ImageStore, StoredFile

logger = logging.getLogger(__name__)

router = APIRouter(tags=["images"])


_READ_CHUNK_BYTES = 1024 * 1024


async def read_upload(store: ImageStore, upload: UploadFile) -> bytes:
    """Read a multipart file in chunks, stopping as soon as it exceeds the store's size cap."""
    if upload.size is not None:
        store.check_size(upload.size)
    chunks = []
    total = 0
    while True:
        chunk = await upload.read(_READ_CHUNK_BYTES)
        if not chunk:
            break
        total += len(chunk)
        store.check_size(total)
        chunks.append(chunk)
    return b"".join(chunks)


async def store_upload(store: ImageStore, upload: Optional[UploadFile], field: str = "image") -> Optional[StoredFile]:
    """Persist an optional multipart image. Returns None when no file was sent."""
    if upload is None or not upload.filename:
        return None
    content = await read_upload(store, upload)
    return store.save(content, upload.filename, upload.content_type, field=field)


@router.post("/upload", response_model=ImageResponse)
async def upload_image(
    image: Optional[UploadFile] = File(None),
    description: str = Form(""),
    store: ImageStore = Depends(get_image_store),
    repo: ImagesRepo = Depends(get_images_repo),
):
    stored = await store_upload(store, image)
    if stored is None:
        raise ValidationError("No file uploaded.")
    return await repo.create_image(
        filename=stored.filename,
        original_name=stored.original_name,
        path=stored.path,
        size=stored.size,
        mime_type=stored.mime_type,
        description=description,
    )


@router.get("/images", response_model=List[ImageResponse])
async def list_images(repo: ImagesRepo = Depends(get_images_repo)):
    return await repo.list_images()


@router.post("/upload-hero", response_model=HeroImageResponse)
async def upload_hero_image(
    hero_image: Optional[UploadFile] = File(None, alias="heroImage"),
    store: ImageStore = Depends(get_image_store),
):
    """Replace the single hero banner shown on the start page."""
    if hero_image is None or not hero_image.filename:
        raise ValidationError("No hero image uploaded.")
    content = await read_upload(store, hero_image)
    store.replace_hero(content, hero_image.content_type)
    logger.info(f"Hero image updated: {hero_image.filename}")
    return HeroImageResponse(
        success=True,
        message="Hero image updated",
        image_path=f"/{HERO_IMAGE_NAME}",
        original_name=hero_image.filename,
        size=len(content),
    )
