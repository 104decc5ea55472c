from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from organizer.constants import HERO_IMAGE_NAME, MAX_UPLOAD_BYTES
from organizer.domain.common.errors import ValidationError

logger = logging.getLogger(__name__)

URL_PREFIX = "/uploads"


@dataclass(frozen=True)
class StoredFile:
    filename: str
    original_name: str
    path: str  # public URL path, e.g. /uploads/image-1700000000000-12345.jpg
    size: int
    mime_type: str


class ImageStore:
    """Image files on local disk under uploads_dir; the hero image lives in public_dir."""

    def __init__(self, uploads_dir: Path, public_dir: Path, max_bytes: int = MAX_UPLOAD_BYTES) -> None:
        self._uploads_dir = Path(uploads_dir)
        self._public_dir = Path(public_dir)
        self._max_bytes = max_bytes

    @property
    def uploads_dir(self) -> Path:
        return self._uploads_dir

    @property
    def hero_path(self) -> Path:
        return self._public_dir / HERO_IMAGE_NAME

    def ensure_dirs(self) -> None:
        self._uploads_dir.mkdir(parents=True, exist_ok=True)
        self._public_dir.mkdir(parents=True, exist_ok=True)

    def validate(self, content: bytes, mime_type: Optional[str]) -> None:
        if not mime_type or not mime_type.startswith("image/"):
            raise ValidationError("Only image files are allowed.")
        self.check_size(len(content))

    def check_size(self, size: int) -> None:
        if size > self._max_bytes:
            raise ValidationError(f"File is too large. Maximum {self._max_bytes // (1024 * 1024)}MB allowed.")

    def save(self, content: bytes, original_name: str, mime_type: Optional[str], field: str = "image") -> StoredFile:
        self.validate(content, mime_type)
        self._uploads_dir.mkdir(parents=True, exist_ok=True)

        suffix = Path(original_name or "").suffix.lower()
        filename = f"{field}-{int(time.time() * 1000)}-{random.randint(0, 10**9)}{suffix}"
        (self._uploads_dir / filename).write_bytes(content)

        return StoredFile(
            filename=filename,
            original_name=original_name or filename,
            path=f"{URL_PREFIX}/{filename}",
            size=len(content),
            mime_type=mime_type or "",
        )

    def delete(self, stored_path: Optional[str]) -> bool:
        """Remove an uploaded file by its public path. Missing files only log a warning."""
        if not stored_path:
            return False
        target = self._uploads_dir / Path(stored_path).name
        try:
            target.unlink()
        except OSError as e:
            logger.warning(f"Could not delete image {target}: {e}")
            return False
        logger.info(f"Deleted image {stored_path}")
        return True

    def replace_hero(self, content: bytes, mime_type: Optional[str]) -> Path:
        """Overwrite the single site-wide hero image."""
        self.validate(content, mime_type)
        self._public_dir.mkdir(parents=True, exist_ok=True)
        target = self.hero_path
        tmp = target.with_suffix(".tmp")
        tmp.write_bytes(content)
        tmp.replace(target)
        return target
