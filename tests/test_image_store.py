"""
Tests for ImageStore: upload validation, naming and file removal.
"""
import asyncio
from pathlib import Path

import pytest

from organizer.api.routers.images import read_upload
from organizer.domain.common.errors import ValidationError
from organizer.infra.storage.uploads import ImageStore


def _store(tmp_path: Path, max_bytes: int = 1024) -> ImageStore:
    store = ImageStore(tmp_path / "uploads", tmp_path / "public", max_bytes=max_bytes)
    store.ensure_dirs()
    return store


def test_save_writes_file_with_public_path(tmp_path: Path):
    store = _store(tmp_path)

    stored = store.save(b"png-bytes", "Crib Photo.PNG", "image/png")

    assert stored.filename.startswith("image-")
    assert stored.filename.endswith(".png")
    assert stored.path == f"/uploads/{stored.filename}"
    assert stored.original_name == "Crib Photo.PNG"
    assert stored.size == len(b"png-bytes")
    assert (tmp_path / "uploads" / stored.filename).read_bytes() == b"png-bytes"


def test_field_name_prefixes_filename(tmp_path: Path):
    stored = _store(tmp_path).save(b"x", "a.jpg", "image/jpeg", field="noteImage")

    assert stored.filename.startswith("noteImage-")


@pytest.mark.parametrize("mime", [None, "", "text/plain", "application/pdf"])
def test_non_image_is_rejected(tmp_path: Path, mime):
    with pytest.raises(ValidationError):
        _store(tmp_path).save(b"x", "a.txt", mime)


def test_too_large_is_rejected(tmp_path: Path):
    store = _store(tmp_path, max_bytes=10)

    with pytest.raises(ValidationError):
        store.save(b"x" * 11, "big.png", "image/png")
    assert list((tmp_path / "uploads").iterdir()) == []


def test_delete_removes_file_and_tolerates_missing(tmp_path: Path):
    store = _store(tmp_path)
    stored = store.save(b"x", "a.png", "image/png")

    assert store.delete(stored.path) is True
    assert store.delete(stored.path) is False
    assert store.delete(None) is False


def test_replace_hero_overwrites(tmp_path: Path):
    store = _store(tmp_path)
    store.replace_hero(b"one", "image/jpeg")
    target = store.replace_hero(b"two", "image/jpeg")

    assert target == tmp_path / "public" / "hero-image.jpg"
    assert target.read_bytes() == b"two"


class _EndlessUpload:
    """Multipart stand-in that never runs out of data and counts reads."""

    def __init__(self, size=None, chunk: bytes = b"x" * 8):
        self.size = size
        self.chunk = chunk
        self.reads = 0

    async def read(self, n: int = -1) -> bytes:
        self.reads += 1
        return self.chunk


def test_read_upload_stops_once_over_the_cap(tmp_path: Path):
    upload = _EndlessUpload()

    with pytest.raises(ValidationError):
        asyncio.run(read_upload(_store(tmp_path, max_bytes=10), upload))
    assert upload.reads == 2


def test_read_upload_rejects_declared_size_without_reading(tmp_path: Path):
    upload = _EndlessUpload(size=11)

    with pytest.raises(ValidationError):
        asyncio.run(read_upload(_store(tmp_path, max_bytes=10), upload))
    assert upload.reads == 0


def test_read_upload_returns_everything_under_the_cap(tmp_path: Path):
    class _Upload:
        size = None

        def __init__(self):
            self.parts = [b"abc", b"def", b""]

        async def read(self, n: int = -1) -> bytes:
            return self.parts.pop(0)

    assert asyncio.run(read_upload(_store(tmp_path, max_bytes=10), _Upload())) == b"abcdef"
