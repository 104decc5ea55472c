"""
End-to-end API tests through FastAPI's TestClient.

Every test gets its own temporary database, uploads and public directory.
The aiogram Bot is an AsyncMock, so no request leaves the machine.
Run with: python -m pytest tests/test_api.py -v
"""
from __future__ import annotations

from dataclasses import replace
from pathlib import Path
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from organizer.api.app import create_app
from organizer.config import Settings, TelegramSettings

PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        db_path=tmp_path / "data" / "organizer.db",
        uploads_dir=tmp_path / "uploads",
        public_dir=tmp_path / "public",
        telegram=TelegramSettings(
            bot_token="",
            chat_id="4242",
            timezone="Europe/Berlin",
            morning_schedule="0 10 * * *",
            evening_schedule="0 22 * * *",
            enabled=False,
        ),
    )


@pytest.fixture
def bot() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def client(settings: Settings, bot: AsyncMock):
    with TestClient(create_app(settings, bot=bot)) as c:
        yield c


def _upload(client: TestClient, name: str = "crib.png", content: bytes = PNG, mime: str = "image/png"):
    return client.post("/api/upload", files={"image": (name, content, mime)}, data={"description": "crib"})


# =============================================================================
# Health
# =============================================================================

def test_health(client: TestClient):
    response = client.get("/api/health")

    assert response.status_code == 200
    assert response.json()["status"] == "OK"


# =============================================================================
# Projects & tasks
# =============================================================================

def test_project_and_task_lifecycle(client: TestClient):
    project = client.post("/api/projects", json={"title": "Nursery Setup", "priority": "high"})
    assert project.status_code == 201
    project_id = project.json()["id"]
    assert project.json()["status"] == "todo"

    task = client.post(
        "/api/tasks",
        json={"title": "Order crib", "project_id": project_id, "due_date": "2025-03-09", "priority": 3},
    )
    assert task.status_code == 201
    task_id = task.json()["id"]

    listed = client.get("/api/tasks", params={"project_id": project_id}).json()
    assert [t["title"] for t in listed] == ["Order crib"]

    done = client.put(f"/api/tasks/{task_id}", json={"status": "done", "result": "Arrives Friday"})
    assert done.status_code == 200
    assert done.json()["content"] == "Arrives Friday"
    assert done.json()["due_date"] == "2025-03-09"

    renamed = client.put(f"/api/projects/{project_id}", json={"title": "Nursery"})
    assert renamed.json()["title"] == "Nursery"
    assert renamed.json()["priority"] == "high"

    assert client.delete(f"/api/projects/{project_id}").status_code == 200
    assert client.get("/api/tasks").json() == []


def test_legacy_answer_is_exposed_as_content(client: TestClient):
    project_id = client.post("/api/projects", json={"title": "Paperwork"}).json()["id"]
    task = client.post(
        "/api/tasks",
        json={
            "title": "Call registry office",
            "project_id": project_id,
            "status": "done",
            "description": "Ask about the birth certificate\nAnswer: bring both passports",
        },
    ).json()

    assert task["result"] is None
    assert task["resolved_result"] == "bring both passports"
    assert task["content"] == "bring both passports"


def test_task_without_title_is_rejected(client: TestClient):
    project_id = client.post("/api/projects", json={"title": "Nursery Setup"}).json()["id"]

    response = client.post("/api/tasks", json={"project_id": project_id})

    assert response.status_code == 400
    assert response.json()["detail"] == "Title is required."


def test_task_for_unknown_project_is_rejected(client: TestClient):
    response = client.post("/api/tasks", json={"title": "Orphan", "project_id": 999})

    assert response.status_code == 400
    assert client.get("/api/tasks").json() == []


def test_invalid_status_is_rejected(client: TestClient):
    response = client.post("/api/projects", json={"title": "Trip", "status": "blocked"})

    assert response.status_code == 400


def test_malformed_body_is_a_400(client: TestClient):
    response = client.post("/api/projects", json={"title": "Trip", "linked_event_id": "not-a-number"})

    assert response.status_code == 400


def test_unknown_rows_are_404(client: TestClient):
    assert client.put("/api/tasks/999", json={"title": "Nope"}).status_code == 404
    assert client.delete("/api/tasks/999").status_code == 404
    assert client.delete("/api/projects/999").status_code == 404
    assert client.get("/api/events/999").status_code == 404


# =============================================================================
# Events & images
# =============================================================================

def test_event_crud_with_images(client: TestClient, settings: Settings):
    event = client.post("/api/events", json={"title": "Ultrasound", "date": "2025-04-02"})
    assert event.status_code == 201
    event_id = event.json()["id"]
    assert event.json()["images"] == []

    image = _upload(client).json()
    assert image["path"].startswith("/uploads/image-")
    stored = settings.uploads_dir / image["filename"]
    assert stored.exists()

    assert client.post(f"/api/events/{event_id}/images/{image['id']}").status_code == 200
    assert [i["path"] for i in client.get(f"/api/events/{event_id}").json()["images"]] == [image["path"]]

    assert client.put(f"/api/events/{event_id}", json={"description": "Bring the pass"}).status_code == 200
    assert client.get(f"/api/events/{event_id}").json()["description"] == "Bring the pass"

    assert client.delete(f"/api/events/{event_id}").status_code == 200
    assert not stored.exists()
    assert client.get("/api/images").json() == []
    assert client.get("/api/events").json() == []


def test_event_requires_title_and_date(client: TestClient):
    assert client.post("/api/events", json={"title": "No date"}).status_code == 400
    assert client.post("/api/events", json={"date": "2025-04-02"}).status_code == 400


def test_uploaded_file_is_served(client: TestClient):
    image = _upload(client).json()

    response = client.get(image["path"])

    assert response.status_code == 200
    assert response.content == PNG


def test_non_image_upload_is_rejected(client: TestClient, settings: Settings):
    response = _upload(client, name="notes.txt", content=b"hello", mime="text/plain")

    assert response.status_code == 400
    assert response.json()["detail"] == "Only image files are allowed."
    assert client.get("/api/images").json() == []


def test_oversized_upload_is_rejected_without_storing(settings: Settings, bot: AsyncMock):
    small = replace(settings, max_upload_bytes=1024)

    with TestClient(create_app(small, bot=bot)) as c:
        response = _upload(c, content=PNG + b"\x00" * 2048)

        assert response.status_code == 400
        assert response.json()["detail"].startswith("File is too large.")
        assert c.get("/api/images").json() == []
    assert list(small.uploads_dir.iterdir()) == []


def test_oversized_hero_image_keeps_previous_one(settings: Settings, bot: AsyncMock):
    small = replace(settings, max_upload_bytes=1024)

    with TestClient(create_app(small, bot=bot)) as c:
        c.post("/api/upload-hero", files={"heroImage": ("a.jpg", b"first", "image/jpeg")})
        response = c.post("/api/upload-hero", files={"heroImage": ("b.jpg", b"x" * 4096, "image/jpeg")})

        assert response.status_code == 400
    assert (small.public_dir / "hero-image.jpg").read_bytes() == b"first"


def test_upload_without_file_is_rejected(client: TestClient):
    assert client.post("/api/upload", data={"description": "nothing"}).status_code == 400


def test_hero_image_replaces_single_file(client: TestClient, settings: Settings):
    first = client.post("/api/upload-hero", files={"heroImage": ("a.jpg", b"first", "image/jpeg")})
    second = client.post("/api/upload-hero", files={"heroImage": ("b.jpg", b"second", "image/jpeg")})

    assert first.status_code == 200
    assert second.json()["image_path"] == "/hero-image.jpg"
    assert second.json()["size"] == len(b"second")
    assert (settings.public_dir / "hero-image.jpg").read_bytes() == b"second"
    assert client.get("/hero-image.jpg").content == b"second"


# =============================================================================
# Notes
# =============================================================================

def test_note_image_is_replaced_and_deleted(client: TestClient, settings: Settings):
    created = client.post(
        "/api/notes",
        data={"title": "Crib ideas", "content": "White wood", "category": "baby"},
        files={"image": ("crib.png", PNG, "image/png")},
    )
    assert created.status_code == 201
    note = created.json()
    old_file = settings.uploads_dir / Path(note["image_path"]).name
    assert old_file.exists()

    updated = client.put(
        f"/api/notes/{note['id']}",
        data={"is_favorite": "true"},
        files={"image": ("crib2.png", PNG, "image/png")},
    ).json()
    new_file = settings.uploads_dir / Path(updated["image_path"]).name
    assert updated["is_favorite"] is True
    assert updated["title"] == "Crib ideas"
    assert not old_file.exists()
    assert new_file.exists()

    assert client.delete(f"/api/notes/{note['id']}").status_code == 200
    assert not new_file.exists()
    assert client.get(f"/api/notes/{note['id']}").status_code == 404


def test_note_filters(client: TestClient):
    client.post("/api/notes", data={"title": "Names", "content": "Mia", "category": "baby"})
    client.post("/api/notes", data={"title": "Groceries", "content": "Milk"})

    assert [n["title"] for n in client.get("/api/notes", params={"category": "baby"}).json()] == ["Names"]
    assert len(client.get("/api/notes", params={"category": "alle"}).json()) == 2
    assert [n["title"] for n in client.get("/api/notes", params={"search": "milk"}).json()] == ["Groceries"]


def test_note_requires_title_and_content(client: TestClient):
    assert client.post("/api/notes", data={"title": "Only title"}).status_code == 400


# =============================================================================
# Baby savings & items
# =============================================================================

def test_baby_savings(client: TestClient):
    assert client.get("/api/baby/savings").json()["balance"] == 0.0

    saved = client.put("/api/baby/savings", json={"balance": 120.5, "goal": 500}).json()
    assert saved["balance"] == 120.5
    assert saved["goal"] == 500

    again = client.put("/api/baby/savings", json={"balance": 150}).json()
    assert again["balance"] == 150
    assert again["goal"] == 500


def test_baby_items(client: TestClient):
    created = client.post("/api/baby/items", data={"name": "Stroller", "price": "399.90", "category": "mobility"})
    assert created.status_code == 201
    item_id = created.json()["id"]
    assert created.json()["is_purchased"] is False

    updated = client.put(f"/api/baby/items/{item_id}", data={"is_purchased": "true"}).json()
    assert updated["is_purchased"] is True
    assert updated["price"] == pytest.approx(399.90)

    assert client.delete(f"/api/baby/items/{item_id}").status_code == 200
    assert client.get("/api/baby/items").json() == []


def test_baby_item_requires_name(client: TestClient):
    assert client.post("/api/baby/items", data={"price": "10"}).status_code == 400


# =============================================================================
# Relationships
# =============================================================================

def test_relationships(client: TestClient):
    created = client.post("/api/relationships", json={"name": "Anna", "relationship_type": "partner"})
    assert created.status_code == 201

    listed = client.get("/api/relationships").json()
    assert [r["name"] for r in listed] == ["Anna"]
    assert client.post("/api/relationships", json={"name": " "}).status_code == 400
    assert client.post("/api/relationships", json={"name": "Ben", "image_id": 99}).status_code == 400


# =============================================================================
# Telegram notifications
# =============================================================================

def test_status_when_disabled(client: TestClient):
    status = client.get("/api/telegram/status").json()

    assert status["enabled"] is False
    assert status["activeJobs"] == []
    assert status["timezone"] == "Europe/Berlin"
    assert status["schedules"] == {"morning": "0 10 * * *", "evening": "0 22 * * *"}


def test_toggle_on_off_on_has_two_triggers(client: TestClient):
    assert client.post("/api/telegram/toggle", json={"enabled": True}).json()["enabled"] is True
    client.post("/api/telegram/toggle", json={"enabled": False})
    client.post("/api/telegram/toggle", json={"enabled": True})

    first = client.get("/api/telegram/status").json()
    second = client.get("/api/telegram/status").json()

    assert sorted(first["activeJobs"]) == ["evening", "morning"]
    assert first == second


def test_test_endpoint_sends_canned_message(client: TestClient, bot: AsyncMock):
    response = client.post("/api/telegram/test").json()

    assert response["success"] is True
    bot.send_message.assert_awaited_once()
    assert bot.send_message.await_args.kwargs["text"].startswith("🧪 <b>Test message</b>")


def test_test_endpoint_reports_delivery_failure(client: TestClient, bot: AsyncMock):
    bot.send_message.side_effect = ConnectionError("network unreachable")

    response = client.post("/api/telegram/test")

    assert response.status_code == 200
    assert response.json()["success"] is False


def test_send_now_includes_open_tasks(client: TestClient, bot: AsyncMock):
    project_id = client.post("/api/projects", json={"title": "Nursery Setup"}).json()["id"]
    client.post("/api/tasks", json={"title": "Paint wall", "project_id": project_id, "status": "in-progress"})

    assert client.post("/api/telegram/send-now").json()["success"] is True

    text = bot.send_message.await_args.kwargs["text"]
    assert "Nursery Setup" in text
    assert "Paint wall" in text
    assert "• Active tasks: 1" in text
