"""
Dependency injection for FastAPI endpoints.

Everything is read from the Services object built once in the application
lifespan and stored on app.state, so handlers never touch module globals.
"""
from __future__ import annotations

from fastapi import Request

from organizer.bootstrap import Services
from organizer.domain.planner.service import PlannerService
from organizer.infra.db.repo import BabyRepo, EventsRepo, ImagesRepo, NotesRepo, RelationshipsRepo
from organizer.infra.messaging.telegram import TelegramMessenger
from organizer.infra.scheduler.notifications import NotificationScheduler
from organizer.infra.storage.uploads import ImageStore


def get_services(request: Request) -> Services:
    return request.app.state.services


def get_planner(request: Request) -> PlannerService:
    return get_services(request).planner


def get_events_repo(request: Request) -> EventsRepo:
    return get_services(request).events


def get_images_repo(request: Request) -> ImagesRepo:
    return get_services(request).images


def get_notes_repo(request: Request) -> NotesRepo:
    return get_services(request).notes


def get_relationships_repo(request: Request) -> RelationshipsRepo:
    return get_services(request).relationships


def get_baby_repo(request: Request) -> BabyRepo:
    return get_services(request).baby


def get_image_store(request: Request) -> ImageStore:
    return get_services(request).image_store


def get_messenger(request: Request) -> TelegramMessenger:
    return get_services(request).messenger


def get_scheduler(request: Request) -> NotificationScheduler:
    return get_services(request).scheduler
