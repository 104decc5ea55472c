"""
Composition root: builds every service once per process.

The resulting Services object is the only owner of shared state (database
handle, messenger, scheduler); the HTTP layer receives it through app.state.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from aiogram import Bot

from organizer.config import Settings
from organizer.domain.common.time import to_iso
from organizer.domain.notifications.composer import NotificationComposer
from organizer.domain.planner.service import PlannerService
from organizer.infra.clock.system_clock import SystemClock
from organizer.infra.db.connection import Database
from organizer.infra.db.repo import (
    BabyRepo,
    EventsRepo,
    ImagesRepo,
    NotesRepo,
    ProjectsRepo,
    RelationshipsRepo,
    SqlitePlannerReader,
    TasksRepo,
)
from organizer.infra.db.schema_version import apply_migrations
from organizer.infra.messaging.telegram import TelegramMessenger
from organizer.infra.scheduler.notifications import NotificationScheduler
from organizer.infra.storage.uploads import ImageStore

logger = logging.getLogger(__name__)


@dataclass
class Services:
    settings: Settings
    db: Database
    clock: SystemClock
    planner: PlannerService
    events: EventsRepo
    images: ImagesRepo
    notes: NotesRepo
    relationships: RelationshipsRepo
    baby: BabyRepo
    image_store: ImageStore
    composer: NotificationComposer
    messenger: TelegramMessenger
    scheduler: NotificationScheduler

    async def aclose(self) -> None:
        self.scheduler.stop()
        await self.scheduler.wait_idle()
        await self.messenger.close()


async def build_services(settings: Settings, bot: Optional[Bot] = None) -> Services:
    # --- DB path: ensure dir exists ---
    db_path = settings.db_path
    db_path.parent.mkdir(parents=True, exist_ok=True)
    logger.info(f"DB_PATH: {db_path}")

    db = Database(str(db_path))
    clock = SystemClock(settings.telegram.timezone)

    # --- migrations ---
    await apply_migrations(db=db, now_iso=to_iso(clock.now()))

    image_store = ImageStore(settings.uploads_dir, settings.public_dir, max_bytes=settings.max_upload_bytes)
    image_store.ensure_dirs()

    # --- repos/services ---
    projects = ProjectsRepo(db)
    tasks = TasksRepo(db)
    composer = NotificationComposer(
        reader=SqlitePlannerReader(projects, tasks),
        clock=clock,
        max_tasks_per_project=settings.telegram.max_tasks_per_project,
    )
    messenger = TelegramMessenger(settings.telegram, clock, bot=bot)
    scheduler = NotificationScheduler(
        composer=composer,
        messenger=messenger,
        settings=settings.telegram,
        clock=clock,
    )

    return Services(
        settings=settings,
        db=db,
        clock=clock,
        planner=PlannerService(projects, tasks),
        events=EventsRepo(db),
        images=ImagesRepo(db),
        notes=NotesRepo(db),
        relationships=RelationshipsRepo(db),
        baby=BabyRepo(db),
        image_store=image_store,
        composer=composer,
        messenger=messenger,
        scheduler=scheduler,
    )
