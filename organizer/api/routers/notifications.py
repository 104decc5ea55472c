"""Telegram notification control endpoints."""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from organizer.api.dependencies import get_messenger, get_scheduler
from organizer.api.schemas import SchedulerStatusResponse, TelegramTestResponse, ToggleRequest, ToggleResponse
from organizer.domain.notifications import texts
from organizer.infra.messaging.telegram import TelegramMessenger
from organizer.infra.scheduler.notifications import NotificationScheduler

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/telegram", tags=["telegram"])


@router.post("/test", response_model=TelegramTestResponse)
async def test_telegram(messenger: TelegramMessenger = Depends(get_messenger)):
    """Send the canned test message, without a task summary."""
    if await messenger.send_message(texts.TEST_MESSAGE):
        return TelegramTestResponse(success=True, message="Test message sent")
    return TelegramTestResponse(success=False, message="Test message could not be sent. Check the Telegram configuration.")


@router.get("/status", response_model=SchedulerStatusResponse)
async def telegram_status(scheduler: NotificationScheduler = Depends(get_scheduler)):
    status = scheduler.get_status()
    return SchedulerStatusResponse(
        enabled=status.enabled,
        active_jobs=status.active_jobs,
        timezone=status.timezone,
        schedules=status.schedules,
    )


@router.post("/toggle", response_model=ToggleResponse)
async def toggle_telegram(body: ToggleRequest, scheduler: NotificationScheduler = Depends(get_scheduler)):
    scheduler.set_enabled(body.enabled)
    state = "enabled" if body.enabled else "disabled"
    logger.info(f"Telegram notifications {state} via API")
    return ToggleResponse(enabled=scheduler.enabled, message=f"Notifications {state}")


@router.post("/send-now", response_model=TelegramTestResponse)
async def send_now(scheduler: NotificationScheduler = Depends(get_scheduler)):
    """Send the current task summary right away."""
    if await scheduler.send_immediate_notification():
        return TelegramTestResponse(success=True, message="Task summary sent")
    return TelegramTestResponse(success=False, message="Task summary could not be sent")
