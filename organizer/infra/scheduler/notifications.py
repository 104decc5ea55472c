"""
Recurring Telegram task-summary notifications.

Each named trigger ("morning", "evening") is an asyncio task that sleeps until
the next cron match in the configured timezone and then spawns one send cycle:
compose summary -> deliver -> on failure, best-effort error notification.
Send cycles run as their own tasks, so stop() only prevents future firings
and never interrupts a message that is already on its way.
"""
from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from typing import Awaitable, Callable, Optional

from organizer.config import TelegramSettings
from organizer.domain.notifications.composer import NotificationComposer
from organizer.domain.notifications.models import SchedulerStatus, TimeOfDay
from organizer.domain.notifications.ports import Clock, MessageSender
from organizer.infra.scheduler.cron import CronSchedule

logger = logging.getLogger(__name__)

SleepFn = Callable[[float], Awaitable[None]]

# pause before recomputing the next fire time after an unexpected loop error
RETRY_DELAY_SECONDS = 60.0


class NotificationScheduler:
    def __init__(
        self,
        composer: NotificationComposer,
        messenger: MessageSender,
        settings: TelegramSettings,
        clock: Clock,
        sleep: SleepFn = asyncio.sleep,
    ) -> None:
        self._composer = composer
        self._messenger = messenger
        self._clock = clock
        self._sleep = sleep
        self._enabled = settings.enabled
        self._timezone = settings.timezone
        self._schedules: dict[TimeOfDay, CronSchedule] = {
            TimeOfDay.MORNING: CronSchedule.parse(settings.morning_schedule),
            TimeOfDay.EVENING: CronSchedule.parse(settings.evening_schedule),
        }
        self._jobs: dict[str, asyncio.Task] = {}
        self._inflight: set[asyncio.Task] = set()

    @property
    def enabled(self) -> bool:
        return self._enabled

    def start(self) -> None:
        """Arm all triggers. Must be called from inside the running event loop."""
        # replace the active set instead of stacking a second copy
        self.stop()
        logger.info("Starting task scheduler...")
        for kind, schedule in self._schedules.items():
            self._jobs[kind.value] = asyncio.create_task(
                self._run_trigger(kind, schedule), name=f"notify:{kind.value}"
            )
            logger.info(f"{kind.value} notification scheduled: {schedule.expression} ({self._timezone})")

    def stop(self) -> None:
        for name, job in self._jobs.items():
            job.cancel()
            logger.info(f"Job stopped: {name}")
        self._jobs.clear()

    def set_enabled(self, enabled: bool) -> None:
        self._enabled = enabled
        if enabled:
            logger.info("Task scheduler enabled")
            self.start()
        else:
            logger.info("Task scheduler disabled")
            self.stop()

    def get_status(self) -> SchedulerStatus:
        return SchedulerStatus(
            enabled=self._enabled,
            active_jobs=[name for name, job in self._jobs.items() if not job.done()],
            timezone=self._timezone,
            schedules={kind.value: s.expression for kind, s in self._schedules.items()},
        )

    def next_fire_time(self, kind: TimeOfDay, now: Optional[datetime] = None) -> datetime:
        return self._schedules[kind].next_after(now or self._clock.now())

    async def send_notification(self, kind: TimeOfDay) -> bool:
        """One send cycle. Never raises."""
        logger.info(f"Sending {kind.value} notification...")
        try:
            summary = await self._composer.generate_time_specific_summary(kind)
            sent = await self._messenger.send_task_summary(summary, kind)
        except Exception as e:
            logger.error(f"{kind.value} notification failed: {e}", exc_info=True)
            await self._report_failure(f"{kind.value} notification failed: {e}")
            return False

        if sent:
            logger.info(f"{kind.value} notification sent")
        else:
            logger.error(f"{kind.value} notification could not be delivered")
            await self._report_failure(f"{kind.value} notification could not be delivered")
        return sent

    async def send_immediate_notification(self) -> bool:
        """Send the base summary right away, outside the schedule."""
        summary = await self._composer.generate_task_summary()
        return await self._messenger.send_task_summary(summary, TimeOfDay.MORNING)

    async def test_notifications(self) -> bool:
        """Check the Telegram connection, then run one morning cycle."""
        logger.info("Testing Telegram notifications...")
        if not await self._messenger.test_connection():
            logger.error("Telegram connection test failed")
            return False
        return await self.send_notification(TimeOfDay.MORNING)

    async def wait_idle(self) -> None:
        """Wait for send cycles that are still in flight."""
        if self._inflight:
            await asyncio.gather(*list(self._inflight), return_exceptions=True)

    async def _report_failure(self, error_text: str) -> None:
        try:
            await self._messenger.send_error_notification(error_text)
        except Exception:
            logger.error("Error notification could not be sent", exc_info=True)

    async def _run_trigger(self, kind: TimeOfDay, schedule: CronSchedule) -> None:
        while True:
            try:
                now = self._clock.now()
                fire_at = schedule.next_after(now)
                delay = (fire_at.astimezone(timezone.utc) - now.astimezone(timezone.utc)).total_seconds()
                await self._sleep(max(delay, 0.0))
            except Exception as e:
                # never let one bad tick kill the trigger, but log it
                logger.error(f"Trigger {kind.value} error: {e}", exc_info=True)
                await self._sleep(RETRY_DELAY_SECONDS)
                continue
            self._spawn(self.send_notification(kind))

    def _spawn(self, coro: Awaitable[bool]) -> None:
        task = asyncio.ensure_future(coro)
        self._inflight.add(task)
        task.add_done_callback(self._inflight.discard)
