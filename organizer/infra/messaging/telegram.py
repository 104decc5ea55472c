from __future__ import annotations

import logging
from typing import Any, Optional, Union

from aiogram import Bot
from aiogram.client.default import DefaultBotProperties
from aiogram.enums import ParseMode
from aiogram.types import LinkPreviewOptions
from aiogram.utils.text_decorations import html_decoration

from organizer.config import TelegramSettings
from organizer.domain.notifications import texts
from organizer.domain.notifications.models import TimeOfDay
from organizer.domain.notifications.ports import Clock, MessageSender

logger = logging.getLogger(__name__)


class TelegramMessenger(MessageSender):
    """
    Sends messages to the single configured chat.

    Every public method returns a bool and never raises: delivery problems
    (network, auth, API errors) are logged and reported as False.
    """

    def __init__(self, settings: TelegramSettings, clock: Clock, bot: Optional[Bot] = None) -> None:
        self._chat_id = settings.chat_id
        self._clock = clock
        self._bot = bot
        if self._bot is None and settings.bot_token:
            try:
                self._bot = Bot(
                    token=settings.bot_token,
                    default=DefaultBotProperties(parse_mode=ParseMode.HTML),
                )
            except Exception as e:
                logger.error(f"Telegram bot could not be created: {e}")
                self._bot = None

    @property
    def is_configured(self) -> bool:
        return self._bot is not None and bool(self._chat_id)

    @staticmethod
    def default_options() -> dict[str, Any]:
        return {
            "parse_mode": ParseMode.HTML,
            "link_preview_options": LinkPreviewOptions(is_disabled=True),
        }

    async def send_message(self, text: str, **options: Any) -> bool:
        if not self.is_configured:
            logger.warning("Telegram message not sent: bot token or chat id missing")
            return False

        merged = {**self.default_options(), **options}
        try:
            await self._bot.send_message(chat_id=self._chat_id, text=text, **merged)
        except Exception as e:
            logger.error(f"Failed to send Telegram message: {e}")
            return False

        logger.info("Telegram message sent")
        return True

    async def send_task_summary(self, summary: str, time_of_day: Union[TimeOfDay, str] = TimeOfDay.MORNING) -> bool:
        kind = TimeOfDay.parse(time_of_day) or TimeOfDay.EVENING
        return await self.send_message(f"{kind.greeting}\n\n{summary}")

    async def send_error_notification(self, error_text: str) -> bool:
        stamp = self._clock.now().strftime("%d.%m.%Y, %H:%M:%S")
        message = texts.ERROR_NOTIFICATION.format(error=html_decoration.quote(error_text), time=stamp)
        return await self.send_message(message)

    async def test_connection(self) -> bool:
        return await self.send_message(texts.TEST_CONNECTION)

    async def close(self) -> None:
        if self._bot is not None:
            await self._bot.session.close()
