"""
Tests for TelegramMessenger with a mocked aiogram Bot: every method reports
failures as False and never raises.
"""
from __future__ import annotations

import asyncio
from datetime import datetime
from unittest.mock import AsyncMock
from zoneinfo import ZoneInfo

from aiogram.enums import ParseMode

from organizer.config import TelegramSettings
from organizer.domain.notifications import texts
from organizer.domain.notifications.models import TimeOfDay
from organizer.domain.notifications.ports import Clock
from organizer.infra.messaging.telegram import TelegramMessenger


class FixedClock(Clock):
    def now(self) -> datetime:
        return datetime(2025, 3, 10, 22, 0, 5, tzinfo=ZoneInfo("Europe/Berlin"))


def _settings(chat_id: str = "4242", token: str = "") -> TelegramSettings:
    return TelegramSettings(
        bot_token=token,
        chat_id=chat_id,
        timezone="Europe/Berlin",
        morning_schedule="0 10 * * *",
        evening_schedule="0 22 * * *",
        enabled=True,
    )


def _messenger(bot=None, chat_id: str = "4242") -> tuple[TelegramMessenger, AsyncMock]:
    bot = bot or AsyncMock()
    return TelegramMessenger(_settings(chat_id=chat_id), FixedClock(), bot=bot), bot


def test_send_message_uses_html_and_no_link_preview():
    messenger, bot = _messenger()

    assert asyncio.run(messenger.send_message("hello")) is True

    kwargs = bot.send_message.await_args.kwargs
    assert kwargs["chat_id"] == "4242"
    assert kwargs["text"] == "hello"
    assert kwargs["parse_mode"] == ParseMode.HTML
    assert kwargs["link_preview_options"].is_disabled is True


def test_caller_options_override_defaults():
    messenger, bot = _messenger()

    asyncio.run(messenger.send_message("plain", parse_mode=None, disable_notification=True))

    kwargs = bot.send_message.await_args.kwargs
    assert kwargs["parse_mode"] is None
    assert kwargs["disable_notification"] is True


def test_unreachable_backend_returns_false():
    bot = AsyncMock()
    bot.send_message.side_effect = ConnectionError("network unreachable")
    messenger, _ = _messenger(bot)

    assert asyncio.run(messenger.send_message("hello")) is False


def test_failed_error_notification_is_swallowed():
    bot = AsyncMock()
    bot.send_message.side_effect = ConnectionError("network unreachable")
    messenger, _ = _messenger(bot)

    async def scenario():
        first = await messenger.send_message("summary")
        second = await messenger.send_error_notification("summary failed")
        return first, second

    assert asyncio.run(scenario()) == (False, False)
    assert bot.send_message.await_count == 2


def test_missing_chat_id_means_not_configured():
    messenger, bot = _messenger(chat_id="")

    assert messenger.is_configured is False
    assert asyncio.run(messenger.send_message("hello")) is False
    bot.send_message.assert_not_awaited()


def test_no_token_and_no_bot_means_not_configured():
    messenger = TelegramMessenger(_settings(token=""), FixedClock())

    assert messenger.is_configured is False
    assert asyncio.run(messenger.test_connection()) is False


def test_task_summary_greeting_per_time_of_day():
    messenger, bot = _messenger()

    asyncio.run(messenger.send_task_summary("SUMMARY", TimeOfDay.MORNING))
    assert bot.send_message.await_args.kwargs["text"] == "🌅 <b>Good morning!</b>\n\nSUMMARY"

    asyncio.run(messenger.send_task_summary("SUMMARY", "evening"))
    assert bot.send_message.await_args.kwargs["text"] == "🌙 <b>Good evening!</b>\n\nSUMMARY"


def test_unknown_time_of_day_falls_back_to_evening_greeting():
    messenger, bot = _messenger()

    asyncio.run(messenger.send_task_summary("SUMMARY", "lunch"))

    assert bot.send_message.await_args.kwargs["text"].startswith("🌙 <b>Good evening!</b>")


def test_error_notification_has_header_and_local_timestamp():
    messenger, bot = _messenger()

    assert asyncio.run(messenger.send_error_notification("disk <full>")) is True

    text = bot.send_message.await_args.kwargs["text"]
    assert text.startswith("🚨 <b>System error</b>")
    assert "disk &lt;full&gt;" in text
    assert "10.03.2025, 22:00:05" in text


def test_test_connection_sends_canned_message():
    messenger, bot = _messenger()

    assert asyncio.run(messenger.test_connection()) is True
    assert bot.send_message.await_args.kwargs["text"] == texts.TEST_CONNECTION


def test_close_closes_bot_session():
    messenger, bot = _messenger()

    asyncio.run(messenger.close())

    bot.session.close.assert_awaited_once()
