from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

from organizer.constants import (
    DEFAULT_EVENING_SCHEDULE,
    DEFAULT_MORNING_SCHEDULE,
    DEFAULT_TIMEZONE,
    MAX_UPLOAD_BYTES,
)
from organizer.domain.common.errors import ValidationError
from organizer.infra.scheduler.cron import CronSchedule

logger = logging.getLogger(__name__)

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class TelegramSettings:
    bot_token: str
    chat_id: str
    timezone: str
    morning_schedule: str
    evening_schedule: str
    enabled: bool
    max_tasks_per_project: Optional[int] = None

    @property
    def is_configured(self) -> bool:
        return bool(self.bot_token) and bool(self.chat_id)


@dataclass(frozen=True)
class Settings:
    db_path: Path
    uploads_dir: Path
    public_dir: Path
    telegram: TelegramSettings
    cors_origins: tuple[str, ...] = ("*",)
    host: str = "0.0.0.0"
    port: int = 5000
    max_upload_bytes: int = MAX_UPLOAD_BYTES


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUE_VALUES


def _env_int(name: str) -> Optional[int]:
    raw = os.getenv(name, "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        logger.warning(f"{name}={raw!r} is not an integer, ignoring")
        return None


def validate_telegram_settings(telegram: TelegramSettings) -> TelegramSettings:
    """
    Startup checks for the notification feature.

    Missing credentials or a broken schedule never stop the server: the
    feature is switched off and a diagnostic is logged instead.
    """
    try:
        ZoneInfo(telegram.timezone)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning(f"Unknown TELEGRAM_TIMEZONE {telegram.timezone!r}, using {DEFAULT_TIMEZONE}")
        telegram = replace(telegram, timezone=DEFAULT_TIMEZONE)

    for attr, default in (("morning_schedule", DEFAULT_MORNING_SCHEDULE), ("evening_schedule", DEFAULT_EVENING_SCHEDULE)):
        try:
            CronSchedule.parse(getattr(telegram, attr))
        except ValidationError as e:
            logger.error(f"Invalid {attr} {getattr(telegram, attr)!r}: {e}. Notifications disabled.")
            telegram = replace(telegram, **{attr: default, "enabled": False})

    if telegram.enabled and not telegram.is_configured:
        if not telegram.bot_token:
            logger.error("TELEGRAM_BOT_TOKEN is not set")
        if not telegram.chat_id:
            logger.error("TELEGRAM_CHAT_ID is not set")
        logger.warning("Telegram configuration incomplete. Notifications disabled.")
        telegram = replace(telegram, enabled=False)

    return telegram


def load_settings() -> Settings:
    load_dotenv()

    telegram = TelegramSettings(
        bot_token=os.getenv("TELEGRAM_BOT_TOKEN", "").strip(),
        chat_id=os.getenv("TELEGRAM_CHAT_ID", "").strip(),
        timezone=os.getenv("TELEGRAM_TIMEZONE", DEFAULT_TIMEZONE).strip() or DEFAULT_TIMEZONE,
        morning_schedule=os.getenv("TELEGRAM_MORNING_SCHEDULE", DEFAULT_MORNING_SCHEDULE).strip() or DEFAULT_MORNING_SCHEDULE,
        evening_schedule=os.getenv("TELEGRAM_EVENING_SCHEDULE", DEFAULT_EVENING_SCHEDULE).strip() or DEFAULT_EVENING_SCHEDULE,
        enabled=_env_bool("TELEGRAM_NOTIFICATIONS_ENABLED"),
        max_tasks_per_project=_env_int("NOTIFICATION_MAX_TASKS_PER_PROJECT"),
    )

    origins = tuple(o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip())

    # relative paths are resolved against the working directory at startup
    return Settings(
        db_path=Path(os.getenv("DB_PATH", "data/relationship_organizer.db").strip()),
        uploads_dir=Path(os.getenv("UPLOADS_DIR", "uploads").strip()),
        public_dir=Path(os.getenv("PUBLIC_DIR", "public").strip()),
        telegram=validate_telegram_settings(telegram),
        cors_origins=origins or ("*",),
        host=os.getenv("HOST", "0.0.0.0").strip(),
        port=_env_int("PORT") or 5000,
        max_upload_bytes=_env_int("MAX_UPLOAD_BYTES") or MAX_UPLOAD_BYTES,
    )
