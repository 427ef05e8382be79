"""Configuration management."""

import logging
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from . import __version__

logger = logging.getLogger(__name__)


class RzdSettings(BaseSettings):
    """Settings for talking to the RZD passenger site."""

    model_config = SettingsConfigDict(
        env_prefix="RZD_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    timetable_url: str = Field(
        default="https://pass.rzd.ru/timetable/public/ru",
        description="Timetable endpoint (schedules, seats, train stops)",
    )
    suggester_url: str = Field(
        default="https://pass.rzd.ru/suggester",
        description="Station name suggestion endpoint",
    )
    language: str = Field(default="ru", description="Language of station names")
    user_agent: str = Field(
        default=f"rzd-trains {__version__}", description="User-Agent header"
    )
    referer: str = Field(default="rzd.ru", description="Referer header")
    request_timeout: float = Field(default=30, description="Request timeout in seconds")
    rid_poll_attempts: int = Field(
        default=3, ge=1, description="How many times to ask for a prepared reply"
    )
    rid_poll_interval: float = Field(
        default=1.5, ge=0, description="Seconds to wait before each reply poll"
    )
    empty_result_messages: list[str] = Field(
        default_factory=lambda: [
            "поездов не найдено",
            "не найдено ни одного поезда",
            "в указанную дату поезд не курсирует",
        ],
        description="Server messages meaning the search found nothing",
    )


_settings: RzdSettings | None = None


def get_settings() -> RzdSettings:
    """Return the process-wide settings, loading them on first use."""
    global _settings
    if _settings is None:
        env_file_path = Path(".env")
        if env_file_path.exists():
            logger.info(f"Loading settings from {env_file_path.absolute()}")
        _settings = RzdSettings()
        logger.debug(
            f"Settings loaded - timetable: {_settings.timetable_url}, "
            f"timeout: {_settings.request_timeout}s"
        )
    return _settings
