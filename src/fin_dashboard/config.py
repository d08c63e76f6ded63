import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict

from fin_dashboard.calendars.dto import CalendarConfig

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    APP_ENV: str = "development"
    APP_HOST: str = "0.0.0.0"
    APP_PORT: int = 8000
    LOG_LEVEL: str = "INFO"

    # API Keys
    OPENAI_API_KEY: str = ""
    GOOGLE_API_KEY: str = ""

    # Chat model (OpenAI-compatible)
    CHAT_MODEL: str = "gpt-4-turbo-preview"
    CHAT_PROVIDER: str = "openai"
    CHAT_TEMPERATURE: float = 0.7
    CHAT_MAX_TOKENS: int = 500
    CHAT_TIMEOUT_SECONDS: float = 30.0

    # Calendars
    CALENDAR_CONFIG_PATH: str = "config/calendars.json"
    CALENDAR_FETCH_TIMEOUT_SECONDS: float = 15.0
    DEFAULT_TIMEZONE: str = "America/New_York"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


def missing_required_keys(settings: Settings) -> List[str]:
    """Return the names of required API keys that are empty."""
    required_keys = [
        ("OPENAI_API_KEY", settings.OPENAI_API_KEY),
        ("GOOGLE_API_KEY", settings.GOOGLE_API_KEY),
    ]
    return [name for name, value in required_keys if not value or value.strip() == ""]


def validate_required_keys(settings: Settings) -> bool:
    """
    Warn about missing API keys.

    The dashboard still starts without them: calendar sources degrade to
    empty results and the chat endpoint answers with its fallback message.
    """
    missing_keys = missing_required_keys(settings)
    if missing_keys:
        logger.warning(
            "Missing environment variables: %s. Please check your .env file.",
            ", ".join(missing_keys),
        )
        return False
    return True


def load_calendar_config(path: str, default_timezone: str) -> CalendarConfig:
    """
    Load the declarative calendar source list.

    A missing file yields an empty configuration; a malformed one raises,
    since it can only be fixed by editing the file.
    """
    config_path = Path(path)
    if not config_path.exists():
        logger.warning(f"Calendar config not found at {config_path}, no sources configured")
        return CalendarConfig(time_zone=default_timezone, calendars=[])

    with config_path.open("r", encoding="utf-8") as handle:
        raw = json.load(handle)

    raw.setdefault("timeZone", default_timezone)
    config = CalendarConfig.model_validate(raw)
    logger.info(
        "Loaded %d calendar sources (%d enabled) from %s",
        len(config.calendars),
        len(config.enabled_sources()),
        config_path,
    )
    return config
