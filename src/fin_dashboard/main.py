import logging
from pathlib import Path
from typing import Optional

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from fin_dashboard.calendars.adapter import CalendarSourceAdapter
from fin_dashboard.calendars.constants import FeedSettings, GoogleCalendarSettings
from fin_dashboard.calendars.feed_client import IcalFeedClient
from fin_dashboard.calendars.google_client import GoogleCalendarClient
from fin_dashboard.calendars.service import CalendarService
from fin_dashboard.chat.dto import ChatRelaySettings
from fin_dashboard.chat.relay import ChatRelay
from fin_dashboard.config import Settings, get_settings, load_calendar_config, validate_required_keys
from fin_dashboard.constants import APP_SETTINGS
from fin_dashboard.routes import calendar, chat, dashboard, health
from fin_dashboard.ui.placeholders import PlaceholderFinances, default_finances

logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).resolve().parent / "ui" / "static"


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=APP_SETTINGS.LOG_FORMAT,
    )


def build_calendar_service(settings: Settings) -> CalendarService:
    """Wire the calendar fetchers from explicit settings."""
    calendar_config = load_calendar_config(settings.CALENDAR_CONFIG_PATH, settings.DEFAULT_TIMEZONE)
    adapter = CalendarSourceAdapter(
        fetchers=[
            GoogleCalendarClient(GoogleCalendarSettings(api_key=settings.GOOGLE_API_KEY)),
            IcalFeedClient(FeedSettings(timeout=settings.CALENDAR_FETCH_TIMEOUT_SECONDS)),
        ],
        default_time_zone=calendar_config.time_zone,
        timeout=settings.CALENDAR_FETCH_TIMEOUT_SECONDS,
    )
    return CalendarService(adapter=adapter, config=calendar_config)


def build_chat_relay(settings: Settings) -> ChatRelay:
    return ChatRelay(ChatRelaySettings(
        api_key=settings.OPENAI_API_KEY,
        model=settings.CHAT_MODEL,
        provider=settings.CHAT_PROVIDER,
        temperature=settings.CHAT_TEMPERATURE,
        max_tokens=settings.CHAT_MAX_TOKENS,
        timeout=settings.CHAT_TIMEOUT_SECONDS,
    ))


def create_app(
    settings: Optional[Settings] = None,
    calendar_service: Optional[CalendarService] = None,
    chat_relay: Optional[ChatRelay] = None,
    finances: Optional[PlaceholderFinances] = None,
) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title=APP_SETTINGS.APP_NAME,
        version=APP_SETTINGS.VERSION,
        description=APP_SETTINGS.DESCRIPTION
    )

    app.state.settings = settings
    app.state.calendar_service = calendar_service or build_calendar_service(settings)
    app.state.chat_relay = chat_relay or build_chat_relay(settings)
    app.state.finances = finances or default_finances()

    @app.on_event("startup")
    async def startup_event():
        """Report configuration problems on startup"""
        if validate_required_keys(settings):
            logger.info("Configuration validation passed")

    @app.on_event("shutdown")
    async def shutdown_event():
        logger.info("Shutting down gracefully...")

    app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

    app.include_router(dashboard.router, tags=["Dashboard"])
    app.include_router(health.router, prefix="/health", tags=["Health"])
    app.include_router(calendar.router, prefix="/api/calendar", tags=["Calendar"])
    app.include_router(chat.router, prefix="/api/chat", tags=["Chat"])

    return app


def main():
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "fin_dashboard.main:create_app",
        factory=True,
        host=settings.APP_HOST,
        port=settings.APP_PORT,
        reload=settings.APP_ENV == "development",
    )


if __name__ == "__main__":
    main()
