import logging
from datetime import datetime
from pathlib import Path

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from fin_dashboard.calendars.utils.datetime_utils import get_timezone
from fin_dashboard.ui.chat_session import GENERIC_ERROR_MESSAGE, ChatStatus
from fin_dashboard.ui.presenter import (
    CalendarPanelState,
    EventsFailed,
    EventsReceived,
    EventsRequested,
    build_calendar_panel,
    build_dashboard_view,
    update,
)

logger = logging.getLogger(__name__)

router = APIRouter()

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "ui" / "templates"))

FETCH_ERROR_MESSAGE = "Failed to fetch calendar events"


@router.get("/", response_class=HTMLResponse)
def dashboard_page(request: Request):
    """
    Render the dashboard shell with the calendar panel in its loading state;
    the page script then swaps in ``/dashboard/calendar``.
    """
    calendar_service = request.app.state.calendar_service
    time_zone = calendar_service.time_zone
    state = update(CalendarPanelState(), EventsRequested())
    view = build_dashboard_view(
        state,
        request.app.state.finances,
        time_zone,
        today=datetime.now(get_timezone(time_zone)).date(),
    )
    chat = {
        "idle_status": ChatStatus.IDLE.value,
        "awaiting_status": ChatStatus.AWAITING_REPLY.value,
        "error_message": GENERIC_ERROR_MESSAGE,
    }
    return templates.TemplateResponse(request, "dashboard.html", {"view": view, "chat": chat})


@router.get("/dashboard/calendar", response_class=HTMLResponse)
async def calendar_panel(request: Request):
    """Render this week's calendar panel: day sections, the empty notice, or the error."""
    calendar_service = request.app.state.calendar_service
    state = update(CalendarPanelState(), EventsRequested())
    try:
        week = await calendar_service.get_week()
        state = update(state, EventsReceived(buckets=week.buckets))
    except Exception as e:
        logger.error(f"Error fetching calendar events: {str(e)}")
        state = update(state, EventsFailed(message=FETCH_ERROR_MESSAGE))

    panel = build_calendar_panel(state, calendar_service.time_zone)
    return templates.TemplateResponse(request, "_calendar_panel.html", {"panel": panel})
