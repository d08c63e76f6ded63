import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from fin_dashboard.calendars.week import flatten_buckets
from fin_dashboard.routes.dto import CalendarEventsResponse, ErrorResponse

# Set up logging
logger = logging.getLogger(__name__)

router = APIRouter()

FETCH_ERROR_MESSAGE = "Failed to fetch calendar events"


@router.get(
    "",
    response_model=CalendarEventsResponse,
    response_model_exclude_none=True,
    responses={500: {"model": ErrorResponse}},
)
async def get_calendar_events(request: Request):
    """
    Return this week's events from all enabled calendar sources, in day order.

    Sources that fail are left out of the result; only a failure of the
    whole aggregation produces an error payload.
    """
    calendar_service = request.app.state.calendar_service
    try:
        week = await calendar_service.get_week()
    except Exception as e:
        logger.error(f"Error fetching calendar events: {str(e)}")
        return JSONResponse(status_code=500, content={"error": FETCH_ERROR_MESSAGE})

    return CalendarEventsResponse(events=flatten_buckets(week.buckets))
