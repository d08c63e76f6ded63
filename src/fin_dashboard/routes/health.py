from fastapi import APIRouter, Request

from fin_dashboard.routes.dto import HealthResponse

router = APIRouter()


@router.get("/", response_model=HealthResponse, response_model_exclude_none=True)
def health_check():
    return HealthResponse(status="ok")


@router.get("/config", response_model=HealthResponse)
def config_health_check(request: Request):
    """
    Report which API keys are configured (without exposing values) and how
    many calendar sources are enabled.
    """
    settings = request.app.state.settings
    calendar_config = request.app.state.calendar_service.config

    components = {
        "openai": "configured" if settings.OPENAI_API_KEY else "missing",
        "google_calendar": "configured" if settings.GOOGLE_API_KEY else "missing",
    }
    status = "ok" if all(value == "configured" for value in components.values()) else "degraded"
    return HealthResponse(
        status=status,
        components=components,
        enabled_calendar_sources=len(calendar_config.enabled_sources()),
    )
