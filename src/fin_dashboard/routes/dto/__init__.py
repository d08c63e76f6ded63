"""
Routes Data Transfer Objects (DTOs)

This module contains all Pydantic models used by API routes:
- Response model for the calendar endpoint
- Request and response models for the chat endpoint
- Error and health check response models
"""

from pydantic import BaseModel
from typing import Optional, List, Dict

from fin_dashboard.calendars.dto import CalendarEvent


class CalendarEventsResponse(BaseModel):
    """Response model for the calendar endpoint."""
    events: List[CalendarEvent]


class ChatRequest(BaseModel):
    """Request model for the chat endpoint."""
    message: Optional[str] = None


class ChatResponse(BaseModel):
    """Response model for the chat endpoint."""
    response: str


class ErrorResponse(BaseModel):
    """Error payload shared by the API routes."""
    error: str
    retryable: Optional[bool] = None


class HealthResponse(BaseModel):
    """Health check response model."""
    status: str
    components: Optional[Dict[str, str]] = None
    enabled_calendar_sources: Optional[int] = None
