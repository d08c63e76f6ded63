"""
Chat Data Transfer Objects (DTOs)

This module contains all data models used by the chat relay:
- Relay configuration
- Reply results
- Input validation errors
"""

from dataclasses import dataclass
from typing import Optional

from fin_dashboard.chat.constants import CHAT_SETTINGS


@dataclass(frozen=True)
class ChatRelaySettings:
    """Configuration settings for the chat relay"""
    api_key: str
    model: str = CHAT_SETTINGS.MODEL
    provider: str = CHAT_SETTINGS.PROVIDER
    temperature: float = CHAT_SETTINGS.TEMPERATURE
    max_tokens: int = CHAT_SETTINGS.MAX_TOKENS
    timeout: float = CHAT_SETTINGS.TIMEOUT


@dataclass
class ChatReply:
    """Result of relaying one user message."""
    success: bool
    response: str
    processing_time: float
    error_message: Optional[str] = None
    retryable: bool = False


class ChatValidationError(ValueError):
    """Raised for chat input that must not be sent upstream."""
