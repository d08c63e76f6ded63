"""
Chat Relay Configuration
"""


class CHAT_SETTINGS:
    """Chat relay defaults and user-facing messages"""

    PROVIDER: str = "openai"
    MODEL: str = "gpt-4-turbo-preview"
    TEMPERATURE: float = 0.7
    MAX_TOKENS: int = 500
    TIMEOUT: float = 30.0

    EMPTY_MESSAGE_ERROR: str = "No message provided"
    NO_CONTENT_FALLBACK: str = "I apologize, but I couldn't generate a response. Please try again."
    UPSTREAM_FAILURE_FALLBACK: str = "Sorry, I couldn't reach the finance assistant right now. Please try again."
