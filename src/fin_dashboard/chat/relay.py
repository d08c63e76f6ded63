"""
Chat Relay

Forwards one user message, with a fixed financial-assistant system prompt,
to a chat-completion model and returns the generated text. No conversation
history is sent upstream.
"""

import asyncio
import logging
import time
from typing import Any, Optional

from langchain.chat_models import init_chat_model
from langchain_core.messages import HumanMessage, SystemMessage

from fin_dashboard.chat.constants import CHAT_SETTINGS
from fin_dashboard.chat.dto import ChatRelaySettings, ChatReply, ChatValidationError
from fin_dashboard.chat.prompts import FINANCIAL_ASSISTANT_PROMPT

logger = logging.getLogger(__name__)


class ChatRelay:
    """Stateless relay between the dashboard chat widget and the chat model."""

    def __init__(self, settings: ChatRelaySettings, model: Optional[Any] = None):
        """
        Args:
            settings: Model name, sampling and timeout configuration
            model: Prebuilt chat model exposing ``ainvoke``; created on first use otherwise
        """
        self.settings = settings
        self._model = model

    def _ensure_model(self) -> Any:
        if self._model is None:
            self._model = init_chat_model(
                model=self.settings.model,
                model_provider=self.settings.provider,
                temperature=self.settings.temperature,
                max_tokens=self.settings.max_tokens,
                timeout=self.settings.timeout,
                api_key=self.settings.api_key,
            )
        return self._model

    async def reply(self, message: Optional[str]) -> ChatReply:
        """
        Generate a reply to a single user message.

        Raises:
            ChatValidationError: if the message is empty or whitespace only
        """
        if not message or not message.strip():
            raise ChatValidationError(CHAT_SETTINGS.EMPTY_MESSAGE_ERROR)

        start_time = time.time()
        messages = [
            SystemMessage(content=FINANCIAL_ASSISTANT_PROMPT),
            HumanMessage(content=message),
        ]

        try:
            model = self._ensure_model()
            response = await asyncio.wait_for(model.ainvoke(messages), timeout=self.settings.timeout)
        except asyncio.TimeoutError:
            logger.warning("Chat model timed out after %.1f seconds", self.settings.timeout)
            return ChatReply(
                success=False,
                response=CHAT_SETTINGS.UPSTREAM_FAILURE_FALLBACK,
                processing_time=time.time() - start_time,
                error_message="Chat model request timed out",
                retryable=True,
            )
        except Exception as e:
            logger.error(f"Chat model request failed: {str(e)}")
            return ChatReply(
                success=False,
                response=CHAT_SETTINGS.UPSTREAM_FAILURE_FALLBACK,
                processing_time=time.time() - start_time,
                error_message=str(e),
                retryable=True,
            )

        content = _content_text(getattr(response, "content", response))
        if not content:
            logger.warning("Chat model returned no content")
            content = CHAT_SETTINGS.NO_CONTENT_FALLBACK

        processing_time = time.time() - start_time
        logger.info("Chat reply generated in %.3f seconds", processing_time)
        return ChatReply(success=True, response=content, processing_time=processing_time)


def _content_text(content: Any) -> str:
    """Plain text of a message content, which may be a list of content blocks."""
    if content is None:
        return ""
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for block in content:
            if isinstance(block, str):
                parts.append(block)
            elif isinstance(block, dict) and block.get("type") == "text":
                parts.append(block.get("text", ""))
        return "".join(parts)
    return str(content)
