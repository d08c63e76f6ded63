"""
Chat widget session state.

This is the model the browser widget (``static/chat.js``) follows: the
dashboard page hands it the status names and the generic error text from
here.

Turns live only for the lifetime of the session object. The session moves
idle -> awaiting_reply on submit and back to idle once the reply (or the
error text) has been appended as an assistant turn.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Awaitable, Callable, List, Literal, Optional

from fin_dashboard.chat.dto import ChatValidationError
from fin_dashboard.chat.relay import ChatRelay

logger = logging.getLogger(__name__)

SendMessage = Callable[[str], Awaitable[str]]

GENERIC_ERROR_MESSAGE = "Sorry, I encountered an error. Please try again."


class ChatStatus(str, Enum):
    IDLE = "idle"
    AWAITING_REPLY = "awaiting_reply"


@dataclass
class ChatTurn:
    role: Literal["user", "assistant"]
    content: str
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class ChatRelayError(Exception):
    """A relay call that produced an error instead of a reply."""


@dataclass
class ChatSession:
    turns: List[ChatTurn] = field(default_factory=list)
    status: ChatStatus = ChatStatus.IDLE

    @property
    def can_submit(self) -> bool:
        return self.status == ChatStatus.IDLE

    async def submit(self, text: str, send: SendMessage) -> Optional[ChatTurn]:
        """
        Send ``text`` and record both turns.

        Blank text, or a submission while a reply is pending, is ignored and
        nothing is sent.

        Returns:
            The assistant turn, or None when the submission was ignored
        """
        if not text or not text.strip() or not self.can_submit:
            return None

        message = text.strip()
        self.turns.append(ChatTurn(role="user", content=message))
        self.status = ChatStatus.AWAITING_REPLY
        try:
            content = await send(message)
        except Exception as e:
            logger.warning(f"Chat turn failed: {str(e)}")
            content = str(e) or GENERIC_ERROR_MESSAGE
        finally:
            self.status = ChatStatus.IDLE

        reply = ChatTurn(role="assistant", content=content)
        self.turns.append(reply)
        return reply


def relay_sender(relay: ChatRelay) -> SendMessage:
    """Adapt a ChatRelay to the session's send callable."""

    async def send(message: str) -> str:
        try:
            result = await relay.reply(message)
        except ChatValidationError as e:
            raise ChatRelayError(str(e)) from e
        if not result.success:
            raise ChatRelayError(result.response)
        return result.response

    return send
