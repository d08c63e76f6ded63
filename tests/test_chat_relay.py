import asyncio

import pytest
from langchain_core.messages import HumanMessage, SystemMessage

from fin_dashboard.chat.constants import CHAT_SETTINGS
from fin_dashboard.chat.dto import ChatRelaySettings, ChatValidationError
from fin_dashboard.chat.prompts import FINANCIAL_ASSISTANT_PROMPT
from fin_dashboard.chat.relay import ChatRelay

from conftest import FakeChatModel


def _relay(model, timeout=5.0):
    return ChatRelay(ChatRelaySettings(api_key="test", timeout=timeout), model=model)


def test_reply_is_returned_verbatim():
    model = FakeChatModel(content="Track your top 3 categories.")

    result = asyncio.run(_relay(model).reply("What's my budget?"))

    assert result.success
    assert result.response == "Track your top 3 categories."
    assert result.error_message is None


def test_only_system_prompt_and_message_are_sent():
    model = FakeChatModel(content="ok")

    asyncio.run(_relay(model).reply("How much did I save?"))

    (messages,) = model.calls
    assert len(messages) == 2
    assert isinstance(messages[0], SystemMessage)
    assert messages[0].content == FINANCIAL_ASSISTANT_PROMPT
    assert isinstance(messages[1], HumanMessage)
    assert messages[1].content == "How much did I save?"


@pytest.mark.parametrize("message", ["", "   ", "\n\t", None])
def test_empty_message_rejected_without_upstream_call(message):
    model = FakeChatModel(content="unused")

    with pytest.raises(ChatValidationError):
        asyncio.run(_relay(model).reply(message))
    assert model.calls == []


def test_upstream_failure_returns_fallback():
    model = FakeChatModel(error=RuntimeError("401 invalid api key"))

    result = asyncio.run(_relay(model).reply("What's my budget?"))

    assert not result.success
    assert result.response == CHAT_SETTINGS.UPSTREAM_FAILURE_FALLBACK
    assert "invalid api key" in result.error_message
    assert result.retryable


def test_upstream_timeout_returns_fallback():
    model = FakeChatModel(content="late", delay=1)

    result = asyncio.run(_relay(model, timeout=0.05).reply("What's my budget?"))

    assert not result.success
    assert result.response == CHAT_SETTINGS.UPSTREAM_FAILURE_FALLBACK
    assert result.retryable


def test_empty_upstream_content_uses_fallback_text():
    result = asyncio.run(_relay(FakeChatModel(content="")).reply("Hello"))

    assert result.success
    assert result.response == CHAT_SETTINGS.NO_CONTENT_FALLBACK
