"""MessageRelay 行为测试。"""

import json
import logging

import pytest

from relay_core.domain.exceptions import ApiError, NetworkError, RateLimitError
from relay_core.domain.models import (
    ChatMessage,
    CompletionChoice,
    CompletionResult,
    RelayRequest,
)
from relay_core.prompts import (
    APOLOGY_REPLY,
    LISTENING_REPLY,
    SERVICE_UNAVAILABLE_REPLY,
    SYSTEM_PROMPT,
    TECHNICAL_DIFFICULTY_REPLY,
)
from relay_core.providers.openai_client import OpenAIClient
from relay_core.relay import MessageRelay, bound_history, build_messages


class FakeProvider:
    """记录请求并返回固定回复的 Provider。"""

    name = "fake"

    def __init__(self, content="I hear you.", error=None):
        self.content = content
        self.error = error
        self.requests = []

    def chat(self, req):
        self.requests.append(req)
        if self.error is not None:
            raise self.error
        choices = []
        if self.content is not None:
            choices.append(CompletionChoice(index=0, message=ChatMessage(role="assistant", content=self.content)))
        return CompletionResult(provider="fake", model=req.model, choices=choices, raw={})


def _history(n):
    roles = ["user", "assistant"]
    return [{"role": roles[i % 2], "content": f"m{i}"} for i in range(n)]


def test_success_returns_reply():
    provider = FakeProvider(content="You are not alone.")
    res = MessageRelay(provider).handle(json.dumps({"message": "I feel stressed"}))
    assert res.status_code == 200
    assert res.body() == {"reply": "You are not alone."}


def test_prompt_layout_system_history_user():
    provider = FakeProvider()
    history = _history(3)
    MessageRelay(provider).handle({"message": "new", "conversationHistory": history})
    sent = provider.requests[0].messages
    assert sent[0] == ChatMessage(role="system", content=SYSTEM_PROMPT)
    assert [m.content for m in sent[1:-1]] == ["m0", "m1", "m2"]
    assert sent[-1] == ChatMessage(role="user", content="new")
    assert provider.requests[0].model == "therapist-chat"


def test_history_bounded_to_last_ten_in_order():
    provider = FakeProvider()
    MessageRelay(provider).handle({"message": "latest", "conversationHistory": _history(15)})
    sent = provider.requests[0].messages
    assert len(sent) == 12
    assert [m.content for m in sent[1:-1]] == [f"m{i}" for i in range(5, 15)]
    assert sent[-1].content == "latest"


@pytest.mark.parametrize("body", [{}, {"message": ""}, {"message": 42}, {"message": None}, []])
def test_missing_or_invalid_message_is_400(body):
    provider = FakeProvider()
    res = MessageRelay(provider).handle(json.dumps(body))
    assert res.status_code == 400
    assert res.body() == {"error": "Message is required"}
    assert "reply" not in res.body()
    assert provider.requests == []


def test_missing_credential_returns_unavailable_without_network(monkeypatch):
    class NoKey:
        openai_api_key = None
        http_timeout = 1.0
        openai_base_url = "https://api.openai.com/v1"

    def boom(*a, **kw):
        raise AssertionError("network must not be touched")

    monkeypatch.setattr("httpx.Client", boom)
    res = MessageRelay(OpenAIClient(NoKey())).handle({"message": "hello"})
    assert res.status_code == 200
    assert res.reply == SERVICE_UNAVAILABLE_REPLY
    assert res.error == "AI service not configured"


@pytest.mark.parametrize(
    "error",
    [
        ApiError(code="API_ERROR", message="upstream exploded: secret detail", http_status=500),
        RateLimitError(code="RATE_LIMIT", message="too many", http_status=429),
        NetworkError(code="NETWORK_ERROR", message="dns failure"),
    ],
)
def test_upstream_failure_returns_technical_difficulty(error, caplog):
    caplog.set_level(logging.ERROR, logger="relay_core")
    res = MessageRelay(FakeProvider(error=error)).handle({"message": "hello"})
    assert res.status_code == 200
    assert res.reply == TECHNICAL_DIFFICULTY_REPLY
    assert res.error == "Failed to get AI response"
    assert error.message not in json.dumps(res.body())
    records = [r for r in caplog.records if r.getMessage() == "Completion provider error"]
    assert records
    assert records[0].extra["detail"] == error.message


@pytest.mark.parametrize("content", ["", "   ", None])
def test_empty_completion_returns_listening_reply(content):
    res = MessageRelay(FakeProvider(content=content)).handle({"message": "hello"})
    assert res.status_code == 200
    assert res.body() == {"reply": LISTENING_REPLY}


@pytest.mark.parametrize(
    "body",
    [
        "{not json",
        b"",
        None,
        json.dumps({"message": "hi", "conversationHistory": "oops"}),
        json.dumps({"message": "hi", "conversationHistory": [{"role": "tool", "content": "x"}]}),
        json.dumps({"message": "hi", "conversationHistory": [{"role": "user"}]}),
    ],
)
def test_internal_fault_returns_apology(body):
    provider = FakeProvider()
    res = MessageRelay(provider).handle(body)
    assert res.status_code == 200
    assert res.body() == {"error": "Internal server error", "reply": APOLOGY_REPLY}
    assert provider.requests == []


def test_unexpected_provider_exception_is_absorbed():
    res = MessageRelay(FakeProvider(error=KeyError("choices"))).handle({"message": "hello"})
    assert res.status_code == 200
    assert res.reply == APOLOGY_REPLY


def test_null_history_is_empty():
    provider = FakeProvider()
    MessageRelay(provider).handle({"message": "hello", "conversationHistory": None})
    assert len(provider.requests[0].messages) == 2


def test_relay_with_parsed_request():
    provider = FakeProvider(content="ok")
    history = tuple(ChatMessage(role="user", content=f"h{i}") for i in range(12))
    res = MessageRelay(provider).relay(RelayRequest(message="now", conversation_history=history))
    assert res.reply == "ok"
    assert len(provider.requests[0].messages) == 12


def test_relay_rejects_empty_parsed_message():
    res = MessageRelay(FakeProvider()).relay(RelayRequest(message=""))
    assert res.status_code == 400


def test_bound_history_helpers():
    assert bound_history(None) == []
    assert bound_history([1, 2, 3], limit=2) == [2, 3]
    assert bound_history([1, 2], limit=0) == []
    msgs = build_messages([], "hi")
    assert [m.role for m in msgs] == ["system", "user"]


def test_chat_message_is_immutable():
    msg = ChatMessage(role="user", content="x")
    with pytest.raises(Exception):
        msg.content = "y"


def test_fallback_replies_are_byte_exact():
    class NoKey:
        openai_api_key = None
        http_timeout = 1.0
        openai_base_url = None

    unavailable = MessageRelay(OpenAIClient(NoKey())).handle({"message": "hi"}).reply
    technical = MessageRelay(FakeProvider(error=ApiError(code="API_ERROR", message="boom", http_status=500))).handle(
        {"message": "hi"}
    ).reply
    listening = MessageRelay(FakeProvider(content=None)).handle({"message": "hi"}).reply
    apology = MessageRelay(FakeProvider()).handle("{not json").reply

    assert unavailable == (
        "I'm here to support you, but I'm currently unable to connect to my AI service. "
        "Please try again later, or if you need immediate help, please contact the crisis resources available in the app."
    )
    assert technical == (
        "I'm experiencing some technical difficulties right now. I'm here for you though. "
        "Could you please try sending your message again? If this continues, please reach out to the crisis "
        "resources in the app if you need immediate support."
    )
    assert listening == "I'm here to listen. Could you tell me more about what you're experiencing?"
    assert apology == (
        "I apologize, but I'm having trouble processing that right now. I want to make sure I give you the "
        "support you deserve. Could you try again? If you need immediate help, please don't hesitate to use "
        "the crisis resources in the app."
    )
