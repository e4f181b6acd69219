import httpx
import pytest

from relay_core.providers.openai_client import OpenAIClient
from relay_core.domain.models import ChatMessage, CompletionRequest
from relay_core.domain.exceptions import ApiError, NetworkError, RateLimitError, ValidationError


class SettingsStub:
    openai_api_key = "sk-test"
    http_timeout = 1.0
    openai_base_url = "https://api.openai.com/v1"


def _request():
    return CompletionRequest(
        provider="openai",
        model="therapist-chat",
        messages=[ChatMessage(role="system", content="sys"), ChatMessage(role="user", content="hi")],
    )


def _fake_client(resp=None, captured=None, error=None):
    class Client:
        def __init__(self, *a, **kw):
            pass

        def __enter__(self):
            return self

        def __exit__(self, *a):
            return False

        def post(self, url, json=None, headers=None, **_):
            if captured is not None:
                captured["url"] = url
                captured["payload"] = json
                captured["headers"] = headers
            if error is not None:
                raise error
            return resp

    return Client


class Resp:
    def __init__(self, status_code=200, data=None, text=""):
        self.status_code = status_code
        self._data = data
        self.text = text

    def json(self):
        if self._data is None:
            raise ValueError("not json")
        return self._data


def test_openai_client_parse_basic(monkeypatch):
    data = {
        "choices": [{"message": {"role": "assistant", "content": "ok"}, "finish_reason": "stop"}],
        "usage": {"prompt_tokens": 1, "completion_tokens": 1, "total_tokens": 2},
    }
    monkeypatch.setattr("httpx.Client", _fake_client(Resp(data=data)))
    res = OpenAIClient(SettingsStub()).chat(_request())
    assert res.text == "ok"
    assert res.choices[0].finish_reason == "stop"
    assert res.usage.total_tokens == 2


def test_openai_client_fixed_payload(monkeypatch):
    captured = {}
    monkeypatch.setattr("httpx.Client", _fake_client(Resp(data={"choices": []}), captured))
    OpenAIClient(SettingsStub()).chat(_request())
    payload = captured["payload"]
    assert captured["url"] == "https://api.openai.com/v1/chat/completions"
    assert captured["headers"]["Authorization"] == "Bearer sk-test"
    assert payload["model"] == "gpt-3.5-turbo"
    assert payload["temperature"] == 0.7
    assert payload["max_tokens"] == 500
    assert payload["messages"] == [
        {"role": "system", "content": "sys"},
        {"role": "user", "content": "hi"},
    ]


def test_openai_client_missing_key_skips_network(monkeypatch):
    class NoKey(SettingsStub):
        openai_api_key = None

    def boom(*a, **kw):
        raise AssertionError("network must not be touched")

    monkeypatch.setattr("httpx.Client", boom)
    with pytest.raises(ValidationError) as exc:
        OpenAIClient(NoKey()).chat(_request())
    assert exc.value.code == "MISSING_API_KEY"


def test_openai_client_rate_limit(monkeypatch):
    monkeypatch.setattr("httpx.Client", _fake_client(Resp(status_code=429, text="slow down")))
    with pytest.raises(RateLimitError):
        OpenAIClient(SettingsStub()).chat(_request())


def test_openai_client_api_error(monkeypatch):
    monkeypatch.setattr("httpx.Client", _fake_client(Resp(status_code=500, text="boom upstream")))
    with pytest.raises(ApiError) as exc:
        OpenAIClient(SettingsStub()).chat(_request())
    assert exc.value.http_status == 500
    assert exc.value.message == "boom upstream"


def test_openai_client_network_error(monkeypatch):
    err = httpx.ConnectError("connection refused")
    monkeypatch.setattr("httpx.Client", _fake_client(error=err))
    with pytest.raises(NetworkError):
        OpenAIClient(SettingsStub()).chat(_request())


def test_openai_client_unparseable_body(monkeypatch):
    monkeypatch.setattr("httpx.Client", _fake_client(Resp(data=None, text="<html>")))
    res = OpenAIClient(SettingsStub()).chat(_request())
    assert res.choices == []
    assert res.text == ""


def test_openai_client_null_content(monkeypatch):
    data = {"choices": [{"message": {"role": "assistant", "content": None}}]}
    monkeypatch.setattr("httpx.Client", _fake_client(Resp(data=data)))
    res = OpenAIClient(SettingsStub()).chat(_request())
    assert res.text == ""


def test_openai_client_falls_back_to_registry_base_url(monkeypatch):
    class NoBaseSettings(SettingsStub):
        openai_base_url = None

    captured = {}
    resp = Resp(data={"choices": [{"message": {"content": "ok"}}]})
    monkeypatch.setattr(httpx, "Client", _fake_client(resp=resp, captured=captured))
    OpenAIClient(NoBaseSettings()).chat(_request())
    assert captured["url"] == "https://api.openai.com/v1/chat/completions"
    assert captured["payload"]["model"] == "gpt-3.5-turbo"
