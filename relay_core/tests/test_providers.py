import pytest

from relay_core.providers import create_provider
from relay_core.providers.openai_client import OpenAIClient
from relay_core.providers.registry import get_provider_config


class DummySettings:
    default_provider = "openai"
    openai_api_key = "sk-test"
    http_timeout = 1.0
    openai_base_url = "https://api.openai.com/v1"


def test_create_provider_default():
    provider = create_provider(cfg=DummySettings())
    assert isinstance(provider, OpenAIClient)
    assert provider.name == "openai"


def test_create_provider_explicit_case_insensitive():
    assert isinstance(create_provider("OpenAI", cfg=DummySettings()), OpenAIClient)


def test_create_provider_unknown():
    with pytest.raises(KeyError):
        create_provider("kimi", cfg=DummySettings())


def test_registry_fixed_model():
    cfg = get_provider_config("openai").models["therapist-chat"]
    assert cfg.provider_model == "gpt-3.5-turbo"
    assert cfg.max_tokens == 500
    assert cfg.default_temperature == 0.7
