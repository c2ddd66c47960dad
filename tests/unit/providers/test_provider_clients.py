"""Tests for concrete provider clients and the client factory."""

from __future__ import annotations

import pytest

from ai_code_assistant.core.utils.config import ConfigurationError
from ai_code_assistant.providers.llm import (
    GROQ_DEFAULT_BASE_URL,
    OPENAI_DEFAULT_BASE_URL,
    GroqClient,
    Message,
    OpenAIClient,
    RetryConfig,
    create_client,
)
from ai_code_assistant.providers.llm.openai import supports_sampling


def test_groq_payload_carries_sampling_and_stop():
    client = GroqClient("key", "llama3-70b-8192")

    payload = client._prepare_payload(
        [Message("system", "rules"), Message("user", "hi")], 0.5, 4096, 1.0
    )

    assert payload == {
        "model": "llama3-70b-8192",
        "messages": [{"role": "system", "content": "rules"}, {"role": "user", "content": "hi"}],
        "temperature": 0.5,
        "stop": None,
        "max_tokens": 4096,
        "top_p": 1.0,
    }
    assert client.base_url == GROQ_DEFAULT_BASE_URL


def test_groq_payload_omits_unset_limits():
    payload = GroqClient("key", "m")._prepare_payload([Message("user", "hi")], 0.2, None)

    assert "max_tokens" not in payload
    assert "top_p" not in payload


def test_openai_reasoning_models_skip_sampling():
    assert supports_sampling("gpt-4o")
    assert not supports_sampling("o1-mini")
    assert not supports_sampling("openai/o3")

    payload = OpenAIClient("key", "o1")._prepare_payload([Message("user", "hi")], 0.7, 100, 0.9)

    assert "temperature" not in payload and "top_p" not in payload
    assert payload["max_tokens"] == 100


def test_create_client_selects_provider_and_options():
    retry = RetryConfig(max_retries=1)

    groq = create_client("Groq", "key", "model", timeout=9.0, retry_config=retry)
    openai = create_client("openai", "key", "gpt-4o", base_url="http://localhost:8080/v1")

    assert isinstance(groq, GroqClient)
    assert groq.timeout == 9.0
    assert groq.retry_config is retry
    assert isinstance(openai, OpenAIClient)
    assert openai.base_url == "http://localhost:8080/v1"
    assert create_client("openai", "k", "m").base_url == OPENAI_DEFAULT_BASE_URL


def test_create_client_rejects_unknown_provider():
    with pytest.raises(ConfigurationError, match="Unsupported provider 'acme'"):
        create_client("acme", "key", "model")
