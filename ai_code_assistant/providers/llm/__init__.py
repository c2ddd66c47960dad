"""Completion service clients."""

from __future__ import annotations

from ai_code_assistant.core.utils.config import ConfigurationError

from .base import (
    HTTPChatLLMClient,
    LLMConnectionError,
    LLMError,
    LLMRateLimitError,
    LLMResponseError,
    LLMRetryExhaustedError,
    LLMTimeoutError,
    Message,
    RetryConfig,
    StreamHooks,
)
from .groq import DEFAULT_BASE_URL as GROQ_DEFAULT_BASE_URL
from .groq import GroqClient
from .openai import DEFAULT_BASE_URL as OPENAI_DEFAULT_BASE_URL
from .openai import OpenAIClient

LLMClient = HTTPChatLLMClient

_PROVIDERS: dict[str, type[HTTPChatLLMClient]] = {
    "groq": GroqClient,
    "openai": OpenAIClient,
}


def create_client(
    provider: str,
    api_key: str,
    model: str,
    *,
    base_url: str | None = None,
    timeout: float = 120.0,
    retry_config: RetryConfig | None = None,
) -> HTTPChatLLMClient:
    """Instantiate the client registered for ``provider``."""
    client_cls = _PROVIDERS.get((provider or "").lower())
    if client_cls is None:
        raise ConfigurationError(
            f"Unsupported provider '{provider}'. Choose one of: {', '.join(sorted(_PROVIDERS))}"
        )
    kwargs = {"timeout": timeout, "retry_config": retry_config}
    if base_url:
        kwargs["base_url"] = base_url
    return client_cls(api_key, model, **kwargs)


__all__ = [
    "GROQ_DEFAULT_BASE_URL",
    "GroqClient",
    "HTTPChatLLMClient",
    "LLMClient",
    "LLMConnectionError",
    "LLMError",
    "LLMRateLimitError",
    "LLMResponseError",
    "LLMRetryExhaustedError",
    "LLMTimeoutError",
    "Message",
    "OPENAI_DEFAULT_BASE_URL",
    "OpenAIClient",
    "RetryConfig",
    "StreamHooks",
    "create_client",
]
