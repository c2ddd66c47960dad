"""External service provider integrations."""

from __future__ import annotations

from . import llm
from .llm import (
    GROQ_DEFAULT_BASE_URL,
    OPENAI_DEFAULT_BASE_URL,
    LLMClient,
    LLMError,
    Message,
    RetryConfig,
    StreamHooks,
    create_client,
)

__all__ = [
    "GROQ_DEFAULT_BASE_URL",
    "LLMClient",
    "LLMError",
    "Message",
    "OPENAI_DEFAULT_BASE_URL",
    "RetryConfig",
    "StreamHooks",
    "create_client",
    "llm",
]
