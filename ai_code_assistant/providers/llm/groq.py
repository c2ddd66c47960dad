"""Groq API client implementation."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .base import HTTPChatLLMClient, Message, RetryConfig

if TYPE_CHECKING:
    from collections.abc import Sequence

DEFAULT_BASE_URL = "https://api.groq.com/openai/v1"


class GroqClient(HTTPChatLLMClient):
    """Chat-completions client for Groq's OpenAI-compatible endpoint."""

    def __init__(
        self,
        api_key: str,
        model: str,
        *,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 120.0,
        retry_config: RetryConfig | None = None,
    ) -> None:
        super().__init__(
            "Groq",
            api_key,
            model,
            base_url=base_url,
            timeout=timeout,
            retry_config=retry_config,
        )

    def _prepare_payload(
        self,
        messages: Sequence[Message],
        temperature: float,
        max_tokens: int | None,
        top_p: float | None = None,
    ) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "model": self.model,
            "messages": [message.to_payload() for message in messages],
            "temperature": temperature,
            "stop": None,
        }
        if max_tokens is not None:
            payload["max_tokens"] = max_tokens
        if top_p is not None:
            payload["top_p"] = top_p
        return payload


__all__ = ["DEFAULT_BASE_URL", "GroqClient"]
