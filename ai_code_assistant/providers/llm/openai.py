"""OpenAI API client implementation."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .base import HTTPChatLLMClient, Message, RetryConfig

if TYPE_CHECKING:
    from collections.abc import Sequence

DEFAULT_BASE_URL = "https://api.openai.com/v1"

# Reasoning models reject sampling parameters
MODELS_WITHOUT_SAMPLING = frozenset({"o1", "o1-mini", "o1-preview", "o3", "o3-mini"})


def supports_sampling(model: str) -> bool:
    return model.split("/")[-1].lower() not in MODELS_WITHOUT_SAMPLING


class OpenAIClient(HTTPChatLLMClient):
    """Chat-completions client for the OpenAI API."""

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
            "OpenAI",
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
        }
        if supports_sampling(self.model):
            payload["temperature"] = temperature
            if top_p is not None:
                payload["top_p"] = top_p
        if max_tokens is not None:
            payload["max_tokens"] = max_tokens
        return payload


__all__ = ["DEFAULT_BASE_URL", "OpenAIClient", "supports_sampling"]
