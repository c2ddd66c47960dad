"""Shared primitives for chat-completion HTTP clients."""

from __future__ import annotations

import json
import random
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable

import requests

from ai_code_assistant.core.utils.logger import get_logger

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence

LOGGER = get_logger(__name__)


class LLMError(RuntimeError):
    """Base error for completion service failures."""


class LLMConnectionError(LLMError):
    """Network or transport level failure."""


class LLMTimeoutError(LLMError):
    """The service did not answer in time."""


class LLMRateLimitError(LLMError):
    """The service rejected the request because of rate limiting."""


class LLMResponseError(LLMError):
    """The service answered with an error status or an unreadable payload."""


class LLMRetryExhaustedError(LLMError):
    """All retry attempts failed."""


@dataclass
class Message:
    """Role/content pair sent to the completion service."""

    role: str
    content: str | None = None

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"role": self.role}
        if self.content is not None:
            payload["content"] = self.content
        return payload


@dataclass
class RetryConfig:
    max_retries: int = 3
    initial_delay: float = 0.5
    max_delay: float = 30.0
    backoff_multiplier: float = 2.0
    jitter_ratio: float = 0.1
    retryable_status_codes: set[int] = field(default_factory=lambda: {429, 500, 502, 503, 504})


@dataclass
class StreamHooks:
    """Optional callbacks fired while a completion streams."""

    on_start: Callable[[], None] | None = None
    on_chunk: Callable[[str], None] | None = None
    on_complete: Callable[[str], None] | None = None
    on_error: Callable[[Exception], None] | None = None


class HTTPChatLLMClient(ABC):
    """OpenAI-compatible chat-completions client built on ``requests``."""

    _COMPLETIONS_PATH = "/chat/completions"
    _MODELS_PATH = "/models"

    def __init__(
        self,
        provider_name: str,
        api_key: str,
        model: str,
        *,
        base_url: str,
        timeout: float = 120.0,
        retry_config: RetryConfig | None = None,
    ) -> None:
        self._provider_name = provider_name
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.retry_config = retry_config or RetryConfig()

    # Configuration ------------------------------------------------------

    def configure_retry(self, retry_config: RetryConfig) -> None:
        self.retry_config = retry_config

    def configure_timeout(self, timeout: float) -> None:
        self.timeout = timeout

    # Payload ------------------------------------------------------------

    @abstractmethod
    def _prepare_payload(
        self,
        messages: Sequence[Message],
        temperature: float,
        max_tokens: int | None,
        top_p: float | None = None,
    ) -> dict[str, Any]:
        """Return the JSON body for a completion request."""

    def _build_headers(self, extra_headers: dict[str, str] | None = None) -> dict[str, str]:
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        if extra_headers:
            headers.update(extra_headers)
        return headers

    def _request_url(self) -> str:
        return f"{self.base_url}{self._COMPLETIONS_PATH}"

    # Public API ---------------------------------------------------------

    def stream(
        self,
        messages: Sequence[Message],
        temperature: float = 0.0,
        max_tokens: int | None = None,
        top_p: float | None = None,
        extra_headers: dict[str, str] | None = None,
        hooks: StreamHooks | None = None,
    ) -> Iterator[str]:
        """Yield content chunks as the service produces them.

        Only the opening request is retried; once chunks have been handed to
        the caller a failure is raised as is.
        """
        hooks = hooks or StreamHooks()
        payload = self._prepare_payload(messages, temperature, max_tokens, top_p)
        payload["stream"] = True
        collected: list[str] = []

        try:
            if hooks.on_start:
                hooks.on_start()
            response = self._send_with_retry(
                lambda: requests.post(
                    self._request_url(),
                    headers=self._build_headers(extra_headers),
                    json=payload,
                    timeout=self.timeout,
                    stream=True,
                )
            )

            with response:
                for line in response.iter_lines(decode_unicode=True):
                    if not line or not line.startswith("data:"):
                        continue
                    data = line[len("data:") :].strip()
                    if data == "[DONE]":
                        break
                    try:
                        event = json.loads(data)
                    except json.JSONDecodeError:
                        LOGGER.debug("Skipping undecodable stream line: %r", data[:200])
                        continue
                    chunk = self._parse_stream_delta(event)
                    if chunk is None:
                        continue
                    collected.append(chunk)
                    if hooks.on_chunk:
                        hooks.on_chunk(chunk)
                    yield chunk
        except LLMError as exc:
            if hooks.on_error:
                hooks.on_error(exc)
            raise
        except requests.RequestException as exc:
            error = self._wrap_transport_error(exc)
            if hooks.on_error:
                hooks.on_error(error)
            raise error from exc

        if hooks.on_complete:
            hooks.on_complete("".join(collected))

    def list_models(self) -> list[dict[str, Any]]:
        """Return the model descriptors advertised by the service."""
        response = self._send_with_retry(
            lambda: requests.get(
                f"{self.base_url}{self._MODELS_PATH}",
                headers=self._build_headers(),
                timeout=self.timeout,
            )
        )
        data = self._decode_json(response)
        models = data.get("data") if isinstance(data, dict) else None
        if not isinstance(models, list):
            raise LLMResponseError(f"No models returned from {self._provider_name} API")
        return [model for model in models if isinstance(model, dict)]

    # Transport ----------------------------------------------------------

    def _send_with_retry(self, send: Callable[[], Any]) -> Any:
        """Issue ``send()`` until it returns a non-error response.

        Transport failures and retryable statuses are retried with backoff;
        other error statuses raise immediately. Streamed bodies are closed
        before a retry.
        """
        last_error: LLMError | None = None
        attempts = self.retry_config.max_retries

        for attempt in range(1, attempts + 1):
            try:
                response = send()
            except Exception as exc:
                last_error = self._wrap_transport_error(exc)
                LOGGER.warning(
                    "%s request failed (attempt %d/%d): %s",
                    self._provider_name,
                    attempt,
                    attempts,
                    last_error,
                )
            else:
                if response.status_code < 400:
                    return response
                error = self._error_from_status(response.status_code, response.text)
                close = getattr(response, "close", None)
                if callable(close):
                    close()
                if response.status_code not in self.retry_config.retryable_status_codes:
                    raise error
                last_error = error
                LOGGER.warning(
                    "%s returned %s (attempt %d/%d)",
                    self._provider_name,
                    response.status_code,
                    attempt,
                    attempts,
                )

            if attempt < attempts:
                time.sleep(self._calculate_delay(attempt))

        if last_error is None:
            raise LLMRetryExhaustedError(
                f"{self._provider_name} request failed for an unknown reason"
            )
        if isinstance(last_error, (LLMConnectionError, LLMTimeoutError)):
            raise last_error
        raise LLMRetryExhaustedError(
            f"{self._provider_name} request failed after {attempts} attempts: {last_error}"
        ) from last_error

    def _calculate_delay(self, attempt: int) -> float:
        config = self.retry_config
        delay = min(config.initial_delay * (config.backoff_multiplier ** (attempt - 1)), config.max_delay)
        if config.jitter_ratio > 0:
            spread = delay * config.jitter_ratio
            delay = random.uniform(max(0.0, delay - spread), delay + spread)
        return delay

    def _wrap_transport_error(self, exc: Exception) -> LLMError:
        if isinstance(exc, LLMError):
            return exc
        if isinstance(exc, requests.Timeout):
            return LLMTimeoutError(f"{self._provider_name} request timed out: {exc}")
        return LLMConnectionError(f"{self._provider_name} connection failed: {exc}")

    def _error_from_status(self, status_code: int, body: str) -> LLMError:
        detail = (body or "").strip()[:500]
        message = f"{self._provider_name} API error {status_code}: {detail}"
        if status_code == 429:
            return LLMRateLimitError(message)
        if status_code in {408, 504}:
            return LLMTimeoutError(message)
        if status_code in {502, 503}:
            return LLMConnectionError(message)
        return LLMResponseError(message)

    def _decode_json(self, response: Any) -> dict[str, Any]:
        try:
            return response.json()
        except (json.JSONDecodeError, ValueError) as exc:
            raise LLMResponseError(
                f"{self._provider_name} returned invalid JSON: {exc}"
            ) from exc

    def _parse_stream_delta(self, event: dict[str, Any]) -> str | None:
        try:
            content = event["choices"][0]["delta"].get("content")
        except (KeyError, IndexError, TypeError, AttributeError):
            return None
        if content is None or content == "":
            return None
        return str(content)


__all__ = [
    "HTTPChatLLMClient",
    "LLMConnectionError",
    "LLMError",
    "LLMRateLimitError",
    "LLMResponseError",
    "LLMRetryExhaustedError",
    "LLMTimeoutError",
    "Message",
    "RetryConfig",
    "StreamHooks",
]
