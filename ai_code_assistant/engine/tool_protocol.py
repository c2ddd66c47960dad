"""Detection and confirmation of tool blocks embedded in model output."""

from __future__ import annotations

import json
import re
import threading
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Callable
from uuid import uuid4

from ai_code_assistant.core.utils.logger import get_logger
from ai_code_assistant.tools.calls import ToolCall, ToolParseError
from ai_code_assistant.tools.prompt import TOOL_BLOCK_CLOSE, TOOL_BLOCK_OPEN

if TYPE_CHECKING:
    from ai_code_assistant.tools.executor import ToolExecutor

LOGGER = get_logger(__name__)

TOOL_BLOCK_PATTERN = re.compile(
    re.escape(TOOL_BLOCK_OPEN) + r"(.*?)" + re.escape(TOOL_BLOCK_CLOSE), re.DOTALL
)

EXPIRED_MESSAGE = "Error: Tool call expired or invalid."
CANCELLED_MESSAGE = "Tool execution cancelled."


class ToolOutcomeStatus(str, Enum):
    EXECUTED = "executed"
    CANCELLED = "cancelled"
    EXPIRED = "expired"


@dataclass(frozen=True)
class ToolOutcome:
    call_id: str
    status: ToolOutcomeStatus
    message: str
    call: ToolCall | None = None


def _new_call_id() -> str:
    return f"tool-{uuid4().hex}"


def parse_tool_blocks(text: str) -> list[tuple[str, ToolCall | ToolParseError]]:
    """Parse every tool block in ``text``; failures are returned, not raised."""
    parsed: list[tuple[str, ToolCall | ToolParseError]] = []
    for match in TOOL_BLOCK_PATTERN.finditer(text or ""):
        body = match.group(1)
        try:
            payload = json.loads(body)
        except json.JSONDecodeError as exc:
            parsed.append((body, ToolParseError(f"Invalid JSON in tool block: {exc}")))
            continue
        try:
            parsed.append((body, ToolCall.from_payload(payload, _new_call_id())))
        except ToolParseError as exc:
            parsed.append((body, exc))
    return parsed


class ToolCallProtocol:
    """Tracks tool calls awaiting confirmation and routes decisions to the executor.

    Every detected call is stored under a fresh id. ``resolve`` removes the
    entry before doing anything else, so each id resolves at most once.
    """

    def __init__(
        self,
        executor: ToolExecutor,
        *,
        on_request: Callable[[ToolCall], None] | None = None,
    ) -> None:
        self.executor = executor
        self.on_request = on_request
        self._pending: dict[str, ToolCall] = {}
        self._lock = threading.Lock()

    @property
    def pending(self) -> list[ToolCall]:
        with self._lock:
            return list(self._pending.values())

    def is_pending(self, call_id: str) -> bool:
        with self._lock:
            return call_id in self._pending

    def clear(self) -> None:
        with self._lock:
            self._pending.clear()

    def detect(self, response_text: str) -> list[ToolCall]:
        """Register every well-formed tool block of a completed response, in order."""
        calls: list[ToolCall] = []
        for body, result in parse_tool_blocks(response_text):
            if isinstance(result, ToolParseError):
                LOGGER.warning("Failed to parse tool call: %s | block=%r", result, body[:200])
                continue
            with self._lock:
                self._pending[result.id] = result
            calls.append(result)

        for call in calls:
            self._notify(call)
        if calls:
            LOGGER.info("Detected %d tool call(s): %s", len(calls), [c.tool for c in calls])
        return calls

    def resolve(self, call_id: str, confirmed: bool) -> ToolOutcome:
        with self._lock:
            call = self._pending.pop(call_id, None)

        if call is None:
            LOGGER.info("Ignoring resolution for unknown tool call %s", call_id)
            return ToolOutcome(call_id, ToolOutcomeStatus.EXPIRED, EXPIRED_MESSAGE)

        if not confirmed:
            LOGGER.info("Tool call %s (%s) rejected", call_id, call.tool)
            return ToolOutcome(call_id, ToolOutcomeStatus.CANCELLED, CANCELLED_MESSAGE, call)

        result = self.executor.execute(call)
        return ToolOutcome(call_id, ToolOutcomeStatus.EXECUTED, result, call)

    def confirm(self, call_id: str) -> ToolOutcome:
        return self.resolve(call_id, True)

    def reject(self, call_id: str) -> ToolOutcome:
        return self.resolve(call_id, False)

    def _notify(self, call: ToolCall) -> None:
        if self.on_request is None:
            return
        try:
            self.on_request(call)
        except Exception:
            LOGGER.exception("Tool confirmation listener failed for %s", call.id)


__all__ = [
    "CANCELLED_MESSAGE",
    "EXPIRED_MESSAGE",
    "TOOL_BLOCK_PATTERN",
    "ToolCallProtocol",
    "ToolOutcome",
    "ToolOutcomeStatus",
    "parse_tool_blocks",
]
