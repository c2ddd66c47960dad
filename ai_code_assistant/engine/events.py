"""Events emitted by the orchestrator and the sink registry that fans them out."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Callable

from ai_code_assistant.core.utils.logger import get_logger

if TYPE_CHECKING:
    from ai_code_assistant.tools.calls import ToolCall

LOGGER = get_logger(__name__)


class EventKind(str, Enum):
    STATUS = "status"
    CHUNK = "chunk"
    RESPONSE = "response"
    ERROR = "error"
    TOOL_REQUEST = "tool_request"
    TOOL_RESULT = "tool_result"
    CLEAR = "clear"
    MODEL_CHANGED = "model_changed"
    AGENT_CHANGED = "agent_changed"


@dataclass(frozen=True)
class OrchestratorEvent:
    kind: EventKind
    value: str = ""
    is_user: bool = False
    call: ToolCall | None = None


OutputSink = Callable[[OrchestratorEvent], None]


class SinkRegistry:
    """Set of output sinks receiving every broadcast event.

    Sinks register and unregister independently of any chat session. A sink
    that raises is logged and skipped; the remaining sinks still receive the
    event.
    """

    def __init__(self) -> None:
        self._sinks: list[OutputSink] = []
        self._lock = threading.Lock()

    def add(self, sink: OutputSink) -> OutputSink:
        with self._lock:
            if sink not in self._sinks:
                self._sinks.append(sink)
        return sink

    def remove(self, sink: OutputSink) -> bool:
        with self._lock:
            if sink in self._sinks:
                self._sinks.remove(sink)
                return True
            return False

    def __len__(self) -> int:
        with self._lock:
            return len(self._sinks)

    def broadcast(self, event: OrchestratorEvent) -> None:
        with self._lock:
            sinks = list(self._sinks)
        for sink in sinks:
            self.deliver(sink, event)

    @staticmethod
    def deliver(sink: OutputSink, event: OrchestratorEvent) -> None:
        try:
            sink(event)
        except Exception:
            LOGGER.exception("Output sink %r failed on %s event", sink, event.kind.value)


__all__ = ["EventKind", "OrchestratorEvent", "OutputSink", "SinkRegistry"]
