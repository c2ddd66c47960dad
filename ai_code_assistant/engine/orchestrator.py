"""Conversation control loop tying memory, the completion service and tools together.

A turn runs through ``CONTEXT_RETRIEVAL -> STREAMING -> TOOL_SCAN`` and back to
``IDLE``. Only one turn may be in flight at a time; a second ``send_message``
while the first is still running is rejected with an error event. Tool calls
detected in a reply stay pending until ``resolve_tool`` is called, or are
resolved immediately when the approval policy allows their category.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable

from ai_code_assistant.core.approval import ApprovalPolicy
from ai_code_assistant.core.utils.config import ConfigurationError
from ai_code_assistant.core.utils.constants import (
    DEFAULT_MAX_TOKENS,
    DEFAULT_MODEL,
    DEFAULT_PROVIDER,
    DEFAULT_RETRIEVAL_LIMIT,
    DEFAULT_TEMPERATURE,
    DEFAULT_TOP_P,
)
from ai_code_assistant.core.utils.logger import get_logger, set_correlation_id
from ai_code_assistant.memory.retrieval import RetrievalEngine
from ai_code_assistant.providers.llm import Message, RetryConfig, create_client
from ai_code_assistant.tools import ToolExecutor, build_tool_instructions

from .events import EventKind, OrchestratorEvent, OutputSink, SinkRegistry
from .tool_protocol import ToolCallProtocol, ToolOutcome, ToolOutcomeStatus

if TYPE_CHECKING:
    from ai_code_assistant.core.utils.config import Settings
    from ai_code_assistant.memory.index import IndexStatus, WorkspaceIndex
    from ai_code_assistant.session import AgentProfile, ChatHistoryManager, ChatSession
    from ai_code_assistant.tools.calls import ToolCall

LOGGER = get_logger(__name__)

SEARCHING_STATUS = "(Searching workspace memory...)"
MISSING_CREDENTIAL_MESSAGE = (
    "Please set your API key first (api_key in the config file or CODEASSIST_API_KEY)."
)
BUSY_MESSAGE = "A response is still being generated. Wait for it to finish."


@dataclass(frozen=True)
class SamplingParams:
    temperature: float = DEFAULT_TEMPERATURE
    max_tokens: int = DEFAULT_MAX_TOKENS
    top_p: float = DEFAULT_TOP_P


@dataclass(frozen=True)
class OrchestratorConfig:
    """Values read at the start of every turn; replace via ``update_config``."""

    credential: str | None = None
    model: str = DEFAULT_MODEL
    system_prompt_override: str | None = None
    sampling: SamplingParams = field(default_factory=SamplingParams)
    provider: str = DEFAULT_PROVIDER
    base_url: str | None = None
    request_timeout: float = 120.0
    retry: RetryConfig = field(default_factory=RetryConfig)


def config_from_settings(settings: Settings) -> OrchestratorConfig:
    return OrchestratorConfig(
        credential=settings.api_key,
        model=settings.model,
        system_prompt_override=settings.system_prompt,
        sampling=SamplingParams(
            temperature=settings.temperature,
            max_tokens=settings.max_tokens,
            top_p=settings.top_p,
        ),
        provider=settings.provider,
        base_url=settings.base_url,
        request_timeout=settings.request_timeout,
        retry=RetryConfig(
            max_retries=settings.retry_max_attempts,
            initial_delay=settings.retry_initial_delay,
            max_delay=settings.retry_max_delay,
        ),
    )


ClientFactory = Callable[[OrchestratorConfig], Any]


def default_client_factory(config: OrchestratorConfig) -> Any:
    return create_client(
        config.provider,
        config.credential or "",
        config.model,
        base_url=config.base_url,
        timeout=config.request_timeout,
        retry_config=config.retry,
    )


@dataclass(frozen=True)
class EditorContext:
    """Text the user is currently looking at, supplied by the host."""

    text: str
    language: str = ""


class TurnState(str, Enum):
    IDLE = "idle"
    CONTEXT_RETRIEVAL = "context_retrieval"
    STREAMING = "streaming"
    TOOL_SCAN = "tool_scan"


@dataclass
class TurnResult:
    response: str = ""
    tool_calls: list[ToolCall] = field(default_factory=list)
    auto_resolved: list[ToolOutcome] = field(default_factory=list)
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def format_tool_result(outcome: ToolOutcome) -> str:
    """Render a resolution as the assistant message appended to the history."""
    if outcome.status is ToolOutcomeStatus.CANCELLED:
        return f"*{outcome.message}*"
    return f"*Tool Result:*\n```\n{outcome.message}\n```"


class AgentOrchestrator:
    """Owns the active chat session and drives each conversational turn."""

    def __init__(
        self,
        config: OrchestratorConfig,
        *,
        history: ChatHistoryManager,
        index: WorkspaceIndex | None = None,
        retrieval: RetrievalEngine | None = None,
        executor: ToolExecutor | None = None,
        client_factory: ClientFactory | None = None,
        approval_policy: ApprovalPolicy | None = None,
        context_provider: Callable[[], EditorContext | None] | None = None,
        retrieval_limit: int = DEFAULT_RETRIEVAL_LIMIT,
    ) -> None:
        self._config = config
        self.history = history
        self.index = index
        self.retrieval = retrieval or (RetrievalEngine(index) if index is not None else None)
        self.executor = executor or ToolExecutor(index.root if index is not None else None)
        self.client_factory = client_factory or default_client_factory
        self.approval_policy = approval_policy or ApprovalPolicy()
        self.context_provider = context_provider
        self.retrieval_limit = retrieval_limit

        self.sinks = SinkRegistry()
        self.protocol = ToolCallProtocol(self.executor, on_request=self._on_tool_request)
        self._turn_lock = threading.Lock()
        self._session_lock = threading.RLock()
        self._state = TurnState.IDLE
        self._session = history.create_session(model=config.model)

    # Properties ---------------------------------------------------------

    @property
    def config(self) -> OrchestratorConfig:
        return self._config

    @property
    def session(self) -> ChatSession:
        return self._session

    @property
    def state(self) -> TurnState:
        return self._state

    @property
    def is_busy(self) -> bool:
        return self._turn_lock.locked()

    @property
    def workspace_root(self) -> Path | None:
        if self.index is not None and self.index.root is not None:
            return self.index.root
        return self.executor.workspace_root

    def pending_tool_calls(self) -> list[ToolCall]:
        return self.protocol.pending

    # Output sinks -------------------------------------------------------

    def add_sink(self, sink: OutputSink, *, replay: bool = False) -> OutputSink:
        """Register ``sink``; with ``replay`` it first receives the current session."""
        if replay:
            for event in self._replay_events():
                SinkRegistry.deliver(sink, event)
        return self.sinks.add(sink)

    def remove_sink(self, sink: OutputSink) -> bool:
        return self.sinks.remove(sink)

    def broadcast(self, kind: EventKind, value: str = "", **extra: Any) -> None:
        self.sinks.broadcast(OrchestratorEvent(kind=kind, value=value, **extra))

    # Configuration ------------------------------------------------------

    def update_config(self, **changes: Any) -> OrchestratorConfig:
        """Replace configuration fields; the next turn picks them up."""
        previous = self._config
        self._config = replace(previous, **changes)
        if self._config.model != previous.model:
            LOGGER.info("Model changed from %s to %s", previous.model, self._config.model)
            with self._session_lock:
                self._session.model = self._config.model
            self.broadcast(EventKind.MODEL_CHANGED, self._config.model)
        return self._config

    def apply_agent(self, agent: AgentProfile) -> None:
        self.update_config(system_prompt_override=agent.system_prompt or None)
        self.broadcast(EventKind.AGENT_CHANGED, agent.name)

    # Sessions -----------------------------------------------------------

    def new_session(self) -> ChatSession:
        with self._session_lock:
            self._session = self.history.create_session(model=self._config.model)
            self.protocol.clear()
        self.broadcast(EventKind.CLEAR)
        return self._session

    def load_session(self, session_id: str) -> ChatSession | None:
        session = self.history.get_session(session_id)
        if session is None:
            LOGGER.warning("Session %s not found", session_id)
            return None
        with self._session_lock:
            self._session = session
            self.protocol.clear()
        self.broadcast(EventKind.CLEAR)
        for event in self._replay_events():
            self.sinks.broadcast(event)
        return session

    def _replay_events(self) -> list[OrchestratorEvent]:
        return [
            OrchestratorEvent(EventKind.RESPONSE, message.content, is_user=message.role == "user")
            for message in self._session.messages
            if message.role in ("user", "assistant")
        ]

    def _record(self, role: str, content: str) -> None:
        with self._session_lock:
            self._session.add(role, content)
            self.history.save_session(self._session)

    # Workspace memory ---------------------------------------------------

    def reindex_workspace(self, *, background: bool = False) -> bool:
        if self.index is None:
            return False
        if background:
            return self.index.scan_in_background() is not None
        return self.index.scan()

    def memory_status(self) -> IndexStatus | None:
        return self.index.status() if self.index is not None else None

    # Turns --------------------------------------------------------------

    def send_message(self, text: str) -> TurnResult:
        """Run one conversational turn for ``text``.

        Failures never propagate: they are reported as error events and in
        the returned ``TurnResult``.
        """
        if not self._turn_lock.acquire(blocking=False):
            LOGGER.warning("Rejected message while a turn is in flight")
            self.broadcast(EventKind.ERROR, BUSY_MESSAGE)
            return TurnResult(error=BUSY_MESSAGE)

        set_correlation_id(self._session.id)
        try:
            return self._run_turn(text)
        except Exception as exc:
            LOGGER.exception("Turn failed")
            message = f"Error: {exc}"
            self.broadcast(EventKind.ERROR, message)
            return TurnResult(error=message)
        finally:
            self._state = TurnState.IDLE
            set_correlation_id(None)
            self._turn_lock.release()

    def _run_turn(self, text: str) -> TurnResult:
        self._record("user", text)

        config = self._config
        if not config.credential:
            error = ConfigurationError(MISSING_CREDENTIAL_MESSAGE)
            LOGGER.warning("No credential configured; skipping completion request")
            self.broadcast(EventKind.ERROR, str(error))
            return TurnResult(error=str(error))

        self._state = TurnState.CONTEXT_RETRIEVAL
        self.broadcast(EventKind.STATUS, SEARCHING_STATUS)
        messages = [Message("system", self._build_system_prompt(text))]
        messages.extend(Message(item.role, item.content) for item in self._session.messages)

        self._state = TurnState.STREAMING
        chunks: list[str] = []
        try:
            client = self.client_factory(config)
            for chunk in client.stream(
                messages,
                temperature=config.sampling.temperature,
                max_tokens=config.sampling.max_tokens,
                top_p=config.sampling.top_p,
            ):
                chunks.append(chunk)
                self.broadcast(EventKind.CHUNK, chunk)
        except Exception as exc:
            LOGGER.error("Completion request failed: %s", exc)
            message = f"Error: {exc}"
            self.broadcast(EventKind.ERROR, message)
            return TurnResult(response="".join(chunks), error=message)

        response = "".join(chunks)
        self._record("assistant", response)
        self.broadcast(EventKind.RESPONSE, response)

        self._state = TurnState.TOOL_SCAN
        calls = self.protocol.detect(response)
        auto_resolved = [
            self.resolve_tool(call.id, True)
            for call in calls
            if self.approval_policy.allows(self.executor.category(call))
        ]
        return TurnResult(response=response, tool_calls=calls, auto_resolved=auto_resolved)

    def _build_system_prompt(self, query: str) -> str:
        prompt = build_tool_instructions(
            self._config.system_prompt_override, registry=self.executor.registry
        )
        editor = self._editor_context()
        if editor is not None and editor.text:
            prompt += f"\n\nActive Editor Context:\n```{editor.language}\n{editor.text}\n```"
        root = self.workspace_root
        if root is not None:
            prompt += f"\n\nWorkspace Root: {root}"
        return prompt + self._retrieve(query)

    def _editor_context(self) -> EditorContext | None:
        if self.context_provider is None:
            return None
        try:
            return self.context_provider()
        except Exception:
            LOGGER.debug("Editor context unavailable", exc_info=True)
            return None

    def _retrieve(self, query: str) -> str:
        if self.retrieval is None:
            return ""
        try:
            return self.retrieval.retrieve(query, self.retrieval_limit)
        except Exception:
            LOGGER.warning("Workspace retrieval failed; continuing without context", exc_info=True)
            return ""

    # Tool calls ---------------------------------------------------------

    def _on_tool_request(self, call: ToolCall) -> None:
        self.broadcast(EventKind.TOOL_REQUEST, call.describe(), call=call)

    def resolve_tool(self, call_id: str, confirmed: bool) -> ToolOutcome:
        """Confirm or reject a pending call and record the result in the session."""
        outcome = self.protocol.resolve(call_id, confirmed)
        if outcome.status is ToolOutcomeStatus.EXPIRED:
            self.broadcast(EventKind.ERROR, outcome.message)
            return outcome

        content = format_tool_result(outcome)
        try:
            self._record("assistant", content)
        except Exception as exc:
            # The call is already out of the pending map; still show its result.
            LOGGER.exception("Failed to persist result of tool call %s", call_id)
            self.broadcast(EventKind.ERROR, f"Error: {exc}")
        self.broadcast(EventKind.TOOL_RESULT, content, call=outcome.call)
        return outcome

    def confirm_tool(self, call_id: str) -> ToolOutcome:
        return self.resolve_tool(call_id, True)

    def reject_tool(self, call_id: str) -> ToolOutcome:
        return self.resolve_tool(call_id, False)


__all__ = [
    "AgentOrchestrator",
    "BUSY_MESSAGE",
    "ClientFactory",
    "EditorContext",
    "MISSING_CREDENTIAL_MESSAGE",
    "OrchestratorConfig",
    "SEARCHING_STATUS",
    "SamplingParams",
    "TurnResult",
    "TurnState",
    "config_from_settings",
    "default_client_factory",
    "format_tool_result",
]
