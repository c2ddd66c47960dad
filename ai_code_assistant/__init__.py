"""Public package interface for the Code Assistant toolkit."""

from __future__ import annotations

from importlib import metadata as _metadata

try:  # pragma: no cover - importlib metadata availability varies
    __version__ = _metadata.version("ai-code-assistant")
except _metadata.PackageNotFoundError:  # pragma: no cover - fallback when not installed
    __version__ = "0.1.0"

from . import core, engine, memory, providers, session, tools
from .core import (
    ApprovalPolicy,
    ConfigurationError,
    Settings,
    configure_logging,
    get_logger,
    load_settings,
)
from .engine import (
    AgentOrchestrator,
    EditorContext,
    EventKind,
    OrchestratorConfig,
    OrchestratorEvent,
    ToolCallProtocol,
    TurnResult,
)
from .memory import RetrievalEngine, WorkspaceIndex
from .providers.llm import (
    GROQ_DEFAULT_BASE_URL,
    OPENAI_DEFAULT_BASE_URL,
    LLMClient,
    LLMConnectionError,
    LLMError,
    LLMRateLimitError,
    LLMResponseError,
    LLMRetryExhaustedError,
    LLMTimeoutError,
    Message,
    RetryConfig,
    StreamHooks,
    create_client,
)
from .session import AgentManager, ChatHistoryManager, ChatSession
from .tools import ToolCall, ToolContext, ToolExecutor, ToolRegistry, ToolSpec, registry

__all__ = [
    "GROQ_DEFAULT_BASE_URL",
    "OPENAI_DEFAULT_BASE_URL",
    "AgentManager",
    "AgentOrchestrator",
    "ApprovalPolicy",
    "ChatHistoryManager",
    "ChatSession",
    "ConfigurationError",
    "EditorContext",
    "EventKind",
    "LLMClient",
    "LLMConnectionError",
    "LLMError",
    "LLMRateLimitError",
    "LLMResponseError",
    "LLMRetryExhaustedError",
    "LLMTimeoutError",
    "Message",
    "OrchestratorConfig",
    "OrchestratorEvent",
    "RetrievalEngine",
    "RetryConfig",
    "Settings",
    "StreamHooks",
    "ToolCall",
    "ToolCallProtocol",
    "ToolContext",
    "ToolExecutor",
    "ToolRegistry",
    "ToolSpec",
    "TurnResult",
    "WorkspaceIndex",
    "__version__",
    "configure_logging",
    "core",
    "create_client",
    "engine",
    "get_logger",
    "load_settings",
    "memory",
    "providers",
    "registry",
    "session",
    "tools",
]
