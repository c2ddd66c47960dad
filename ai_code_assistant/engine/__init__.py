"""Conversation engine: tool-call protocol and the agent control loop."""

from .events import EventKind, OrchestratorEvent, OutputSink, SinkRegistry
from .orchestrator import (
    AgentOrchestrator,
    EditorContext,
    OrchestratorConfig,
    SamplingParams,
    TurnResult,
    TurnState,
    config_from_settings,
    default_client_factory,
    format_tool_result,
)
from .tool_protocol import (
    CANCELLED_MESSAGE,
    EXPIRED_MESSAGE,
    ToolCallProtocol,
    ToolOutcome,
    ToolOutcomeStatus,
    parse_tool_blocks,
)

__all__ = [
    "AgentOrchestrator",
    "CANCELLED_MESSAGE",
    "EXPIRED_MESSAGE",
    "EditorContext",
    "EventKind",
    "OrchestratorConfig",
    "OrchestratorEvent",
    "OutputSink",
    "SamplingParams",
    "SinkRegistry",
    "ToolCallProtocol",
    "ToolOutcome",
    "ToolOutcomeStatus",
    "TurnResult",
    "TurnState",
    "config_from_settings",
    "default_client_factory",
    "format_tool_result",
    "parse_tool_blocks",
]
