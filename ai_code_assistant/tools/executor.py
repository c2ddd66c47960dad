"""Execute parsed tool calls against the workspace, always returning text."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

from ai_code_assistant.core.utils.constants import DEFAULT_COMMAND_TIMEOUT
from ai_code_assistant.core.utils.logger import get_logger

from .calls import ToolKind
from .registry import ToolContext, ToolRegistry, registry as default_registry

if TYPE_CHECKING:
    from .calls import ToolCall

LOGGER = get_logger(__name__)


class NoWorkspaceError(RuntimeError):
    """Raised when a tool needs a workspace root and none is configured."""


class ToolExecutor:
    """Run tool calls through the registry.

    ``execute`` never raises: failures become ``Error executing <tool>: ...``
    strings that flow back into the conversation.
    """

    def __init__(
        self,
        workspace_root: Path | str | None,
        *,
        registry: ToolRegistry | None = None,
        settings: Any = None,
        command_timeout: float | None = DEFAULT_COMMAND_TIMEOUT,
    ) -> None:
        self.workspace_root = Path(workspace_root).resolve() if workspace_root else None
        self.registry = registry or default_registry
        self.settings = settings
        self.command_timeout = command_timeout

    def category(self, call: ToolCall) -> str:
        return self.registry.category(call.tool)

    def execute(self, call: ToolCall) -> str:
        if call.kind is ToolKind.UNKNOWN or not self.registry.has(call.tool):
            LOGGER.warning("Model requested unknown tool %r", call.tool)
            return f"Error: Unknown tool '{call.tool}'"

        LOGGER.info("Executing tool %s (%s)", call.tool, call.id)
        try:
            result = self.registry.invoke(call.tool, call.arguments, self._context())
        except Exception as exc:
            LOGGER.warning("Tool %s failed: %s", call.tool, exc)
            return f"Error executing {call.tool}: {exc}"
        return result

    def _context(self) -> ToolContext:
        if self.workspace_root is None:
            raise NoWorkspaceError("No workspace open")
        return ToolContext(
            workspace_root=self.workspace_root,
            settings=self.settings,
            command_timeout=self.command_timeout,
        )


__all__ = ["NoWorkspaceError", "ToolExecutor"]
