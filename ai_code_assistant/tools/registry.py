"""Tool registry mapping tool names to handlers."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable

from ai_code_assistant.core.utils.logger import get_logger

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .calls import ToolArguments

LOGGER = get_logger(__name__)


@dataclass
class ToolContext:
    """Runtime context passed to tool handlers."""

    workspace_root: Path
    settings: Any = None
    command_timeout: float | None = None


@dataclass
class ToolSpec:
    """Metadata for a registered tool."""

    name: str
    handler: Callable[[Any, ToolContext], str]
    params_type: type
    signature: str
    description: str = ""
    category: str | None = None


class ToolRegistry:
    """Registry that manages tool specifications."""

    def __init__(self) -> None:
        self._tools: dict[str, ToolSpec] = {}

    def register(self, spec: ToolSpec) -> None:
        if spec.name in self._tools:
            LOGGER.debug("Overwriting existing tool registration for %s", spec.name)
        self._tools[spec.name] = spec

    def get(self, name: str) -> ToolSpec:
        if name not in self._tools:
            raise KeyError(f"Tool '{name}' is not registered")
        return self._tools[name]

    def has(self, name: str) -> bool:
        return name in self._tools

    def available(self) -> Iterable[str]:
        return sorted(self._tools.keys())

    def specs(self) -> list[ToolSpec]:
        return list(self._tools.values())

    def category(self, name: str | None) -> str:
        spec = self._tools.get(name or "")
        return (spec.category if spec else None) or "generic"

    def invoke(self, name: str, arguments: ToolArguments, context: ToolContext) -> str:
        spec = self.get(name)
        if not isinstance(arguments, spec.params_type):
            raise TypeError(
                f"Tool {name} expects {spec.params_type.__name__}, got {type(arguments).__name__}"
            )
        return spec.handler(arguments, context)


# Global registry instance -------------------------------------------------

registry = ToolRegistry()


__all__ = ["ToolContext", "ToolRegistry", "ToolSpec", "registry"]
