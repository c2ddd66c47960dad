"""Helpers shared by CLI commands: wiring the orchestrator and printing its events."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path
from typing import TYPE_CHECKING

import click

from ai_code_assistant.core.approval import ApprovalPolicy
from ai_code_assistant.core.storage import JsonFileStore
from ai_code_assistant.core.utils.logger import get_logger
from ai_code_assistant.engine import (
    AgentOrchestrator,
    EventKind,
    OrchestratorEvent,
    config_from_settings,
    default_client_factory,
)
from ai_code_assistant.memory import WorkspaceIndex
from ai_code_assistant.providers.llm import RetryConfig, create_client
from ai_code_assistant.tools import ToolExecutor

if TYPE_CHECKING:
    from ai_code_assistant.core.utils.config import Settings
    from ai_code_assistant.providers.llm import HTTPChatLLMClient
    from ai_code_assistant.session import AgentManager, ChatHistoryManager

LOGGER = get_logger(__name__)


def build_store(settings: Settings) -> JsonFileStore:
    settings.ensure_state_dir()
    return JsonFileStore(settings.state_file)


def build_index(settings: Settings) -> WorkspaceIndex:
    return WorkspaceIndex(
        settings.workspace_root or Path.cwd(),
        max_file_bytes=settings.index_max_file_bytes,
        token_ceiling=settings.index_token_ceiling,
    )


def build_orchestrator(
    settings: Settings,
    history: ChatHistoryManager,
    agents: AgentManager | None = None,
    *,
    approve_all: bool = False,
) -> AgentOrchestrator:
    """Assemble an orchestrator for ``settings``; the active agent supplies the prompt."""
    config = config_from_settings(settings)
    if config.system_prompt_override is None and agents is not None:
        active = agents.get_active_agent()
        if active is not None:
            config = replace(config, system_prompt_override=active.system_prompt)

    index = build_index(settings)
    executor = ToolExecutor(
        index.root,
        settings=settings,
        command_timeout=settings.command_timeout,
    )
    policy = ApprovalPolicy.approve_all() if approve_all else ApprovalPolicy.from_settings(settings)
    return AgentOrchestrator(
        config,
        history=history,
        index=index,
        executor=executor,
        client_factory=default_client_factory,
        approval_policy=policy,
        retrieval_limit=settings.retrieval_limit,
    )


def get_llm_client(settings: Settings) -> HTTPChatLLMClient:
    if not settings.api_key:
        raise click.ClickException(
            "No API key configured. Set CODEASSIST_API_KEY or api_key in .codeassist.toml."
        )
    return create_client(
        settings.provider,
        settings.api_key,
        settings.model,
        base_url=settings.base_url,
        timeout=settings.request_timeout,
        retry_config=RetryConfig(
            max_retries=settings.retry_max_attempts,
            initial_delay=settings.retry_initial_delay,
            max_delay=settings.retry_max_delay,
        ),
    )


class ConsolePrinter:
    """Output sink rendering orchestrator events on the terminal."""

    def __init__(self) -> None:
        self._streaming = False

    def __call__(self, event: OrchestratorEvent) -> None:
        kind = event.kind
        if kind is EventKind.CHUNK:
            if not self._streaming:
                click.echo(click.style("Assistant: ", fg="cyan", bold=True), nl=False)
                self._streaming = True
            click.echo(event.value, nl=False)
        elif kind is EventKind.RESPONSE:
            if self._streaming:
                # Already printed chunk by chunk.
                click.echo()
                self._streaming = False
            elif event.is_user:
                click.echo(click.style("You: ", fg="green", bold=True) + event.value)
            else:
                click.echo(click.style("Assistant: ", fg="cyan", bold=True) + event.value)
        elif kind is EventKind.STATUS:
            click.echo(click.style(event.value, dim=True))
        elif kind is EventKind.ERROR:
            if self._streaming:
                click.echo()
                self._streaming = False
            click.secho(event.value, fg="red", err=True)
        elif kind is EventKind.TOOL_REQUEST:
            click.echo(click.style("Tool request: ", fg="yellow") + event.value)
        elif kind is EventKind.TOOL_RESULT:
            click.echo(event.value)
        elif kind is EventKind.CLEAR:
            click.echo(click.style("-" * 60, dim=True))
        elif kind in (EventKind.MODEL_CHANGED, EventKind.AGENT_CHANGED):
            click.echo(click.style(f"{kind.value.replace('_', ' ')}: {event.value}", dim=True))


def confirm_pending_calls(orchestrator: AgentOrchestrator) -> None:
    """Ask the user about every tool call still awaiting a decision."""
    for call in orchestrator.pending_tool_calls():
        approved = click.confirm(f"Run {call.describe()}?", default=False)
        orchestrator.resolve_tool(call.id, approved)


__all__ = [
    "ConsolePrinter",
    "build_index",
    "build_orchestrator",
    "build_store",
    "confirm_pending_calls",
    "get_llm_client",
]
