"""Agent profiles: named system prompts the user can switch between."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import TYPE_CHECKING, Any
from uuid import uuid4

from ai_code_assistant.core.utils.logger import get_logger

if TYPE_CHECKING:
    from ai_code_assistant.core.storage import KeyValueStore

LOGGER = get_logger(__name__)

DEFAULT_AGENT_ID = "default"
DEFAULT_AGENT_PROMPT = (
    "You are Code Assistant, an expert AI coding partner.\n"
    "You help developers write, debug, and understand code in their workspace.\n"
    "Be concise, accurate, and provide code blocks with language identifiers.\n"
    "When asked to edit code, provide the full corrected block."
)


@dataclass
class AgentProfile:
    id: str
    name: str
    description: str
    system_prompt: str
    icon: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AgentProfile:
        return cls(
            id=data["id"],
            name=data["name"],
            description=data.get("description", ""),
            system_prompt=data.get("system_prompt", ""),
            icon=data.get("icon"),
        )


def default_agent() -> AgentProfile:
    return AgentProfile(
        id=DEFAULT_AGENT_ID,
        name="General Assistant",
        description="The default coding assistant.",
        system_prompt=DEFAULT_AGENT_PROMPT,
        icon="robot",
    )


class AgentManager:
    """CRUD over stored agent profiles plus the active-agent pointer.

    A default profile is seeded (and made active) the first time the store is
    opened without any profiles.
    """

    STORAGE_KEY = "agents"
    ACTIVE_AGENT_KEY = "active_agent_id"

    def __init__(self, store: KeyValueStore) -> None:
        self._store = store
        if not self.get_agents():
            self.save_agent(default_agent())
            self.set_active_agent(DEFAULT_AGENT_ID)

    def get_agents(self) -> list[AgentProfile]:
        return [AgentProfile.from_dict(item) for item in self._store.get(self.STORAGE_KEY, []) or []]

    def get_agent(self, agent_id: str) -> AgentProfile | None:
        for agent in self.get_agents():
            if agent.id == agent_id:
                return agent
        return None

    def create_agent(
        self, name: str, system_prompt: str, *, description: str = "", icon: str | None = None
    ) -> AgentProfile:
        agent = AgentProfile(
            id=uuid4().hex[:12],
            name=name,
            description=description,
            system_prompt=system_prompt,
            icon=icon,
        )
        self.save_agent(agent)
        return agent

    def save_agent(self, agent: AgentProfile) -> None:
        agents = self.get_agents()
        for position, existing in enumerate(agents):
            if existing.id == agent.id:
                agents[position] = agent
                break
        else:
            agents.append(agent)
        self._store.set(self.STORAGE_KEY, [item.to_dict() for item in agents])

    def delete_agent(self, agent_id: str) -> bool:
        agents = self.get_agents()
        remaining = [agent for agent in agents if agent.id != agent_id]
        if len(remaining) == len(agents):
            return False
        self._store.set(self.STORAGE_KEY, [item.to_dict() for item in remaining])
        if self.get_active_agent_id() == agent_id:
            self._store.delete(self.ACTIVE_AGENT_KEY)
        return True

    def get_active_agent_id(self) -> str | None:
        return self._store.get(self.ACTIVE_AGENT_KEY)

    def get_active_agent(self) -> AgentProfile | None:
        agent_id = self.get_active_agent_id()
        if not agent_id:
            return None
        return self.get_agent(agent_id)

    def set_active_agent(self, agent_id: str) -> AgentProfile:
        agent = self.get_agent(agent_id)
        if agent is None:
            raise KeyError(f"Agent '{agent_id}' does not exist")
        self._store.set(self.ACTIVE_AGENT_KEY, agent_id)
        LOGGER.info("Active agent set to %s (%s)", agent.name, agent.id)
        return agent


__all__ = [
    "AgentManager",
    "AgentProfile",
    "DEFAULT_AGENT_ID",
    "DEFAULT_AGENT_PROMPT",
    "default_agent",
]
