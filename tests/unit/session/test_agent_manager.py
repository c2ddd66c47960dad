"""Tests for agent profile management."""

from __future__ import annotations

import pytest

from ai_code_assistant.core.storage import InMemoryKeyValueStore
from ai_code_assistant.session import AgentManager, AgentProfile
from ai_code_assistant.session.agents import DEFAULT_AGENT_ID


def test_default_agent_is_seeded_and_active(store):
    manager = AgentManager(store)

    agents = manager.get_agents()
    assert [agent.id for agent in agents] == [DEFAULT_AGENT_ID]
    assert manager.get_active_agent_id() == DEFAULT_AGENT_ID
    assert manager.get_active_agent().name == "General Assistant"


def test_seeding_happens_only_once(store):
    AgentManager(store).create_agent("Reviewer", "Review code strictly.")
    manager = AgentManager(store)

    assert [agent.name for agent in manager.get_agents()] == ["General Assistant", "Reviewer"]


def test_create_save_and_activate(store):
    manager = AgentManager(store)
    agent = manager.create_agent("Tester", "Write tests.", description="QA", icon="beaker")

    agent.system_prompt = "Write more tests."
    manager.save_agent(agent)
    active = manager.set_active_agent(agent.id)

    assert active == agent
    assert manager.get_agent(agent.id).system_prompt == "Write more tests."
    assert manager.get_active_agent_id() == agent.id


def test_set_active_agent_rejects_unknown_id(store):
    manager = AgentManager(store)

    with pytest.raises(KeyError):
        manager.set_active_agent("ghost")


def test_deleting_active_agent_clears_pointer(store):
    manager = AgentManager(store)
    agent = manager.create_agent("Temp", "prompt")
    manager.set_active_agent(agent.id)

    assert manager.delete_agent(agent.id) is True
    assert manager.delete_agent(agent.id) is False
    assert manager.get_active_agent_id() is None
    assert manager.get_active_agent() is None


def test_profile_round_trip():
    profile = AgentProfile(id="x", name="X", description="d", system_prompt="p", icon=None)

    assert AgentProfile.from_dict(profile.to_dict()) == profile


def test_profiles_are_isolated_per_store():
    first = AgentManager(InMemoryKeyValueStore())
    second = AgentManager(InMemoryKeyValueStore())
    first.create_agent("Only here", "p")

    assert len(second.get_agents()) == 1
