"""
Agent Registry — maps strategy names to Agent classes.
"""

from __future__ import annotations

from typing import Any, Type

from pantry.agents.interface import Agent
from pantry.agents.local_search_agent import LocalSearchAgent
from pantry.agents.random_agent import RandomAssignmentAgent
from pantry.agents.search_agent import SearchAgent

# ── Default registry ───────────────────────────────────────────────

_REGISTRY: dict[str, Type[Agent]] = {
    "search": SearchAgent,
    "random": RandomAssignmentAgent,
    "local-search": LocalSearchAgent,
}


def get_agent_class(type_name: str) -> Type[Agent]:
    """
    Look up the Agent class for a strategy name.

    Raises KeyError if the name is not registered.
    """
    if type_name not in _REGISTRY:
        raise KeyError(
            f"Unknown agent type {type_name!r}. "
            f"Registered types: {list(_REGISTRY.keys())}"
        )
    return _REGISTRY[type_name]


def list_agent_types() -> list[str]:
    """Return all registered agent type names."""
    return list(_REGISTRY.keys())


def create_agent(type_name: str, **params: Any) -> Agent:
    """
    Factory: instantiate an agent by its strategy name.

    Unknown keyword parameters raise TypeError from the constructor.
    """
    cls = get_agent_class(type_name)
    return cls(**params)
