"""
SearchAgent — exhaustive, budget-bounded depth-first search.
"""

from __future__ import annotations

import logging

from pantry.agents.interface import Agent
from pantry.core.assignment import Assignment
from pantry.search.features import FeatureVector
from pantry.core.state import AssignmentState
from pantry.search.graph_search import GraphSearch
from pantry.search.interface import StateNode

logger = logging.getLogger(__name__)

DEFAULT_MAX_EXPLORED_STATES = 100_000


class SearchAgent(Agent):
    """
    Returns the best state of the whole reachable graph.

    ExplorationBudgetExceeded propagates to the caller when the graph is
    larger than *max_explored_states*.
    """

    def __init__(self, max_explored_states: int = DEFAULT_MAX_EXPLORED_STATES) -> None:
        if max_explored_states < 1:
            raise ValueError(
                f"max_explored_states must be >= 1, got {max_explored_states}."
            )
        self.max_explored_states = max_explored_states
        self.name = "Search"

    def search(
        self, root: AssignmentState, features: FeatureVector
    ) -> StateNode[Assignment]:
        engine: GraphSearch[Assignment] = GraphSearch(features)
        best = engine.depth_first_search(root, self.max_explored_states)
        logger.debug(
            "%s explored %d states", self.name, engine.explored_count
        )
        return best
