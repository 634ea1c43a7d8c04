"""
LocalSearchAgent — greedy hill-climbing with a step budget.
"""

from __future__ import annotations

import logging

from pantry.agents.interface import Agent
from pantry.core.assignment import Assignment
from pantry.search.features import FeatureVector
from pantry.core.state import AssignmentState
from pantry.search.interface import StateNode

logger = logging.getLogger(__name__)

DEFAULT_LOCAL_SEARCH_STEPS = 10


class LocalSearchAgent(Agent):
    """
    Moves to the best successor while it strictly improves the score.

    Stops at a local optimum, at a dead end, or after *max_steps* moves.
    Among equally scored successors the first one enumerated wins.
    """

    def __init__(self, max_steps: int = DEFAULT_LOCAL_SEARCH_STEPS) -> None:
        if max_steps < 0:
            raise ValueError(f"max_steps must be >= 0, got {max_steps}.")
        self.max_steps = max_steps
        self.name = f"Local Search ({max_steps})"

    def search(
        self, root: AssignmentState, features: FeatureVector
    ) -> StateNode[Assignment]:
        current: StateNode[Assignment] = root
        current_score = root.evaluate(features)

        for step in range(self.max_steps):
            best, best_score = None, current_score
            for successor in current.get_successors():
                score = successor.evaluate(features)
                if score > best_score:
                    best, best_score = successor, score
            if best is None:
                logger.debug("%s: local optimum after %d steps", self.name, step)
                break
            current, current_score = best, best_score

        return current
