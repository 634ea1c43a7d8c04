"""
RandomAssignmentAgent — single random walk to a terminal state.
"""

from __future__ import annotations

import logging

import numpy as np

from pantry.agents.interface import Agent
from pantry.core.assignment import Assignment
from pantry.search.features import FeatureVector
from pantry.core.state import AssignmentState
from pantry.search.interface import StateNode

logger = logging.getLogger(__name__)


class RandomAssignmentAgent(Agent):
    """
    Repeatedly moves to a uniformly random successor until none is left
    or every order is fulfilled. No backtracking, no scoring.

    A fixed *seed* makes every call reproducible.
    """

    def __init__(self, seed: int | None = None) -> None:
        self.seed = seed
        self.name = "Random"

    def search(
        self, root: AssignmentState, features: FeatureVector
    ) -> StateNode[Assignment]:
        rng = np.random.default_rng(self.seed)
        state = root
        steps = 0
        while not state.fulfills_orders():
            successors = state.get_successors()
            if not successors:
                break
            state = successors[int(rng.integers(len(successors)))]
            steps += 1
        logger.debug("%s stopped after %d steps", self.name, steps)
        return state
