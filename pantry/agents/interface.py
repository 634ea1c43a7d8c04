"""
Agent Interface — abstract base for all assignment strategies.

Design: Strategy pattern. Callers only ever invoke ``assign``; whether
the answer comes from an exhaustive bounded search, a random pass or a
local search, the result is a StateNode scored with the same features,
so strategies can be compared directly.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

from pantry.core.assignment import Assignment
from pantry.core.features import DEFAULT_FEATURES
from pantry.core.model import Inventory, Order
from pantry.core.state import AssignmentState
from pantry.search.features import FeatureVector
from pantry.search.interface import StateNode


class Agent(ABC):
    """
    Turns a problem instance into a final assignment state.
    """

    name: str = "agent"

    def assign(
        self,
        orders: Sequence[Order],
        inventory: Inventory,
        features: FeatureVector | None = None,
    ) -> StateNode[Assignment]:
        """
        Solve one problem instance.

        Parameters
        ----------
        orders : sequence of Order
        inventory : Inventory
        features : feature vector used for scoring (DEFAULT_FEATURES if None)

        Returns
        -------
        The final state; call ``to_result()`` for the Assignment and
        ``evaluate(features)`` for a comparable score.
        """
        if isinstance(orders, (str, bytes)) or not isinstance(orders, Sequence):
            raise TypeError(
                f"{self.name}: orders must be a sequence of Order, "
                f"got {type(orders).__name__}."
            )
        for order in orders:
            if not isinstance(order, Order):
                raise TypeError(
                    f"{self.name}: orders must contain Order instances, "
                    f"got {type(order).__name__}."
                )
        if not isinstance(inventory, Inventory):
            raise TypeError(
                f"{self.name}: inventory must be an Inventory, "
                f"got {type(inventory).__name__}."
            )

        root = AssignmentState.root(orders, inventory)
        return self.search(root, DEFAULT_FEATURES if features is None else features)

    @abstractmethod
    def search(
        self, root: AssignmentState, features: FeatureVector
    ) -> StateNode[Assignment]:
        """Strategy-specific exploration from the empty assignment."""
        ...

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
