"""
State graph contract — what a problem state must provide to be searched.

Design: the GraphSearch engine is written against this ABC only, so it
knows nothing about orders, products or assignments. Any immutable state
type implementing these five operations can be explored.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from pantry.search.features import FeatureVector

T = TypeVar("T")


class StateNode(ABC, Generic[T]):
    """
    An immutable snapshot in a search graph.

    Implementations must provide structural ``__eq__`` and ``__hash__``:
    the engine deduplicates visited states by value, not identity.
    """

    @abstractmethod
    def get_successors(self) -> tuple[StateNode[T], ...]:
        """
        States reachable by one legal extension of this state.

        Distinct, never containing ``self``, possibly empty. The order
        is the exploration order, so it must be deterministic for
        searches to be reproducible.
        """
        ...

    @abstractmethod
    def evaluate(self, features: FeatureVector) -> float:
        """Weighted feature score of this state."""
        ...

    @abstractmethod
    def is_terminal(self) -> bool:
        """True when no further legal extension can improve completeness."""
        ...

    @abstractmethod
    def to_result(self) -> T:
        """Project the state to the value callers need."""
        ...

    @abstractmethod
    def __eq__(self, other: object) -> bool: ...

    @abstractmethod
    def __hash__(self) -> int: ...
