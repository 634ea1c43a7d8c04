"""
GraphSearch — bounded, evaluation-guided exploration of a state graph.

Depth-first traversal from a root state, keeping the best-scoring state
seen. The number of explored states is capped; running past the cap is
a hard failure (ExplorationBudgetExceeded), never a silent early return.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Generic, TypeVar

import networkx as nx

from pantry.core.errors import ExplorationBudgetExceeded
from pantry.search.features import FeatureVector
from pantry.search.interface import StateNode

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_MAX_STATE_SPACE = 10_000


class GraphSearch(Generic[T]):
    """
    Depth-first search over any StateNode graph.

    The same feature vector scores every state, root included.
    """

    def __init__(self, features: FeatureVector) -> None:
        self.features = features
        self.explored_count = 0

    # ── Public API ─────────────────────────────────────────────────

    def depth_first_search(
        self, root: StateNode[T], max_explored_states: int
    ) -> StateNode[T]:
        """
        Explore the graph reachable from *root* and return its best state.

        Process:
        1. Push the root onto a LIFO frontier.
        2. Pop a state. Skip it if it was already visited (states may be
           pushed more than once before their first visit).
        3. Fail if *max_explored_states* states were already explored.
        4. Mark visited, evaluate, and replace the best state only on a
           strictly greater score (first encountered wins ties).
        5. Push every unvisited successor, in enumeration order.

        Raises
        ------
        ValueError
            If *max_explored_states* is not a positive integer.
        ExplorationBudgetExceeded
            If more than *max_explored_states* distinct states are reachable.
        """
        if root is None:
            raise ValueError("GraphSearch needs a root state.")
        if isinstance(max_explored_states, bool) or not isinstance(max_explored_states, int):
            raise ValueError(
                f"max_explored_states must be an int, got {max_explored_states!r}."
            )
        if max_explored_states < 1:
            raise ValueError(
                f"max_explored_states must be >= 1, got {max_explored_states}."
            )

        self.explored_count = 0
        frontier: list[StateNode[T]] = [root]
        visited: set[StateNode[T]] = set()
        best_node = root
        best_evaluation = root.evaluate(self.features)

        while frontier:
            node = frontier.pop()
            if node in visited:
                continue
            if self.explored_count >= max_explored_states:
                logger.warning(
                    "Search aborted: budget of %d explored states exhausted "
                    "with %d states still on the frontier.",
                    max_explored_states,
                    len(frontier) + 1,
                )
                raise ExplorationBudgetExceeded(max_explored_states)

            visited.add(node)
            self.explored_count += 1

            evaluation = node.evaluate(self.features)
            if evaluation > best_evaluation:
                best_node = node
                best_evaluation = evaluation

            frontier.extend(
                successor
                for successor in node.get_successors()
                if successor not in visited
            )

        logger.debug(
            "Explored %d states; best evaluation %.6f",
            self.explored_count,
            best_evaluation,
        )
        return best_node


def state_space(
    root: StateNode[T], max_states: int = DEFAULT_MAX_STATE_SPACE
) -> nx.DiGraph:
    """
    Build the full reachable state graph breadth-first.

    Nodes are states, edges are successor links. Useful for sizing a
    search budget before running GraphSearch.

    Raises ExplorationBudgetExceeded if more than *max_states* distinct
    states are reachable.
    """
    if max_states < 1:
        raise ValueError(f"max_states must be >= 1, got {max_states}.")

    graph = nx.DiGraph()
    graph.add_node(root)
    queue: deque[StateNode[T]] = deque([root])

    while queue:
        node = queue.popleft()
        for successor in node.get_successors():
            if successor not in graph:
                if graph.number_of_nodes() >= max_states:
                    raise ExplorationBudgetExceeded(max_states)
                graph.add_node(successor)
                queue.append(successor)
            graph.add_edge(node, successor)

    logger.debug(
        "State space: %d states, %d transitions",
        graph.number_of_nodes(),
        graph.number_of_edges(),
    )
    return graph
