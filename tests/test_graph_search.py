"""Tests for GraphSearch — depth-first order, best tracking and the budget."""

import os
import subprocess
import sys
from pathlib import Path

import pytest

from pantry.core.errors import ExplorationBudgetExceeded
from pantry.core.features import DEFAULT_FEATURES
from pantry.core.model import Customer, Inventory, Order, Product
from pantry.core.state import AssignmentState
from pantry.generator.problem import generate_problem
from pantry.search.features import Feature, evaluate_features
from pantry.search.graph_search import GraphSearch, state_space
from pantry.search.interface import StateNode


# ── A tiny hand-written graph (no assignment domain involved) ──────

class _Node(StateNode[str]):
    """Named node; successors and scores come from shared dicts."""

    def __init__(self, name, edges, scores):
        self.name = name
        self.edges = edges
        self.scores = scores

    def get_successors(self):
        return tuple(_Node(n, self.edges, self.scores) for n in self.edges.get(self.name, []))

    def evaluate(self, features):
        return evaluate_features(self.name, features)

    def is_terminal(self):
        return not self.edges.get(self.name)

    def to_result(self):
        return self.name

    def __eq__(self, other):
        return isinstance(other, _Node) and self.name == other.name

    def __hash__(self):
        return hash(self.name)


def _search(edges, scores, budget=100):
    root = _Node("root", edges, scores)
    engine = GraphSearch([Feature(lambda name: scores[name], 1.0, 1.0)])
    return engine, engine.depth_first_search(root, budget)


def test_returns_best_state():
    scores = {"root": 0, "a": 3, "b": 1, "c": 7}
    engine, best = _search({"root": ["a", "b"], "a": ["c"]}, scores)
    assert best.to_result() == "c"
    assert engine.explored_count == 4


def test_root_is_kept_when_nothing_is_better():
    scores = {"root": 5, "a": 1, "b": 5}
    _, best = _search({"root": ["a", "b"]}, scores)
    assert best.to_result() == "root"


def test_ties_keep_first_encountered():
    """LIFO: 'b' is explored before 'a', and the later equal score never wins."""
    scores = {"root": 0, "a": 2, "b": 2}
    _, best = _search({"root": ["a", "b"]}, scores)
    assert best.to_result() == "b"


def test_duplicate_frontier_entries_are_not_counted():
    """'c' is pushed twice before its first visit; only distinct states count."""
    scores = {"root": 0, "a": 0, "c": 1}
    engine, best = _search({"root": ["c", "a"], "a": ["c"]}, scores, budget=3)
    assert best.to_result() == "c"
    assert engine.explored_count == 3


def test_cycles_terminate():
    scores = {"root": 0, "a": 1, "b": 2}
    engine, best = _search({"root": ["a"], "a": ["b"], "b": ["a", "root"]}, scores)
    assert best.to_result() == "b"
    assert engine.explored_count == 3


def test_budget_exceeded_is_fatal():
    scores = {"root": 0, "a": 1, "b": 2, "c": 3}
    with pytest.raises(ExplorationBudgetExceeded) as info:
        _search({"root": ["a", "b", "c"]}, scores, budget=3)
    assert info.value.max_explored_states == 3


def test_budget_equal_to_graph_size_succeeds():
    scores = {"root": 0, "a": 1, "b": 2, "c": 3}
    engine, best = _search({"root": ["a", "b", "c"]}, scores, budget=4)
    assert best.to_result() == "c"
    assert engine.explored_count == 4


def test_budget_must_be_positive():
    engine = GraphSearch([])
    with pytest.raises(ValueError):
        engine.depth_first_search(_Node("root", {}, {}), 0)


# ── Assignment scenarios ───────────────────────────────────────────

P1 = Product("P1", 2.0)


def _root(quantity=1, allergic=False):
    c1 = Customer("C1", {P1: 5.0}, frozenset({P1}) if allergic else frozenset())
    return AssignmentState.root([Order(c1, 1)], Inventory({P1: quantity}))


def test_single_product_is_assigned():
    best = GraphSearch(DEFAULT_FEATURES).depth_first_search(_root(), 2)
    assignment = best.to_result()
    assert assignment.products_given_to(Customer("C1", {P1: 5.0})) == {P1}
    assert abs(assignment.calculate_cost() - 2.0) < 1e-9
    assert abs(assignment.calculate_satisfaction() - 5.0) < 1e-9


def test_two_state_graph_fails_with_budget_one():
    with pytest.raises(ExplorationBudgetExceeded):
        GraphSearch(DEFAULT_FEATURES).depth_first_search(_root(), 1)


def test_no_stock_returns_root():
    root = _root(quantity=0)
    best = GraphSearch(DEFAULT_FEATURES).depth_first_search(root, 1)
    assert best == root
    assert best.to_result().count_assignments() == 0


def test_allergy_returns_root():
    root = _root(allergic=True)
    best = GraphSearch(DEFAULT_FEATURES).depth_first_search(root, 1)
    assert best == root


def test_budget_matches_state_space_size():
    a, b = Product("A", 1.0), Product("B", 1.0)
    c = Customer("C", {a: 1.0, b: 1.0})
    root = AssignmentState.root([Order(c, 2)], Inventory({a: 1, b: 1}))

    graph = state_space(root)
    assert graph.number_of_nodes() == 4
    assert graph.number_of_edges() == 4

    GraphSearch(DEFAULT_FEATURES).depth_first_search(root, 4)
    with pytest.raises(ExplorationBudgetExceeded):
        GraphSearch(DEFAULT_FEATURES).depth_first_search(root, 3)


def test_state_space_budget():
    a, b = Product("A", 1.0), Product("B", 1.0)
    root = AssignmentState.root([Order(Customer("C"), 2)], Inventory({a: 1, b: 1}))
    with pytest.raises(ExplorationBudgetExceeded):
        state_space(root, max_states=3)


def test_generated_problems_invariants_and_best():
    """
    Every reachable state is valid, and the search result scores at least
    as well as every reachable state (the search explores them all).
    """
    for seed in range(10):
        orders, inventory = generate_problem(2, (1, 3), (1, 2), seed=seed)
        root = AssignmentState.root(orders, inventory)
        graph = state_space(root)

        for state in graph.nodes:
            assert state.is_valid()

        engine = GraphSearch(DEFAULT_FEATURES)
        best = engine.depth_first_search(root, graph.number_of_nodes())
        best_score = best.evaluate(DEFAULT_FEATURES)
        assert engine.explored_count == graph.number_of_nodes()
        assert best_score >= root.evaluate(DEFAULT_FEATURES)
        assert all(best_score >= s.evaluate(DEFAULT_FEATURES) for s in graph.nodes)


def test_search_is_deterministic():
    orders, inventory = generate_problem(2, (2, 3), (2, 2), seed=7)
    root = AssignmentState.root(orders, inventory)
    first = GraphSearch(DEFAULT_FEATURES).depth_first_search(root, 10_000)
    second = GraphSearch(DEFAULT_FEATURES).depth_first_search(root, 10_000)
    assert first == second


def test_engine_does_not_load_the_assignment_domain():
    """Importing the search package alone leaves pantry.core's model unloaded."""
    root_dir = Path(__file__).resolve().parents[1]
    code = (
        "import sys\n"
        "import pantry.search.graph_search\n"
        "import pantry.search.features\n"
        "loaded = [m for m in ('pantry.core.assignment', 'pantry.core.model',"
        " 'pantry.core.state', 'pantry.core.features') if m in sys.modules]\n"
        "assert not loaded, loaded\n"
    )
    env = {**os.environ, "PYTHONPATH": str(root_dir)}
    result = subprocess.run(
        [sys.executable, "-c", code], env=env, capture_output=True, text=True
    )
    assert result.returncode == 0, result.stderr
