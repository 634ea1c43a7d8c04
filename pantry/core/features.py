"""
Built-in assignment features and the default objective.

The default vector rewards satisfaction and penalizes cost, each on its
raw scale (preference points, currency) rescaled by its normalizer.
"""

from __future__ import annotations

from pantry.core.assignment import Assignment
from pantry.search.features import Feature

# ── Built-in feature functions ─────────────────────────────────────
# Module-level so feature vectors pickle into worker processes.

def negative_cost(assignment: Assignment) -> float:
    return -assignment.calculate_cost()


def satisfaction(assignment: Assignment) -> float:
    return assignment.calculate_satisfaction()


def assignment_count(assignment: Assignment) -> float:
    return float(assignment.count_assignments())


DEFAULT_FEATURES: tuple[Feature, ...] = (
    Feature(negative_cost, weight=1.0, normalizer=100.0),
    Feature(satisfaction, weight=1.0, normalizer=10.0),
)
