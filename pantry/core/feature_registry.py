"""
Feature Registry — maps feature names to scoring functions.

Callers such as the HTTP API request objectives by these names.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from typing import Any

from pantry.core.features import assignment_count, negative_cost, satisfaction
from pantry.search.features import Feature

# ── Default registry ───────────────────────────────────────────────

_REGISTRY: dict[str, Callable[[Any], float]] = {
    "cost": negative_cost,
    "satisfaction": satisfaction,
    "assignments": assignment_count,
}


def get_feature_fn(name: str) -> Callable[[Any], float]:
    """
    Look up the scoring function registered under *name*.

    Raises KeyError if the name is not registered.
    """
    if name not in _REGISTRY:
        raise KeyError(
            f"Unknown feature {name!r}. "
            f"Registered features: {list(_REGISTRY.keys())}"
        )
    return _REGISTRY[name]


def list_features() -> list[str]:
    """Return all registered feature names."""
    return list(_REGISTRY.keys())


def create_feature(name: str, weight: float = 1.0, normalizer: float = 1.0) -> Feature:
    """Factory: build a Feature from its registered name."""
    return Feature(get_feature_fn(name), weight=weight, normalizer=normalizer)


def build_features(specs: Iterable[Mapping[str, Any]]) -> tuple[Feature, ...]:
    """Build a feature vector from ``{"name", "weight", "normalizer"}`` dicts."""
    return tuple(
        create_feature(
            spec["name"],
            weight=float(spec.get("weight", 1.0)),
            normalizer=float(spec.get("normalizer", 1.0)),
        )
        for spec in specs
    )
