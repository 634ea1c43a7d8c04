"""
Feature vectors — weighted, normalized scoring functions.

A feature is a triple (fn, weight, normalizer). A state's score is

    Σ weight_i * fn_i(result) / normalizer_i

so each feature can be written on its raw scale and rescaled uniformly.
Feature functions receive ``state.to_result()``; nothing here depends on
what that result is.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass
from typing import Any

import numpy as np


@dataclass(frozen=True)
class Feature:
    """One (fn, weight, normalizer) triple. Unpacks like a 3-tuple."""

    fn: Callable[[Any], float]
    weight: float = 1.0
    normalizer: float = 1.0

    def __post_init__(self) -> None:
        if self.normalizer == 0:
            raise ValueError(
                f"Feature {getattr(self.fn, '__name__', self.fn)!r}: "
                "normalizer must be non-zero."
            )

    def __iter__(self) -> Iterator[Any]:
        return iter((self.fn, self.weight, self.normalizer))


FeatureVector = Sequence[Feature]


def evaluate_features(result: Any, features: FeatureVector) -> float:
    """Weighted sum of every feature applied to *result* (0.0 when empty)."""
    if not features:
        return 0.0
    values = np.array([float(fn(result)) for fn, _, _ in features])
    weights = np.array([float(w) for _, w, _ in features])
    normalizers = np.array([float(n) for _, _, n in features])
    return float(np.sum(weights * values / normalizers))
