"""
Exception types raised by the assignment model and the search engine.
"""

from __future__ import annotations


class AssignmentError(ValueError):
    """Base class for illegal assignment mutations."""


class AllergyViolation(AssignmentError):
    """A product was given to a customer who is allergic to it."""

    def __init__(self, customer_name: str, product_name: str) -> None:
        super().__init__(
            f"Customer {customer_name!r} is allergic to {product_name!r}."
        )
        self.customer_name = customer_name
        self.product_name = product_name


class DuplicateAssignment(AssignmentError):
    """A product was given to a customer who already holds it."""

    def __init__(self, customer_name: str, product_name: str) -> None:
        super().__init__(
            f"Customer {customer_name!r} already has {product_name!r}."
        )
        self.customer_name = customer_name
        self.product_name = product_name


class ExplorationBudgetExceeded(RuntimeError):
    """
    The search needed more states than its budget allows.

    Fatal to the current search call: no partial result is returned.
    """

    def __init__(self, max_explored_states: int) -> None:
        super().__init__(
            f"Exceeded maximum number of explored states ({max_explored_states})."
        )
        self.max_explored_states = max_explored_states
