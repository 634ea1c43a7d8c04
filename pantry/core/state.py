"""
AssignmentState — the searchable state for the order-assignment problem.

Wraps an Assignment together with the (shared, immutable) problem it
belongs to: the orders and the inventory. Successor generation adds one
product-to-customer edge at a time and only ever emits valid extensions.

Successor policy
----------------
Customers are visited in the order they first appear in the order
sequence. For each customer still below its order-size limit, inventory
products are tried in inventory order; a (customer, product) edge is
emitted when the customer is not allergic, does not already hold the
product and the product still has stock left.
"""

from __future__ import annotations

from collections.abc import Sequence

from pantry.core.assignment import Assignment, order_size_limits
from pantry.search.features import FeatureVector, evaluate_features
from pantry.core.model import Customer, Inventory, Order, Product
from pantry.search.interface import StateNode


class AssignmentState(StateNode[Assignment]):
    """
    A node in the assignment state graph.

    Equality and hashing use the assignment only: every state reached
    from one root shares the same orders and inventory.
    """

    def __init__(
        self,
        orders: Sequence[Order],
        inventory: Inventory,
        assignment: Assignment | None = None,
        _limits: dict[Customer, int] | None = None,
    ) -> None:
        self.orders: tuple[Order, ...] = tuple(orders)
        self.inventory = inventory
        self.assignment = assignment if assignment is not None else Assignment()
        self._limits = _limits if _limits is not None else order_size_limits(self.orders)

    @classmethod
    def root(cls, orders: Sequence[Order], inventory: Inventory) -> AssignmentState:
        """The empty assignment for a problem."""
        return cls(orders, inventory)

    # ── State graph contract ───────────────────────────────────────

    def get_successors(self) -> tuple[AssignmentState, ...]:
        products = self.inventory.products()
        stock_left = {
            p: self.inventory.quantity_of(p) - self.assignment.count_of_product(p)
            for p in products
        }

        successors: list[AssignmentState] = []
        for customer, limit in self._limits.items():
            held = self.assignment.products_given_to(customer)
            if len(held) >= limit:
                continue
            for product in products:
                if (
                    stock_left[product] > 0
                    and product not in held
                    and not customer.is_allergic_to(product)
                ):
                    successors.append(self._extend(customer, product))
        return tuple(successors)

    def evaluate(self, features: FeatureVector) -> float:
        return evaluate_features(self.to_result(), features)

    def is_terminal(self) -> bool:
        if self.assignment.fulfills_orders(self.orders):
            return True
        return not self.get_successors()

    def to_result(self) -> Assignment:
        return self.assignment

    # ── Helpers ────────────────────────────────────────────────────

    def _extend(self, customer: Customer, product: Product) -> AssignmentState:
        return AssignmentState(
            self.orders,
            self.inventory,
            self.assignment.assign_product_to_customer(customer, product),
            self._limits,
        )

    def is_valid(self) -> bool:
        return self.assignment.is_valid(self.orders, self.inventory)

    def fulfills_orders(self) -> bool:
        return self.assignment.fulfills_orders(self.orders)

    # ── Dunder helpers ─────────────────────────────────────────────

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AssignmentState):
            return NotImplemented
        return self.assignment == other.assignment

    def __hash__(self) -> int:
        return hash(self.assignment)

    def __repr__(self) -> str:
        return f"AssignmentState({self.assignment!r})"
