"""
Assignment — an immutable mapping of customers to the products given to them.

Every mutation returns a new Assignment; the original is never touched,
so the search engine can hold many candidate assignments at once.
Validity is a checked property: the predicates below never raise and
never repair anything.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from typing import Any

from pantry.core.errors import AllergyViolation, DuplicateAssignment
from pantry.core.model import Customer, Inventory, Order, Product


class Assignment:
    """
    Customer → set of distinct products.

    Empty product sets are never stored, so an assignment that holds
    nothing for a customer equals one that never mentioned that customer.
    """

    __slots__ = ("_assignment",)

    def __init__(
        self, assignment: Mapping[Customer, frozenset[Product]] | None = None
    ) -> None:
        self._assignment: dict[Customer, frozenset[Product]] = {
            customer: frozenset(products)
            for customer, products in (assignment or {}).items()
            if products
        }

    # ── Read ───────────────────────────────────────────────────────

    def products_given_to(self, customer: Customer) -> frozenset[Product]:
        """Products held by *customer* (empty if none)."""
        return self._assignment.get(customer, frozenset())

    def customers(self) -> tuple[Customer, ...]:
        """Customers holding at least one product."""
        return tuple(self._assignment)

    def items(self) -> Iterator[tuple[Customer, frozenset[Product]]]:
        return iter(self._assignment.items())

    # ── Mutation (returns a copy) ──────────────────────────────────

    def assign_product_to_customer(
        self, customer: Customer, product: Product
    ) -> Assignment:
        """
        Return a new Assignment with one more (customer, product) edge.

        Raises
        ------
        AllergyViolation
            If *customer* is allergic to *product*.
        DuplicateAssignment
            If *customer* already holds *product*.
        """
        if customer.is_allergic_to(product):
            raise AllergyViolation(customer.name, product.name)
        held = self.products_given_to(customer)
        if product in held:
            raise DuplicateAssignment(customer.name, product.name)

        updated = dict(self._assignment)
        updated[customer] = held | {product}
        return Assignment(updated)

    # ── Evaluation ─────────────────────────────────────────────────

    def cost_of_customer(self, customer: Customer) -> float:
        return sum(p.cost for p in self.products_given_to(customer))

    def satisfaction_of_customer(self, customer: Customer) -> float:
        return sum(
            customer.preference_for(p) for p in self.products_given_to(customer)
        )

    def calculate_cost(self) -> float:
        """Sum of unit costs over every held product (0 when empty)."""
        return sum(self.cost_of_customer(c) for c in self._assignment)

    def calculate_satisfaction(self) -> float:
        """Sum of preference weights over every held (customer, product) pair."""
        return sum(self.satisfaction_of_customer(c) for c in self._assignment)

    def count_assignments(self) -> int:
        return sum(len(products) for products in self._assignment.values())

    def count_of_product(self, product: Product) -> int:
        """Number of customers holding *product*."""
        return sum(1 for products in self._assignment.values() if product in products)

    # ── Validity ───────────────────────────────────────────────────

    def respects_allergies(self) -> bool:
        return not any(
            customer.is_allergic_to_any(products)
            for customer, products in self._assignment.items()
        )

    def does_not_exceed_order_sizes(self, orders: Sequence[Order]) -> bool:
        """
        Every holding customer has an order and holds at most its size.

        With several orders for equal customers, the first one sets the limit.
        """
        limits = order_size_limits(orders)
        for customer, products in self._assignment.items():
            limit = limits.get(customer)
            if limit is None or len(products) > limit:
                return False
        return True

    def does_not_exceed_inventory(self, inventory: Inventory) -> bool:
        counts: dict[Product, int] = {}
        for products in self._assignment.values():
            for product in products:
                counts[product] = counts.get(product, 0) + 1
        return all(
            count <= inventory.quantity_of(product)
            for product, count in counts.items()
        )

    def is_valid(self, orders: Sequence[Order], inventory: Inventory) -> bool:
        return (
            self.respects_allergies()
            and self.does_not_exceed_order_sizes(orders)
            and self.does_not_exceed_inventory(inventory)
        )

    def fulfills_orders(self, orders: Sequence[Order]) -> bool:
        """True iff every order's customer holds exactly the requested count."""
        return all(
            len(self.products_given_to(order.customer)) == order.size
            for order in orders
        )

    # ── Serialization ──────────────────────────────────────────────

    def to_report(self) -> list[dict[str, Any]]:
        """Customer name → product names, sorted for stable output."""
        rows = [
            {
                "customer": customer.name,
                "products": sorted(p.name for p in products),
            }
            for customer, products in self._assignment.items()
        ]
        rows.sort(key=lambda r: (r["customer"], r["products"]))
        return rows

    # ── Dunder helpers ─────────────────────────────────────────────

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Assignment):
            return NotImplemented
        return self._assignment == other._assignment

    def __hash__(self) -> int:
        return hash(frozenset(self._assignment.items()))

    def __len__(self) -> int:
        return len(self._assignment)

    def __contains__(self, customer: object) -> bool:
        return customer in self._assignment

    def __repr__(self) -> str:
        items = ", ".join(
            f"{r['customer']}={r['products']}" for r in self.to_report()
        )
        return f"Assignment({items})"


def order_size_limits(orders: Sequence[Order]) -> dict[Customer, int]:
    """Customer → size of the first order placed by an equal customer."""
    limits: dict[Customer, int] = {}
    for order in orders:
        limits.setdefault(order.customer, order.size)
    return limits
