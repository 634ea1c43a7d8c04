"""
Domain value types: Product, Customer, Order and Inventory.

All of them are immutable and compare by structural value, so two
independently built customers with the same fields are the same key
wherever they are used (assignments, visited sets, dict lookups).
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from functools import cached_property


# ── Product ────────────────────────────────────────────────────────

@dataclass(frozen=True, order=True)
class Product:
    """A product with a unit cost. Orderable by (name, cost)."""

    name: str
    cost: float = 0.0

    def __post_init__(self) -> None:
        if self.cost < 0:
            raise ValueError(
                f"Product {self.name!r}: cost must be non-negative, got {self.cost}."
            )


# ── Customer ───────────────────────────────────────────────────────

@dataclass(frozen=True)
class Customer:
    """
    A customer with per-product satisfaction weights and allergies.

    Attributes
    ----------
    name : str
        Display name. Not unique on its own.
    preferences : tuple[tuple[Product, float], ...]
        Canonical sorted (product, weight) pairs. A mapping may be passed
        to the constructor; it is converted so that equal customers hash
        equally regardless of insertion order.
    allergies : frozenset[Product]
        Products the customer must never receive.
    """

    name: str
    preferences: tuple[tuple[Product, float], ...] = ()
    allergies: frozenset[Product] = frozenset()

    def __post_init__(self) -> None:
        prefs: Iterable[tuple[Product, float]]
        if isinstance(self.preferences, Mapping):
            prefs = self.preferences.items()
        else:
            prefs = self.preferences
        canonical = tuple(sorted((p, float(w)) for p, w in prefs))
        object.__setattr__(self, "preferences", canonical)
        object.__setattr__(self, "allergies", frozenset(self.allergies))

    @cached_property
    def _weights(self) -> dict[Product, float]:
        return dict(self.preferences)

    def preference_for(self, product: Product) -> float:
        """Satisfaction weight for *product*, 0.0 if the customer has none."""
        return self._weights.get(product, 0.0)

    def is_allergic_to(self, product: Product) -> bool:
        return product in self.allergies

    def is_allergic_to_any(self, products: Iterable[Product]) -> bool:
        return any(p in self.allergies for p in products)


# ── Order ──────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Order:
    """A customer's request for exactly *size* distinct products."""

    customer: Customer
    size: int

    def __post_init__(self) -> None:
        if self.size < 1:
            raise ValueError(
                f"Order for {self.customer.name!r}: size must be >= 1, got {self.size}."
            )


# ── Inventory ──────────────────────────────────────────────────────

@dataclass(frozen=True)
class Inventory:
    """
    Available quantity per product.

    Insertion order is preserved: successor enumeration walks the
    products in this order, which keeps searches reproducible.
    """

    quantities: tuple[tuple[Product, int], ...] = field(default=())

    def __post_init__(self) -> None:
        items: Iterable[tuple[Product, int]]
        if isinstance(self.quantities, Mapping):
            items = self.quantities.items()
        else:
            items = self.quantities

        merged: dict[Product, int] = {}
        for product, quantity in items:
            if product in merged:
                raise ValueError(f"Inventory lists {product.name!r} more than once.")
            quantity = int(quantity)
            if quantity < 0:
                raise ValueError(
                    f"Inventory quantity for {product.name!r} must be "
                    f"non-negative, got {quantity}."
                )
            merged[product] = quantity
        object.__setattr__(self, "quantities", tuple(merged.items()))

    @cached_property
    def _lookup(self) -> dict[Product, int]:
        return dict(self.quantities)

    def products(self) -> tuple[Product, ...]:
        """Distinct products, in insertion order."""
        return tuple(p for p, _ in self.quantities)

    def quantity_of(self, product: Product) -> int:
        """Quantity available for *product* (0 if it is not stocked)."""
        return self._lookup.get(product, 0)

    def __len__(self) -> int:
        return len(self.quantities)

    def __contains__(self, product: object) -> bool:
        return product in self._lookup
