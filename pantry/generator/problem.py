"""
Random problem generator — products, customers, orders and inventories.

Every draw comes from one numpy Generator, so a seed fully determines
the problem instance.
"""

from __future__ import annotations

import numpy as np

from pantry.core.model import Customer, Inventory, Order, Product

DEFAULT_NUM_PRODUCTS = (1, 10)
DEFAULT_NUM_ORDERS = (1, 10)
MIN_COST, MAX_COST = 0.1, 100.0
MIN_PREFERENCE, MAX_PREFERENCE = 0.1, 10.0
MIN_QUANTITY, MAX_QUANTITY = 1, 20


def _check_range(label: str, bounds: tuple[int, int]) -> tuple[int, int]:
    low, high = bounds
    if low < 1 or low > high:
        raise ValueError(f"{label}: expected 1 <= min <= max, got {bounds}.")
    return int(low), int(high)


def generate_problem(
    max_order_size: int,
    num_products: tuple[int, int] = DEFAULT_NUM_PRODUCTS,
    num_orders: tuple[int, int] = DEFAULT_NUM_ORDERS,
    seed: int | None = None,
    rng: np.random.Generator | None = None,
) -> tuple[list[Order], Inventory]:
    """
    Generate one (orders, inventory) problem.

    Parameters
    ----------
    max_order_size : int
        Order sizes are drawn from ``[1, max_order_size]``.
    num_products, num_orders : (min, max)
        Inclusive ranges for the number of products and orders.
    seed : int, optional
        Seed for a fresh Generator. Ignored when *rng* is given.
    rng : numpy Generator, optional
        Shared generator, e.g. to draw a sequence of problems.
    """
    if max_order_size < 1:
        raise ValueError(f"max_order_size must be >= 1, got {max_order_size}.")
    min_products, max_products = _check_range("num_products", num_products)
    min_orders, max_orders = _check_range("num_orders", num_orders)
    rng = rng if rng is not None else np.random.default_rng(seed)

    products = generate_products(rng, int(rng.integers(min_products, max_products + 1)))
    n_orders = int(rng.integers(min_orders, max_orders + 1))
    orders = [
        Order(
            customer=generate_customer(rng, f"customer-{i}", products),
            size=int(rng.integers(1, max_order_size + 1)),
        )
        for i in range(n_orders)
    ]
    return orders, generate_inventory(rng, products)


def generate_products(rng: np.random.Generator, count: int) -> list[Product]:
    costs = np.round(rng.uniform(MIN_COST, MAX_COST, size=count), 2)
    return [Product(f"product-{i}", float(cost)) for i, cost in enumerate(costs)]


def generate_customer(
    rng: np.random.Generator, name: str, products: list[Product]
) -> Customer:
    """Preferences for every product; allergies a random subset of them."""
    weights = np.round(
        rng.uniform(MIN_PREFERENCE, MAX_PREFERENCE, size=len(products)), 2
    )
    n_allergies = int(rng.integers(0, len(products) + 1))
    allergic = rng.choice(len(products), size=n_allergies, replace=False)
    return Customer(
        name=name,
        preferences={p: float(w) for p, w in zip(products, weights)},
        allergies=frozenset(products[int(i)] for i in allergic),
    )


def generate_inventory(rng: np.random.Generator, products: list[Product]) -> Inventory:
    quantities = rng.integers(MIN_QUANTITY, MAX_QUANTITY + 1, size=len(products))
    return Inventory({p: int(q) for p, q in zip(products, quantities)})
