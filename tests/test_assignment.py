"""Tests for Assignment — mutation, evaluation and validity."""

import pytest

from pantry.core.assignment import Assignment
from pantry.core.errors import AllergyViolation, DuplicateAssignment
from pantry.core.model import Customer, Inventory, Order, Product


APPLE = Product("apple", 2.0)
BREAD = Product("bread", 3.5)
CHEESE = Product("cheese", 4.0)

ANN = Customer("ann", {APPLE: 5.0, BREAD: 1.0}, frozenset({CHEESE}))
BOB = Customer("bob", {CHEESE: 2.0})


def _orders():
    return [Order(ANN, 2), Order(BOB, 1)]


def test_empty_assignment():
    a = Assignment()
    assert a.products_given_to(ANN) == frozenset()
    assert a.calculate_cost() == 0
    assert a.calculate_satisfaction() == 0
    assert a.count_assignments() == 0
    assert len(a) == 0


def test_assign_returns_new_value():
    """The original assignment is never changed."""
    empty = Assignment()
    one = empty.assign_product_to_customer(ANN, APPLE)
    two = one.assign_product_to_customer(ANN, BREAD)

    assert empty.products_given_to(ANN) == frozenset()
    assert one.products_given_to(ANN) == {APPLE}
    assert two.products_given_to(ANN) == {APPLE, BREAD}
    assert two.count_assignments() == 2


def test_other_customers_unchanged():
    a = Assignment().assign_product_to_customer(BOB, CHEESE)
    b = a.assign_product_to_customer(ANN, APPLE)
    assert b.products_given_to(BOB) == {CHEESE}


def test_allergy_violation():
    with pytest.raises(AllergyViolation):
        Assignment().assign_product_to_customer(ANN, CHEESE)


def test_duplicate_assignment():
    a = Assignment().assign_product_to_customer(ANN, APPLE)
    with pytest.raises(DuplicateAssignment):
        a.assign_product_to_customer(ANN, APPLE)


def test_errors_are_value_errors():
    with pytest.raises(ValueError):
        Assignment().assign_product_to_customer(ANN, CHEESE)


def test_cost_and_satisfaction():
    a = (
        Assignment()
        .assign_product_to_customer(ANN, APPLE)
        .assign_product_to_customer(ANN, BREAD)
        .assign_product_to_customer(BOB, APPLE)
    )
    assert abs(a.calculate_cost() - (2.0 + 3.5 + 2.0)) < 1e-9
    # bob has no preference for apple -> 0
    assert abs(a.calculate_satisfaction() - 6.0) < 1e-9
    assert abs(a.cost_of_customer(ANN) - 5.5) < 1e-9
    assert abs(a.satisfaction_of_customer(BOB)) < 1e-9
    assert a.count_of_product(APPLE) == 2
    assert a.count_of_product(CHEESE) == 0


def test_hash_is_order_independent():
    a = Assignment().assign_product_to_customer(ANN, APPLE).assign_product_to_customer(BOB, CHEESE)
    b = Assignment().assign_product_to_customer(BOB, CHEESE).assign_product_to_customer(ANN, APPLE)
    assert a == b
    assert hash(a) == hash(b)
    assert len({a, b}) == 1


def test_empty_sets_are_not_stored():
    assert Assignment({ANN: frozenset()}) == Assignment()


def test_customers_lists_only_holders():
    assert Assignment().customers() == ()
    assert Assignment({ANN: frozenset()}).customers() == ()

    a = Assignment().assign_product_to_customer(ANN, APPLE)
    assert a.customers() == (ANN,)

    a = a.assign_product_to_customer(BOB, CHEESE)
    assert set(a.customers()) == {ANN, BOB}
    assert len(a.customers()) == 2


def test_valid_assignment():
    inv = Inventory({APPLE: 1, BREAD: 1, CHEESE: 1})
    a = (
        Assignment()
        .assign_product_to_customer(ANN, APPLE)
        .assign_product_to_customer(BOB, CHEESE)
    )
    assert a.is_valid(_orders(), inv)
    assert not a.fulfills_orders(_orders())

    full = a.assign_product_to_customer(ANN, BREAD)
    assert full.is_valid(_orders(), inv)
    assert full.fulfills_orders(_orders())


def test_allergy_invalid_when_built_directly():
    a = Assignment({ANN: frozenset({CHEESE})})
    assert not a.respects_allergies()
    assert not a.is_valid(_orders(), Inventory({CHEESE: 5}))


def test_order_size_exceeded():
    a = Assignment({BOB: frozenset({APPLE, CHEESE})})
    assert not a.does_not_exceed_order_sizes(_orders())


def test_customer_without_order_is_invalid():
    stranger = Customer("carl")
    a = Assignment({stranger: frozenset({APPLE})})
    assert not a.does_not_exceed_order_sizes(_orders())


def test_inventory_exceeded():
    a = Assignment({ANN: frozenset({APPLE}), BOB: frozenset({APPLE})})
    assert not a.does_not_exceed_inventory(Inventory({APPLE: 1}))
    assert a.does_not_exceed_inventory(Inventory({APPLE: 2}))
    assert not a.does_not_exceed_inventory(Inventory({}))


def test_first_order_sets_limit_for_equal_customers():
    orders = [Order(Customer("dup"), 1), Order(Customer("dup"), 2)]
    a = Assignment({Customer("dup"): frozenset({APPLE, BREAD})})
    assert not a.does_not_exceed_order_sizes(orders)
    # both orders must match for fulfilment, so this can never be fulfilled
    assert not a.fulfills_orders(orders)


def test_report_is_sorted():
    a = Assignment({BOB: frozenset({CHEESE}), ANN: frozenset({BREAD, APPLE})})
    assert a.to_report() == [
        {"customer": "ann", "products": ["apple", "bread"]},
        {"customer": "bob", "products": ["cheese"]},
    ]
    assert "ann=" in repr(a)
