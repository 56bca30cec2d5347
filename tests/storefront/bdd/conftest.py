"""Shared BDD fixtures and step definitions for the Storefront domain."""

import json

import pytest
from protean.utils.globals import current_domain
from pytest_bdd import given, parsers, then

from storefront.order.order import Order
from storefront.order.placement import PlaceOrder
from storefront.product.product import Product


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def products():
    """Product ids keyed by name."""
    return {}


@pytest.fixture()
def outcome():
    """Container for the order id or the captured error."""
    return {"order_id": None, "exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("a registered user", target_fixture="user_id")
def registered_user(make_user):
    return make_user(name="Ada Lovelace", email="ada@example.com")


@given(parsers.cfparse('a product "{name}" priced {price:f} with {quantity:d} in stock'))
def product_in_stock(make_product, products, name, price, quantity):
    products[name] = make_product(name=name, price=price, quantity=quantity)


@given(parsers.cfparse('the user has ordered {quantity:d} of "{name}"'))
def user_has_ordered(user_id, products, outcome, quantity, name):
    command = PlaceOrder(
        user_id=user_id,
        line_items=json.dumps([{"product_id": products[name], "quantity": quantity}]),
    )
    outcome["order_id"] = current_domain.process(command, asynchronous=False)


# ---------------------------------------------------------------------------
# Then steps (shared)
# ---------------------------------------------------------------------------
@then(parsers.cfparse('"{name}" has {quantity:d} in stock'))
def product_has_stock(products, name, quantity):
    assert current_domain.repository_for(Product).get(products[name]).quantity == quantity


@then(parsers.cfparse('the order status is "{status}"'))
def order_status_is(outcome, status):
    assert current_domain.repository_for(Order).get(outcome["order_id"]).status == status
