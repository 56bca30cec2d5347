"""Tests for the Product aggregate and its stock operations."""

import pytest
from protean.exceptions import ValidationError
from protean.utils.reflection import declared_fields

from storefront.product.events import ProductCreated, ProductDetailsUpdated, StockReleased, StockReserved
from storefront.product.product import Product
from storefront.shared.errors import InsufficientStock


def _product(quantity=10, price=10.0):
    product = Product.create(
        name="Wireless Mouse",
        description="2.4GHz ergonomic mouse",
        price=price,
        quantity=quantity,
        category_id="cat-001",
    )
    product._events.clear()
    return product


class TestProductConstruction:
    def test_declared_fields(self):
        fields = declared_fields(Product)
        for name in ("name", "description", "price", "quantity", "category_id", "created_at"):
            assert name in fields

    def test_create_product(self):
        product = Product.create(
            name="  Wireless Mouse ",
            description="2.4GHz ergonomic mouse",
            price=24.99,
            quantity=150,
            category_id="cat-001",
        )
        assert product.name == "Wireless Mouse"
        assert product.price == 24.99
        assert product.quantity == 150
        assert product.created_at is not None

    def test_create_raises_product_created(self):
        product = Product.create(name="Mouse", description="d", price=1.0, quantity=3, category_id="cat-001")
        assert len(product._events) == 1
        event = product._events[0]
        assert isinstance(event, ProductCreated)
        assert event.quantity == 3

    def test_negative_price_rejected(self):
        with pytest.raises(ValidationError):
            Product.create(name="Mouse", description="d", price=-1.0, quantity=3, category_id="cat-001")

    def test_negative_quantity_rejected(self):
        with pytest.raises(ValidationError):
            Product.create(name="Mouse", description="d", price=1.0, quantity=-1, category_id="cat-001")

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError):
            Product.create(name="   ", description="d", price=1.0, quantity=1, category_id="cat-001")


class TestReserveStock:
    def test_reserve_decrements_quantity(self):
        product = _product(quantity=10)
        product.reserve_stock(3)
        assert product.quantity == 7

    def test_reserve_everything(self):
        product = _product(quantity=4)
        product.reserve_stock(4)
        assert product.quantity == 0

    def test_reserve_raises_stock_reserved(self):
        product = _product(quantity=10)
        product.reserve_stock(3)
        event = product._events[-1]
        assert isinstance(event, StockReserved)
        assert event.quantity == 3
        assert event.remaining == 7

    def test_insufficient_stock_leaves_quantity_unchanged(self):
        product = _product(quantity=1)
        with pytest.raises(InsufficientStock) as exc:
            product.reserve_stock(2)

        assert product.quantity == 1
        assert exc.value.available == 1
        assert exc.value.requested == 2
        assert product._events == []

    def test_insufficient_stock_is_a_validation_error(self):
        product = _product(quantity=0)
        with pytest.raises(ValidationError) as exc:
            product.reserve_stock(1)
        assert "Available: 0, Requested: 1" in exc.value.messages["quantity"][0]

    @pytest.mark.parametrize("quantity", [0, -3])
    def test_non_positive_quantity_rejected(self, quantity):
        product = _product(quantity=10)
        with pytest.raises(ValidationError):
            product.reserve_stock(quantity)
        assert product.quantity == 10

    def test_stock_never_negative_over_a_sequence(self):
        product = _product(quantity=10)
        for requested in [3, 4, 5, 2, 1, 7, 1, 1]:
            try:
                product.reserve_stock(requested)
            except InsufficientStock:
                pass
            assert product.quantity >= 0
        assert product.quantity == 0


class TestReleaseStock:
    def test_release_increments_quantity(self):
        product = _product(quantity=5)
        product.release_stock(2)
        assert product.quantity == 7

    def test_reserve_then_release_restores(self):
        product = _product(quantity=10)
        product.reserve_stock(6)
        product.release_stock(6)
        assert product.quantity == 10

    def test_release_raises_stock_released(self):
        product = _product(quantity=5)
        product.release_stock(2)
        event = product._events[-1]
        assert isinstance(event, StockReleased)
        assert event.remaining == 7

    def test_zero_release_rejected(self):
        product = _product(quantity=5)
        with pytest.raises(ValidationError):
            product.release_stock(0)


class TestUpdateDetails:
    def test_update_does_not_touch_quantity(self):
        product = _product(quantity=8)
        product.update_details(name="Trackball", price=30.0)
        assert product.name == "Trackball"
        assert product.price == 30.0
        assert product.quantity == 8
        assert isinstance(product._events[-1], ProductDetailsUpdated)
