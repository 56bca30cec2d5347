"""Application tests for order status updates, deletion and queries."""

import pytest
from protean.utils.globals import current_domain

from storefront.order.deletion import DeleteOrder
from storefront.order.order import Order, OrderLine
from storefront.order.queries import get_order, list_orders, list_orders_by_user
from storefront.order.status import UpdateOrderStatus
from storefront.product.management import DeleteProduct
from storefront.product.product import Product
from storefront.shared.errors import InvalidStatus, ReferenceNotFound


def _stock(product_id):
    return current_domain.repository_for(Product).get(product_id).quantity


@pytest.fixture()
def order_setup(make_user, make_product, place_order):
    user_id = make_user()
    product_id = make_product(price=10.0, quantity=10)
    order_id = place_order(user_id, [{"product_id": product_id, "quantity": 3}])
    return {"user_id": user_id, "product_id": product_id, "order_id": order_id}


class TestUpdateOrderStatus:
    def test_update_status(self, order_setup):
        current_domain.process(
            UpdateOrderStatus(order_id=order_setup["order_id"], status="Shipped"),
            asynchronous=False,
        )
        assert get_order(order_setup["order_id"]).status == "Shipped"

    def test_invalid_status_rejected(self, order_setup):
        with pytest.raises(InvalidStatus):
            current_domain.process(
                UpdateOrderStatus(order_id=order_setup["order_id"], status="Teleported"),
                asynchronous=False,
            )
        assert get_order(order_setup["order_id"]).status == "Pending"

    def test_unknown_order_not_found(self):
        with pytest.raises(ReferenceNotFound):
            current_domain.process(
                UpdateOrderStatus(order_id="0f8fad5b-d9cb-469f-a165-70867728950e", status="Shipped"),
                asynchronous=False,
            )

    def test_status_change_keeps_stock(self, order_setup):
        current_domain.process(
            UpdateOrderStatus(order_id=order_setup["order_id"], status="Cancelled"),
            asynchronous=False,
        )
        assert _stock(order_setup["product_id"]) == 7


class TestDeleteOrder:
    def test_delete_restores_stock(self, order_setup):
        assert _stock(order_setup["product_id"]) == 7

        current_domain.process(DeleteOrder(order_id=order_setup["order_id"]), asynchronous=False)

        assert _stock(order_setup["product_id"]) == 10
        with pytest.raises(ReferenceNotFound):
            get_order(order_setup["order_id"])

    def test_delete_removes_lines(self, order_setup):
        current_domain.process(DeleteOrder(order_id=order_setup["order_id"]), asynchronous=False)
        assert current_domain.repository_for(OrderLine)._dao.query.all().total == 0

    def test_delete_skips_deleted_products(self, make_user, make_product, place_order):
        user_id = make_user()
        kept = make_product(name="Kept", quantity=5)
        dropped = make_product(name="Dropped", quantity=5)
        order_id = place_order(user_id, [{"product_id": kept, "quantity": 2}, {"product_id": dropped, "quantity": 1}])

        current_domain.process(DeleteProduct(product_id=dropped), asynchronous=False)
        current_domain.process(DeleteOrder(order_id=order_id), asynchronous=False)

        assert _stock(kept) == 5
        assert current_domain.repository_for(Order)._dao.query.all().total == 0

    def test_delete_unknown_order_not_found(self):
        with pytest.raises(ReferenceNotFound):
            current_domain.process(DeleteOrder(order_id="bogus"), asynchronous=False)


class TestOrderQueries:
    def test_repeated_reads_are_stable(self, order_setup):
        first = get_order(order_setup["order_id"])
        second = get_order(order_setup["order_id"])
        assert first.status == second.status
        assert first.total_amount == second.total_amount

    def test_list_orders(self, order_setup):
        orders = list_orders()
        assert [str(order.id) for order in orders] == [order_setup["order_id"]]

    def test_list_orders_by_user(self, order_setup):
        orders = list_orders_by_user(order_setup["user_id"])
        assert len(orders) == 1

    def test_user_without_orders_gets_empty_list(self, make_user):
        user_id = make_user()
        assert list_orders_by_user(user_id) == []

    @pytest.mark.parametrize("user_id", ["not-a-uuid", "0f8fad5b-d9cb-469f-a165-70867728950e"])
    def test_unknown_user_not_found(self, user_id):
        with pytest.raises(ReferenceNotFound):
            list_orders_by_user(user_id)
