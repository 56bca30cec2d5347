"""Read-side helpers for orders."""

from protean.utils.globals import current_domain

from storefront.order.order import Order
from storefront.shared import references
from storefront.user.user import User


def get_order(order_id) -> Order:
    return references.require(Order, order_id)


def list_orders() -> list[Order]:
    return current_domain.repository_for(Order)._dao.query.order_by("-order_date").limit(None).all().items


def list_orders_by_user(user_id) -> list[Order]:
    """Orders placed by a user, newest first.

    Raises ``ReferenceNotFound`` when the user does not resolve, whether or
    not any orders carry that id.
    """
    user = references.require(User, user_id)
    return (
        current_domain.repository_for(Order)
        ._dao.query.filter(user_id=str(user.id))
        .order_by("-order_date")
        .limit(None)
        .all()
        .items
    )
