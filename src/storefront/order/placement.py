"""Order placement — command and handler.

The handler runs inside a single unit of work: a failure on any line
discards the reservations already made for earlier lines, so a rejected
order never leaves stock debited.
"""

import json

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, Text
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.inventory.ledger import InventoryLedger
from storefront.order.order import Order
from storefront.product.product import Product
from storefront.shared import references
from storefront.user.user import User

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Order")
class PlaceOrder:
    user_id = Identifier(required=True)
    line_items = Text(required=True)  # JSON: list of {product_id, quantity}


def parse_line_items(raw):
    """Decode and validate the requested line items.

    Every item needs a product id and a positive integer quantity. Nothing
    is looked up here.
    """
    try:
        items = json.loads(raw) if isinstance(raw, str) else raw
    except json.JSONDecodeError as exc:
        raise ValidationError({"line_items": ["Line items must be a JSON list"]}) from exc

    if not isinstance(items, list):
        raise ValidationError({"line_items": ["Line items must be a list"]})
    if not items:
        raise ValidationError({"line_items": ["An order needs at least one line item"]})

    errors = []
    for position, item in enumerate(items, start=1):
        if not isinstance(item, dict):
            errors.append(f"Line {position}: expected an object with product_id and quantity")
            continue

        product_id = item.get("product_id")
        if product_id is None or not str(product_id).strip():
            errors.append(f"Line {position}: product_id is required")

        quantity = item.get("quantity")
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
            errors.append(f"Line {position}: quantity must be a positive integer")

    if errors:
        raise ValidationError({"line_items": errors})

    return [{"product_id": str(item["product_id"]), "quantity": item["quantity"]} for item in items]


@storefront.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        line_items = parse_line_items(command.line_items)
        user = references.require(User, command.user_id)

        ledger = InventoryLedger()
        lines = []
        for item in line_items:
            product = references.require(Product, item["product_id"], kind="Product")
            unit_price = ledger.reserve(product.id, item["quantity"])
            lines.append(
                {
                    "product_id": str(product.id),
                    "product_name": product.name,
                    "unit_price": unit_price,
                    "quantity": item["quantity"],
                }
            )

        order = Order.place(user_id=user.id, lines_data=lines)
        current_domain.repository_for(Order).add(order)

        logger.info(
            "Order placed",
            order_id=str(order.id),
            user_id=str(user.id),
            line_count=len(lines),
            total_amount=order.total_amount,
        )
        return str(order.id)
