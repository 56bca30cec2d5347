"""Order aggregate root with OrderLine entities."""

import json
from datetime import datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String

from storefront.domain import storefront
from storefront.shared.errors import InvalidStatus


class OrderStatus(Enum):
    PENDING = "Pending"
    PROCESSING = "Processing"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"

    @classmethod
    def values(cls) -> list[str]:
        return [status.value for status in cls]


@storefront.entity(part_of="Order")
class OrderLine:
    """A product and quantity within an order.

    ``position`` is the line's 1-based place in submission order. Name and
    unit price are copied from the product when the order is placed, so the
    order total stays explainable after catalog changes.
    """

    product_id = Identifier(required=True)
    product_name = String(required=True, max_length=200)
    unit_price = Float(required=True, min_value=0.0)
    quantity = Integer(required=True, min_value=1)
    position = Integer(required=True, min_value=1)

    @property
    def line_total(self) -> float:
        return round(self.unit_price * self.quantity, 2)


@storefront.aggregate
class Order:
    """A user's purchase of one or more products.

    The total is computed once at placement from the reserved lines and is
    never recomputed. Status moves freely between the five values; there is
    no transition graph.
    """

    user_id = Identifier(required=True)
    lines = HasMany(OrderLine)
    total_amount = Float(required=True, min_value=0.0)
    status = String(
        max_length=20,
        choices=OrderStatus,
        default=OrderStatus.PENDING.value,
    )
    order_date = DateTime(default=datetime.now)
    updated_at = DateTime(default=datetime.now)

    @property
    def ordered_lines(self) -> list[OrderLine]:
        """Lines in submission order, whatever order the store returns them in."""
        return sorted(self.lines, key=lambda line: line.position)

    @classmethod
    def place(cls, user_id, lines_data):
        """Create a pending order from already-reserved lines.

        Args:
            user_id: The user placing the order.
            lines_data: List of dicts with product_id, product_name,
                        unit_price and quantity, in submission order.
        """
        from storefront.order.events import OrderPlaced

        if not lines_data:
            raise ValidationError({"line_items": ["An order needs at least one line item"]})

        lines = [
            OrderLine(
                product_id=str(line["product_id"]),
                product_name=line["product_name"],
                unit_price=line["unit_price"],
                quantity=line["quantity"],
                position=position,
            )
            for position, line in enumerate(lines_data, start=1)
        ]
        total_amount = round(sum(line.unit_price * line.quantity for line in lines), 2)

        now = datetime.now()
        order = cls(
            user_id=str(user_id),
            lines=lines,
            total_amount=total_amount,
            status=OrderStatus.PENDING.value,
            order_date=now,
            updated_at=now,
        )
        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                user_id=str(user_id),
                lines=json.dumps(
                    [
                        {
                            "product_id": line.product_id,
                            "quantity": line.quantity,
                            "position": line.position,
                            "unit_price": line.unit_price,
                        }
                        for line in lines
                    ]
                ),
                total_amount=total_amount,
                order_date=now,
            )
        )
        return order

    def change_status(self, status):
        from storefront.order.events import OrderStatusChanged

        if status not in OrderStatus.values():
            raise InvalidStatus(status, OrderStatus.values())

        previous = self.status
        now = datetime.now()
        self.status = status
        self.updated_at = now

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                previous_status=previous,
                new_status=status,
                changed_at=now,
            )
        )
