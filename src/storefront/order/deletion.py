"""Order deletion — command and handler.

Stock for every line goes back to its product before the order is removed.
Lines whose product has since been deleted are skipped.
"""

import structlog
from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.inventory.ledger import InventoryLedger
from storefront.order.order import Order, OrderLine
from storefront.shared import references

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Order")
class DeleteOrder:
    order_id = Identifier(required=True)


@storefront.command_handler(part_of=Order)
class DeleteOrderHandler:
    @handle(DeleteOrder)
    def delete_order(self, command):
        order = references.require(Order, command.order_id)
        lines = order.ordered_lines

        ledger = InventoryLedger()
        released = sum(1 for line in lines if ledger.release(line.product_id, line.quantity))

        line_dao = current_domain.repository_for(OrderLine)._dao
        for line in lines:
            line_dao.delete(line)
        current_domain.repository_for(Order)._dao.delete(order)

        logger.info(
            "Order deleted",
            order_id=str(order.id),
            line_count=len(lines),
            lines_released=released,
        )
