"""Inventory ledger: the only write path to ``Product.quantity`` after creation.

Every write is saved through the product repository, whose version check
rejects a save based on a stale read. Inside a command handler the rejected
unit of work is retried with fresh reads, so concurrent reservations are
serialized rather than overselling.
"""

import structlog
from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from storefront.product.product import Product
from storefront.shared import references

logger = structlog.get_logger(__name__)


class InventoryLedger:
    def reserve(self, product_id, quantity: int) -> float:
        """Debit ``quantity`` units from a product and return its current price.

        Raises ``ReferenceNotFound`` if the product does not resolve and
        ``InsufficientStock`` if it holds fewer than ``quantity`` units. In
        both cases stock is left unchanged.
        """
        product = references.require(Product, product_id, kind="Product")

        try:
            product.reserve_stock(quantity)
        except ValidationError:
            logger.info(
                "Stock reservation rejected",
                product_id=str(product.id),
                available=product.quantity,
                requested=quantity,
            )
            raise

        current_domain.repository_for(Product).add(product)

        logger.debug(
            "Stock reserved",
            product_id=str(product.id),
            quantity=quantity,
            remaining=product.quantity,
        )
        return product.price

    def release(self, product_id, quantity: int) -> bool:
        """Credit ``quantity`` units back to a product.

        Returns ``False`` without touching anything when the product no
        longer exists or the identifier is malformed.
        """
        product = references.resolve(Product, product_id)
        if isinstance(product, references.Resolution):
            logger.warning(
                "Stock release skipped",
                product_id=str(product_id),
                quantity=quantity,
                reason=product.value,
            )
            return False

        product.release_stock(quantity)
        current_domain.repository_for(Product).add(product)

        logger.debug(
            "Stock released",
            product_id=str(product.id),
            quantity=quantity,
            remaining=product.quantity,
        )
        return True
