"""Product management — commands and handlers.

Stock levels are set once at creation. Afterwards they only change through
the inventory ledger, so ``UpdateProduct`` has no quantity field.
"""

import structlog
from protean import handle
from protean.fields import Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.category.category import Category
from storefront.domain import storefront
from storefront.product.product import Product
from storefront.shared import references

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Product")
class CreateProduct:
    name: String(required=True, max_length=200)
    description: Text(required=True)
    price: Float(required=True, min_value=0.0)
    quantity: Integer(required=True, min_value=0)
    category_id: Identifier(required=True)


@storefront.command(part_of="Product")
class UpdateProduct:
    product_id: Identifier(required=True)
    name: String(max_length=200)
    description: Text()
    price: Float(min_value=0.0)
    category_id: Identifier()


@storefront.command(part_of="Product")
class DeleteProduct:
    product_id: Identifier(required=True)


@storefront.command_handler(part_of=Product)
class ManageProductHandler:
    @handle(CreateProduct)
    def create_product(self, command):
        category = references.require(Category, command.category_id)

        product = Product.create(
            name=command.name,
            description=command.description,
            price=command.price,
            quantity=command.quantity,
            category_id=str(category.id),
        )
        current_domain.repository_for(Product).add(product)
        return str(product.id)

    @handle(UpdateProduct)
    def update_product(self, command):
        product = references.require(Product, command.product_id)

        category_id = None
        if command.category_id is not None:
            category_id = str(references.require(Category, command.category_id).id)

        product.update_details(
            name=command.name,
            description=command.description,
            price=command.price,
            category_id=category_id,
        )
        current_domain.repository_for(Product).add(product)

    @handle(DeleteProduct)
    def delete_product(self, command):
        # Orders keep their snapshot of name and price; releasing stock for a
        # deleted product later is a no-op.
        product = references.require(Product, command.product_id)
        current_domain.repository_for(Product)._dao.delete(product)
        logger.info("Product deleted", product_id=str(product.id), quantity=product.quantity)
