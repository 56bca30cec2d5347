"""Category management — commands and handlers."""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.category.category import Category
from storefront.domain import storefront
from storefront.shared import references
from storefront.shared.errors import ReferenceInUse

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Category")
class CreateCategory:
    name: String(required=True, max_length=100)
    description: Text(required=True)


@storefront.command(part_of="Category")
class UpdateCategory:
    category_id: Identifier(required=True)
    name: String(max_length=100)
    description: Text()


@storefront.command(part_of="Category")
class DeleteCategory:
    category_id: Identifier(required=True)


def _ensure_name_available(name, exclude_id=None):
    repo = current_domain.repository_for(Category)
    matches = repo._dao.query.filter(name=name.strip()).all().items
    if any(str(match.id) != str(exclude_id) for match in matches):
        raise ValidationError({"name": [f"Category '{name.strip()}' already exists"]})


@storefront.command_handler(part_of=Category)
class ManageCategoryHandler:
    @handle(CreateCategory)
    def create_category(self, command):
        _ensure_name_available(command.name)

        category = Category.create(name=command.name, description=command.description)
        current_domain.repository_for(Category).add(category)
        return str(category.id)

    @handle(UpdateCategory)
    def update_category(self, command):
        category = references.require(Category, command.category_id)
        if command.name is not None:
            _ensure_name_available(command.name, exclude_id=category.id)

        category.update_details(name=command.name, description=command.description)
        current_domain.repository_for(Category).add(category)

    @handle(DeleteCategory)
    def delete_category(self, command):
        from storefront.product.product import Product

        category = references.require(Category, command.category_id)

        product_count = (
            current_domain.repository_for(Product)._dao.query.filter(category_id=str(category.id)).all().total
        )
        if product_count:
            logger.info(
                "Refusing to delete category with products",
                category_id=str(category.id),
                product_count=product_count,
            )
            raise ReferenceInUse("Category", category.id, "product", product_count)

        current_domain.repository_for(Category)._dao.delete(category)
        logger.info("Category deleted", category_id=str(category.id))
