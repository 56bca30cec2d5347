"""Read-side helpers for products."""

from protean.utils.globals import current_domain

from storefront.category.category import Category
from storefront.product.product import Product
from storefront.shared import references


def get_product(product_id) -> Product:
    return references.require(Product, product_id)


def list_products() -> list[Product]:
    return current_domain.repository_for(Product)._dao.query.order_by("name").limit(None).all().items


def list_products_by_category(category_id) -> list[Product]:
    """Products filed under a category.

    Raises ``ReferenceNotFound`` when the category itself does not resolve.
    """
    category = references.require(Category, category_id)
    return (
        current_domain.repository_for(Product)
        ._dao.query.filter(category_id=str(category.id))
        .order_by("name")
        .limit(None)
        .all()
        .items
    )
