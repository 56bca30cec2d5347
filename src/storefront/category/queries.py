"""Read-side helpers for categories."""

from protean.utils.globals import current_domain

from storefront.category.category import Category
from storefront.shared import references


def get_category(category_id) -> Category:
    return references.require(Category, category_id)


def list_categories() -> list[Category]:
    return current_domain.repository_for(Category)._dao.query.order_by("name").limit(None).all().items
