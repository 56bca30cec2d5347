"""Domain events for the Category aggregate."""

from protean.fields import Identifier, String, Text

from storefront.domain import storefront


@storefront.event(part_of="Category")
class CategoryCreated:
    """A new product category was added to the catalog."""

    __version__ = 1

    category_id: Identifier(required=True)
    name: String(required=True)
    description: Text(required=True)


@storefront.event(part_of="Category")
class CategoryDetailsUpdated:
    """A category's name or description was changed."""

    __version__ = 1

    category_id: Identifier(required=True)
    name: String(required=True)
    description: Text(required=True)
