"""Domain events for the Product aggregate."""

from protean.fields import Float, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Product")
class ProductCreated:
    """A product was added to the catalog with an opening stock level."""

    __version__ = 1

    product_id: Identifier(required=True)
    name: String(required=True)
    price: Float(required=True)
    quantity: Integer(required=True)
    category_id: Identifier(required=True)


@storefront.event(part_of="Product")
class ProductDetailsUpdated:
    __version__ = 1

    product_id: Identifier(required=True)
    name: String(required=True)
    price: Float(required=True)
    category_id: Identifier(required=True)


@storefront.event(part_of="Product")
class StockReserved:
    """Units were taken out of available stock for an order."""

    __version__ = 1

    product_id: Identifier(required=True)
    quantity: Integer(required=True)
    remaining: Integer(required=True)


@storefront.event(part_of="Product")
class StockReleased:
    """Units were returned to available stock."""

    __version__ = 1

    product_id: Identifier(required=True)
    quantity: Integer(required=True)
    remaining: Integer(required=True)
