"""Product aggregate root with stock tracking.

Stock only moves through ``reserve_stock`` and ``release_stock``; detail
updates never touch ``quantity``. Each change bumps the aggregate version,
so two concurrent reservations against the same product cannot both be
persisted from the same starting quantity.
"""

from datetime import datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Identifier, Integer, String, Text

from storefront.domain import storefront
from storefront.shared.errors import InsufficientStock


@storefront.aggregate
class Product:
    name: String(required=True, max_length=200)
    description: Text(required=True)
    price: Float(required=True, min_value=0.0)
    quantity: Integer(required=True, min_value=0)
    category_id: Identifier(required=True)
    created_at: DateTime(default=datetime.now)
    updated_at: DateTime(default=datetime.now)

    @invariant.post
    def name_must_not_be_blank(self):
        if not self.name or not self.name.strip():
            raise ValidationError({"name": ["Product name cannot be blank"]})

    @classmethod
    def create(cls, name, description, price, quantity, category_id):
        from storefront.product.events import ProductCreated

        now = datetime.now()
        product = cls(
            name=name.strip() if name else name,
            description=description,
            price=price,
            quantity=quantity,
            category_id=category_id,
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductCreated(
                product_id=product.id,
                name=product.name,
                price=product.price,
                quantity=product.quantity,
                category_id=product.category_id,
            )
        )
        return product

    def update_details(self, name=None, description=None, price=None, category_id=None):
        from storefront.product.events import ProductDetailsUpdated

        if name is not None:
            self.name = name.strip()
        if description is not None:
            self.description = description
        if price is not None:
            self.price = price
        if category_id is not None:
            self.category_id = category_id

        self.updated_at = datetime.now()

        self.raise_(
            ProductDetailsUpdated(
                product_id=self.id,
                name=self.name,
                price=self.price,
                category_id=self.category_id,
            )
        )

    def reserve_stock(self, quantity: int) -> None:
        """Take ``quantity`` units out of available stock.

        Raises ``InsufficientStock`` and leaves the product untouched when
        fewer than ``quantity`` units are on hand.
        """
        from storefront.product.events import StockReserved

        if quantity <= 0:
            raise ValidationError({"quantity": ["Quantity must be a positive integer"]})
        if quantity > self.quantity:
            raise InsufficientStock(self.id, self.name, self.quantity, quantity)

        self.quantity -= quantity
        self.updated_at = datetime.now()

        self.raise_(
            StockReserved(
                product_id=self.id,
                quantity=quantity,
                remaining=self.quantity,
            )
        )

    def release_stock(self, quantity: int) -> None:
        """Put ``quantity`` units back into available stock."""
        from storefront.product.events import StockReleased

        if quantity <= 0:
            raise ValidationError({"quantity": ["Quantity must be a positive integer"]})

        self.quantity += quantity
        self.updated_at = datetime.now()

        self.raise_(
            StockReleased(
                product_id=self.id,
                quantity=quantity,
                remaining=self.quantity,
            )
        )
