"""Category aggregate root for grouping products in the catalog."""

from datetime import datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, String, Text

from storefront.domain import storefront


@storefront.aggregate
class Category:
    """A named grouping of products.

    Names are unique across the catalog and stored trimmed. Both the name and
    the description must carry visible text.
    """

    name: String(required=True, max_length=100, unique=True)
    description: Text(required=True)
    created_at: DateTime(default=datetime.now)
    updated_at: DateTime(default=datetime.now)

    @invariant.post
    def name_and_description_must_not_be_blank(self):
        if not self.name or not self.name.strip():
            raise ValidationError({"name": ["Category name cannot be blank"]})
        if not self.description or not self.description.strip():
            raise ValidationError({"description": ["Category description cannot be blank"]})

    @classmethod
    def create(cls, name, description):
        from storefront.category.events import CategoryCreated

        now = datetime.now()
        category = cls(
            name=name.strip() if name else name,
            description=description,
            created_at=now,
            updated_at=now,
        )
        category.raise_(
            CategoryCreated(
                category_id=category.id,
                name=category.name,
                description=category.description,
            )
        )
        return category

    def update_details(self, name=None, description=None):
        from storefront.category.events import CategoryDetailsUpdated

        if name is not None:
            self.name = name.strip()
        if description is not None:
            self.description = description

        self.updated_at = datetime.now()

        self.raise_(
            CategoryDetailsUpdated(
                category_id=self.id,
                name=self.name,
                description=self.description,
            )
        )
