"""User aggregate root for registered shoppers."""

from datetime import datetime

from protean.fields import DateTime, String

from storefront.domain import storefront
from storefront.shared.email import EmailAddress


@storefront.aggregate
class User:
    """A registered person who can place orders.

    The email is validated through ``EmailAddress`` at registration and kept
    as a plain, unique string so it can be looked up directly. Order
    operations never modify users.
    """

    name: String(required=True, max_length=100)
    email: String(required=True, max_length=254, unique=True)
    created_at: DateTime(default=datetime.now)

    @classmethod
    def register(cls, name, email):
        from storefront.user.events import UserRegistered

        address = EmailAddress(address=email.strip()).address
        now = datetime.now()

        user = cls(
            name=name.strip(),
            email=address,
            created_at=now,
        )
        user.raise_(
            UserRegistered(
                user_id=user.id,
                name=user.name,
                email=user.email,
                registered_at=now,
            )
        )
        return user
