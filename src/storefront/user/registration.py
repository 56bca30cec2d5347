"""User registration and removal — commands and handlers."""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.shared import references
from storefront.shared.errors import ReferenceInUse
from storefront.user.user import User

logger = structlog.get_logger(__name__)


@storefront.command(part_of="User")
class RegisterUser:
    """Create a new user account."""

    name: String(required=True, max_length=100)
    email: String(required=True, max_length=254)


@storefront.command(part_of="User")
class DeleteUser:
    user_id: Identifier(required=True)


@storefront.command_handler(part_of=User)
class RegisterUserHandler:
    @handle(RegisterUser)
    def register_user(self, command):
        if not command.name.strip():
            raise ValidationError({"name": ["User name cannot be blank"]})

        repo = current_domain.repository_for(User)
        email = command.email.strip()
        if repo._dao.query.filter(email=email).all().total:
            raise ValidationError({"email": [f"A user with email '{email}' already exists"]})

        user = User.register(name=command.name, email=email)
        repo.add(user)
        return str(user.id)

    @handle(DeleteUser)
    def delete_user(self, command):
        from storefront.order.order import Order

        user = references.require(User, command.user_id)

        order_count = current_domain.repository_for(Order)._dao.query.filter(user_id=str(user.id)).all().total
        if order_count:
            logger.info("Refusing to delete user with orders", user_id=str(user.id), order_count=order_count)
            raise ReferenceInUse("User", user.id, "order", order_count)

        current_domain.repository_for(User)._dao.delete(user)
        logger.info("User deleted", user_id=str(user.id))
