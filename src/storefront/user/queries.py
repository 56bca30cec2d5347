"""Read-side helpers for users."""

from protean.utils.globals import current_domain

from storefront.shared import references
from storefront.user.user import User


def get_user(user_id) -> User:
    return references.require(User, user_id)


def list_users() -> list[User]:
    return current_domain.repository_for(User)._dao.query.order_by("name").limit(None).all().items
