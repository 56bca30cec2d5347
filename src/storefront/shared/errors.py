"""Error taxonomy for the storefront domain.

Each error extends the Protean exception that already carries the right HTTP
mapping, so handlers raise them directly and the API layer never inspects
error shapes.
"""

from protean.exceptions import (
    DatabaseError,
    InvalidStateError,
    ObjectNotFoundError,
    ValidationError,
)


class ReferenceNotFound(ObjectNotFoundError):
    """A referenced user, product, category or order is malformed or absent.

    Both cases surface identically as "not found".
    """

    def __init__(self, kind: str, identifier) -> None:
        self.kind = kind
        self.identifier = identifier
        super().__init__(f"{kind} with id '{identifier}' not found")


class InsufficientStock(ValidationError):
    """Requested quantity exceeds the product's available stock."""

    def __init__(self, product_id, product_name: str, available: int, requested: int) -> None:
        self.product_id = product_id
        self.product_name = product_name
        self.available = available
        self.requested = requested
        super().__init__(
            {
                "quantity": [
                    f"Insufficient stock for product '{product_name}'. Available: {available}, Requested: {requested}"
                ]
            }
        )


class InvalidStatus(ValidationError):
    """Order status outside the recognized enumeration."""

    def __init__(self, status, allowed: list[str]) -> None:
        self.status = status
        self.allowed = allowed
        super().__init__({"status": [f"Invalid status '{status}'. Use one of: {', '.join(allowed)}"]})


class ReferenceInUse(InvalidStateError):
    """A record cannot be deleted while other records still point at it."""

    def __init__(self, kind: str, identifier, referenced_by: str, count: int) -> None:
        self.kind = kind
        self.identifier = identifier
        self.referenced_by = referenced_by
        self.count = count
        super().__init__(f"{kind} '{identifier}' is still referenced by {count} {referenced_by}(s)")


class StoreFailure(DatabaseError):
    """Unexpected failure reported by the entity store."""
