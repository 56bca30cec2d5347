"""Reference validation for identifiers that point at other aggregates.

``resolve`` tells the caller *why* an identifier did not resolve;
``require`` collapses both reasons into a single ``ReferenceNotFound``.
"""

from enum import Enum
from uuid import UUID

import structlog
from protean.exceptions import DatabaseError, ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.shared.errors import ReferenceNotFound, StoreFailure

logger = structlog.get_logger(__name__)


class Resolution(Enum):
    MALFORMED = "Malformed"
    NOT_FOUND = "NotFound"


def is_well_formed(identifier) -> bool:
    """Check an identifier against the store's key-format rules.

    With the ``uuid`` identity strategy keys are UUID strings; any other
    strategy only requires a non-blank value.
    """
    if identifier is None or not str(identifier).strip():
        return False

    if current_domain.config.get("identity_strategy") != "uuid":
        return True

    try:
        UUID(str(identifier))
    except ValueError:
        return False
    return True


def resolve(aggregate_cls, identifier):
    """Return the aggregate for ``identifier`` or the ``Resolution`` explaining its absence."""
    if not is_well_formed(identifier):
        return Resolution.MALFORMED

    try:
        return current_domain.repository_for(aggregate_cls).get(str(identifier))
    except ObjectNotFoundError:
        return Resolution.NOT_FOUND
    except DatabaseError as exc:
        raise StoreFailure(f"Failed loading {aggregate_cls.__name__} '{identifier}'", original_exception=exc) from exc


def require(aggregate_cls, identifier, kind: str | None = None):
    """Return the aggregate for ``identifier`` or raise ``ReferenceNotFound``."""
    result = resolve(aggregate_cls, identifier)
    if isinstance(result, Resolution):
        kind = kind or aggregate_cls.__name__
        logger.debug("Reference did not resolve", kind=kind, identifier=str(identifier), reason=result.value)
        raise ReferenceNotFound(kind, identifier)
    return result
