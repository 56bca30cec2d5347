"""Storefront bounded context — Catalog, Registration, Orders and Inventory.

A single domain holds every aggregate so that placing or deleting an order
can touch the Order and the Products it reserves inside one unit of work.
"""

from protean.domain import Domain

from storefront.utils.logging import configure_logging, get_logger

configure_logging(log_dir="logs", log_file_prefix="storefront")

logger = get_logger(__name__)

storefront = Domain(name="storefront")
