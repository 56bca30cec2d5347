"""SQL schema management for the storefront's relational providers.

The in-memory provider keeps no schema, so only ``sqlite`` and
``postgresql`` providers are touched.
"""

from collections.abc import Iterator

import structlog
from protean.domain import Domain
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine

logger = structlog.get_logger(__name__)

SQL_PROVIDERS = frozenset({"sqlite", "postgresql"})


def _sql_providers(domain: Domain) -> Iterator[tuple[object, Engine]]:
    for _, provider in domain.providers.items():
        if provider.conn_info["provider"] not in SQL_PROVIDERS:
            continue

        engine = create_engine(provider.conn_info["database_uri"])
        try:
            yield provider, engine
        finally:
            engine.dispose()


def _persisted_classes(domain: Domain, provider) -> list[type]:
    """Aggregates and entities (order lines included) stored by ``provider``."""
    records = [*domain.registry.aggregates.values(), *domain.registry.entities.values()]
    return [record.cls for record in records if record.cls.meta_.provider == provider.name]


def setup_db(domain: Domain) -> None:
    """Create the tables backing every stored aggregate and entity.

    Table models are built lazily by each repository's DAO, so the DAOs are
    resolved before ``create_all`` runs against the provider's metadata.
    """
    with domain.domain_context():
        for provider, engine in _sql_providers(domain):
            for element_cls in _persisted_classes(domain, provider):
                domain.repository_for(element_cls)._dao  # noqa: B018

            provider._metadata.create_all(engine)
            logger.info(
                "Database schema created",
                provider=provider.name,
                tables=sorted(provider._metadata.tables),
            )


def drop_db(domain: Domain) -> None:
    """Drop every table registered on the storefront's SQL providers."""
    with domain.domain_context():
        for provider, engine in _sql_providers(domain):
            provider._metadata.drop_all(engine)
            logger.info("Database schema dropped", provider=provider.name)
