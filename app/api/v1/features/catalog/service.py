"""Catalog backend selection."""

from functools import lru_cache

from app.api.v1.features.catalog.client import RemoteCatalogClient
from app.api.v1.features.catalog.repository import (
    CatalogPort,
    DatabaseCatalog,
    StaticCatalog,
)
from app.core.config import settings
from app.core.logging import logger


def build_catalog(backend: str) -> CatalogPort:
    """Create the catalog collaborator for a configured backend name."""
    if backend == "fixture":
        return StaticCatalog.from_file(settings.catalog_fixture_path)
    if backend == "database":
        from app.api.v1.shared.db.session import SessionLocal

        return DatabaseCatalog(SessionLocal)
    if backend == "remote":
        return RemoteCatalogClient()
    raise ValueError(f"Unknown catalog backend: {backend}")


@lru_cache
def get_catalog() -> CatalogPort:
    """Dependency returning the process-wide catalog."""
    logger.info(f"Using '{settings.catalog_backend}' catalog backend")
    return build_catalog(settings.catalog_backend)
