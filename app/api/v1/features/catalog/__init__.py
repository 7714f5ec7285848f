"""Scene catalog: data model, search engine and catalog backends."""

from app.api.v1.features.catalog.engine import intersects_bbox, search
from app.api.v1.features.catalog.errors import CatalogError
from app.api.v1.features.catalog.models import (
    Catalog,
    Product,
    Scene,
    SearchQuery,
    SearchResponse,
)
from app.api.v1.features.catalog.repository import CatalogPort, StaticCatalog

__all__ = [
    "Catalog",
    "CatalogError",
    "CatalogPort",
    "Product",
    "Scene",
    "SearchQuery",
    "SearchResponse",
    "StaticCatalog",
    "intersects_bbox",
    "search",
]
