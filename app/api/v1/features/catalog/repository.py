"""Local catalog stores: a JSON fixture and a SQL database."""

import json
from pathlib import Path
from typing import List, Optional, Protocol, runtime_checkable

from sqlalchemy.orm import Session, sessionmaker

from app.api.v1.features.catalog.engine import search
from app.api.v1.features.catalog.errors import CatalogError
from app.api.v1.features.catalog.models import (
    Catalog,
    Product,
    Scene,
    SearchQuery,
    SearchResponse,
)
from app.api.v1.shared.db.models import ProductRecord, SceneRecord
from app.core.logging import logger


@runtime_checkable
class CatalogPort(Protocol):
    """Read-only catalog the session controller talks to."""

    async def list_products(self) -> List[Product]: ...

    async def search(self, query: SearchQuery) -> SearchResponse: ...


def load_catalog_file(path: str) -> Catalog:
    """Load a ``{"products": [...], "scenes": [...]}`` JSON document."""
    file_path = Path(path)
    if not file_path.exists():
        raise CatalogError(f"Catalog fixture not found: {path}")

    try:
        data = json.loads(file_path.read_text(encoding="utf-8"))
        return Catalog(**data)
    except ValueError as e:
        logger.error(f"Invalid catalog fixture {path}: {e}")
        raise CatalogError(f"Invalid catalog fixture: {path}") from e


class StaticCatalog:
    """Catalog held in memory, loaded once."""

    def __init__(self, catalog: Catalog) -> None:
        self.catalog = catalog

    @classmethod
    def from_file(cls, path: str) -> "StaticCatalog":
        catalog = load_catalog_file(path)
        logger.info(
            f"Loaded catalog fixture {path}: "
            f"{len(catalog.products)} products, {len(catalog.scenes)} scenes"
        )
        return cls(catalog)

    async def list_products(self) -> List[Product]:
        return list(self.catalog.products)

    async def search(self, query: SearchQuery) -> SearchResponse:
        return search(self.catalog, query)


def product_to_record(product: Product, position: int) -> ProductRecord:
    return ProductRecord(
        product_id=product.product_id,
        position=position,
        name=product.name,
        legend_url=product.legend_url,
        kind=product.kind.value,
    )


def scene_to_record(scene: Scene, position: int) -> SceneRecord:
    return SceneRecord(
        scene_uid=scene.scene_uid,
        position=position,
        product_id=scene.product_id,
        title=scene.title,
        datetime_start=scene.datetime_start,
        datetime_end=scene.datetime_end,
        sensors=list(scene.sensors),
        resolution_m=scene.resolution_m,
        bbox=list(scene.bbox),
        footprint=scene.footprint.model_dump() if scene.footprint else None,
        assets=scene.assets.model_dump(),
    )


def record_to_product(record: ProductRecord) -> Product:
    return Product(
        product_id=record.product_id,
        name=record.name,
        legend_url=record.legend_url,
        kind=record.kind,
    )


def record_to_scene(record: SceneRecord) -> Scene:
    return Scene(
        scene_uid=record.scene_uid,
        product_id=record.product_id,
        title=record.title,
        datetime_start=record.datetime_start,
        datetime_end=record.datetime_end,
        sensors=record.sensors or [],
        resolution_m=record.resolution_m,
        bbox=tuple(record.bbox),
        footprint=record.footprint,
        assets=record.assets,
    )


class DatabaseCatalog:
    """Catalog backed by the product/scene tables.

    Rows are read in insertion order (``position``) so listings and the
    engine's stable sort see the same catalog order as the seed document.
    """

    def __init__(self, session_factory: sessionmaker) -> None:
        self.session_factory = session_factory

    def load(self, db: Optional[Session] = None) -> Catalog:
        own_session = db is None
        db = db or self.session_factory()
        try:
            products = [
                record_to_product(r)
                for r in db.query(ProductRecord).order_by(ProductRecord.position)
            ]
            scenes = [
                record_to_scene(r)
                for r in db.query(SceneRecord).order_by(SceneRecord.position)
            ]
            return Catalog(products=products, scenes=scenes)
        except Exception as e:
            logger.error(f"Failed to read catalog tables: {e}")
            raise CatalogError("Catalog database unavailable") from e
        finally:
            if own_session:
                db.close()

    def seed(self, catalog: Catalog) -> int:
        """Insert products and scenes when the tables are empty."""
        db = self.session_factory()
        try:
            if db.query(SceneRecord).count() or db.query(ProductRecord).count():
                return 0
            db.add_all(
                product_to_record(p, position)
                for position, p in enumerate(catalog.products)
            )
            db.add_all(
                scene_to_record(s, position) for position, s in enumerate(catalog.scenes)
            )
            db.commit()
            logger.info(f"Seeded catalog database with {len(catalog.scenes)} scenes")
            return len(catalog.scenes)
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    async def list_products(self) -> List[Product]:
        return list(self.load().products)

    async def search(self, query: SearchQuery) -> SearchResponse:
        return search(self.load(), query)
