from app.api.v1.features.catalog.repository import DatabaseCatalog, load_catalog_file
from app.api.v1.shared.db.base import Base
from app.api.v1.shared.db.session import SessionLocal, engine
from app.core.config import settings


def init_db(seed: bool = True) -> int:
    """Create all tables and seed the catalog from the fixture when empty."""
    Base.metadata.create_all(bind=engine)
    if not seed:
        return 0
    catalog = load_catalog_file(settings.catalog_fixture_path)
    return DatabaseCatalog(SessionLocal).seed(catalog)


def drop_db():
    """Drop all tables."""
    Base.metadata.drop_all(bind=engine)
