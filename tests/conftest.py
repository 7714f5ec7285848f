from typing import Any, Callable, Dict, Generator, List

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

# Test database (SQLite in memory for fast tests)
# Use StaticPool to ensure all operations use the same connection
from sqlalchemy.pool import StaticPool

from app.api.v1.features.catalog.models import Catalog, Scene
from app.api.v1.features.catalog.repository import StaticCatalog, load_catalog_file
from app.api.v1.features.catalog.service import get_catalog
from app.api.v1.features.session.manager import SessionManager, get_session_manager
from app.api.v1.shared.db.base import Base
from app.core.config import settings
from app.main import app

TEST_DATABASE_URL = "sqlite:///:memory:"
test_engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
    pool_pre_ping=False,
)
TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


@pytest.fixture(scope="function")
def db_session() -> Generator[Session, None, None]:
    """Create a test database session."""
    # Create all tables
    Base.metadata.create_all(bind=test_engine)

    # Create session
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()
        # Drop all tables after test
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def session_factory() -> sessionmaker:
    """Session factory bound to the in-memory test database."""
    return TestSessionLocal


@pytest.fixture
def make_scene() -> Callable[..., Scene]:
    """Build a scene with sensible defaults; override any field by keyword."""

    def _make_scene(scene_uid: str, **overrides: Any) -> Scene:
        start = overrides.pop("datetime_start", "2024-01-01T00:00:00Z")
        data: Dict[str, Any] = {
            "scene_uid": scene_uid,
            "product_id": "ndvi",
            "title": f"Scene {scene_uid}",
            "datetime_start": start,
            "datetime_end": start,
            "sensors": ["Sentinel-2A"],
            "bbox": (127.0, 36.0, 127.2, 36.2),
            "assets": {"preview_tiles": f"/tiles/{scene_uid}/{{z}}/{{x}}/{{y}}.png"},
        }
        data.update(overrides)
        return Scene(**data)

    return _make_scene


@pytest.fixture
def fixture_catalog() -> Catalog:
    """The catalog shipped in app/data."""
    return load_catalog_file(settings.catalog_fixture_path)


@pytest.fixture
def static_catalog(fixture_catalog: Catalog) -> StaticCatalog:
    return StaticCatalog(fixture_catalog)


@pytest.fixture
def session_manager() -> SessionManager:
    return SessionManager()


@pytest.fixture
def client(
    static_catalog: StaticCatalog, session_manager: SessionManager
) -> Generator[TestClient, None, None]:
    """Create a test client backed by the fixture catalog and fresh sessions."""
    app.dependency_overrides[get_catalog] = lambda: static_catalog
    app.dependency_overrides[get_session_manager] = lambda: session_manager

    yield TestClient(app)

    # Clean up
    app.dependency_overrides.clear()


@pytest.fixture
def session_id(client: TestClient) -> str:
    """A browsing session that has run its initial search."""
    response = client.post("/api/v1/sessions")
    assert response.status_code == 201
    return response.json()["session_id"]


@pytest.fixture
def scene_uids() -> Callable[[List[Dict[str, Any]]], List[str]]:
    def _scene_uids(items: List[Dict[str, Any]]) -> List[str]:
        return [item["scene_uid"] for item in items]

    return _scene_uids


@pytest.fixture
def auth_headers() -> Callable[[str], Dict[str, str]]:
    """Get authentication headers for protected endpoints."""

    def _get_auth_headers(access_token: str) -> Dict[str, str]:
        return {"Authorization": f"Bearer {access_token}"}

    return _get_auth_headers
