from datetime import datetime
from typing import List

from fastapi.testclient import TestClient

from app.api.v1.features.catalog.errors import CatalogError
from app.api.v1.features.catalog.models import Product
from app.api.v1.features.catalog.service import get_catalog
from app.main import app


class UnreachableCatalog:
    async def list_products(self) -> List[Product]:
        raise CatalogError("GET /products failed: 503")


class TestHealthEndpoints:
    """Test cases for health check endpoints."""

    def test_liveness_check(self, client: TestClient):
        """Test the liveness probe endpoint."""
        response = client.get("/api/v1/health/live")

        assert response.status_code == 200
        data = response.json()

        assert "status" in data
        assert data["status"] == "alive"
        assert "timestamp" in data

        # Verify timestamp is a valid ISO format
        timestamp = datetime.fromisoformat(data["timestamp"].replace("Z", "+00:00"))
        assert isinstance(timestamp, datetime)

    def test_readiness_check(self, client: TestClient):
        """Test the readiness probe endpoint."""
        response = client.get("/api/v1/health/ready")

        assert response.status_code == 200
        data = response.json()

        assert data["status"] == "ready"
        assert "timestamp" in data

        # Verify services structure
        services = data["services"]
        assert services["catalog"] == "healthy"
        assert services["backend"] == "fixture"

    def test_readiness_with_unreachable_catalog(self, client: TestClient):
        """Readiness degrades instead of failing when the catalog is down."""
        app.dependency_overrides[get_catalog] = lambda: UnreachableCatalog()

        response = client.get("/api/v1/health/ready")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "degraded"
        assert data["services"]["catalog"] == "unhealthy"

    def test_health_endpoints_content_type(self, client: TestClient):
        """Test that health endpoints return JSON content type."""
        live_response = client.get("/api/v1/health/live")
        ready_response = client.get("/api/v1/health/ready")

        assert live_response.headers["content-type"] == "application/json"
        assert ready_response.headers["content-type"] == "application/json"
