from typing import List

import httpx
from fastapi.testclient import TestClient

from app.api.v1.features.catalog.client import RemoteCatalogClient
from app.api.v1.features.catalog.errors import CatalogError
from app.api.v1.features.catalog.models import Product, SearchQuery, SearchResponse
from app.api.v1.features.catalog.service import get_catalog
from app.main import app


class BrokenCatalog:
    async def list_products(self) -> List[Product]:
        raise CatalogError("Catalog database unavailable")

    async def search(self, query: SearchQuery) -> SearchResponse:
        raise RuntimeError("index offline")


class TestCatalogEndpoints:
    """Test cases for /catalog endpoints."""

    def test_list_products(self, client: TestClient):
        """Products are returned with their wire type field."""
        response = client.get("/api/v1/catalog/products")

        assert response.status_code == 200
        products = response.json()["products"]
        assert [p["product_id"] for p in products] == [
            "ndvi",
            "landcover",
            "sar-backscatter",
        ]
        assert products[0]["type"] == "continuous"
        assert products[2]["legend_url"] is None

    def test_search_defaults(self, client: TestClient, scene_uids):
        response = client.post("/api/v1/catalog/scenes-search", json={})

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 8
        assert data["page"] == 1
        assert data["limit"] == 20
        assert scene_uids(data["items"])[:3] == [
            "ndvi-20240110-seoul",
            "sar-20240108-asc-a",
            "sar-20240108-asc-b",
        ]

    def test_search_with_roi_and_paging(self, client: TestClient, scene_uids):
        response = client.post(
            "/api/v1/catalog/scenes-search",
            json={"roi_bbox": [126.5, 36.0, 127.5, 37.0], "page": 2, "limit": 4},
        )

        data = response.json()
        assert data["total"] == 6
        assert scene_uids(data["items"]) == ["lc-2023-central", "lc-2022-central"]

    def test_invalid_paging_is_normalized(self, client: TestClient):
        """Bad page/limit never fail the request."""
        response = client.post(
            "/api/v1/catalog/scenes-search", json={"page": -1, "limit": 9999}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["page"] == 1
        assert data["limit"] == 20

    def test_out_of_range_page(self, client: TestClient):
        response = client.post(
            "/api/v1/catalog/scenes-search", json={"page": 5, "limit": 20}
        )

        data = response.json()
        assert data["total"] == 8
        assert data["items"] == []

    def test_invalid_json_is_empty_query(self, client: TestClient):
        response = client.post(
            "/api/v1/catalog/scenes-search",
            content="not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 200
        assert response.json()["total"] == 8

    def test_scene_payload_shape(self, client: TestClient):
        response = client.post(
            "/api/v1/catalog/scenes-search", json={"product_id": "ndvi", "limit": 1}
        )

        scene = response.json()["items"][0]
        assert scene["scene_uid"] == "ndvi-20240110-seoul"
        assert scene["bbox"] == [126.76, 37.41, 127.18, 37.7]
        assert scene["sensors"] == ["Sentinel-2A", "MSI"]
        assert scene["assets"]["preview_tiles"].endswith("{z}/{x}/{y}.png")
        assert scene["footprint"] is None

    def test_catalog_failures_are_bad_gateway(self, client: TestClient):
        app.dependency_overrides[get_catalog] = lambda: BrokenCatalog()

        products = client.get("/api/v1/catalog/products")
        search = client.post("/api/v1/catalog/scenes-search", json={})

        assert products.status_code == 502
        assert products.json()["detail"] == "Catalog database unavailable"
        assert search.status_code == 502
        assert search.json()["detail"] == "Search failed"

    def test_remote_garbage_is_bad_gateway(self, client: TestClient):
        transport = httpx.MockTransport(lambda request: httpx.Response(200, text="oops"))
        remote = RemoteCatalogClient(
            api_url="http://catalog.test", client=httpx.AsyncClient(transport=transport)
        )
        app.dependency_overrides[get_catalog] = lambda: remote

        response = client.get("/api/v1/catalog/products")

        assert response.status_code == 502
        assert response.json()["detail"] == (
            "GET http://catalog.test/products returned invalid JSON"
        )
