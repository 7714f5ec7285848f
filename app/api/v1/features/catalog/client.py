"""HTTP client for a remote scene catalog."""

from typing import Any, Dict, List, Optional

import httpx
from httpx import AsyncClient

from app.api.v1.features.catalog.errors import CatalogError
from app.api.v1.features.catalog.models import Product, SearchQuery, SearchResponse
from app.core.config import settings
from app.core.logging import logger


class RemoteCatalogClient:
    """Client for a catalog service exposing ``/products`` and ``/scenes-search``.

    The remote side must apply the same filter, sort and pagination rules as
    the local engine; this client only moves queries and results over HTTP.
    """

    def __init__(
        self,
        api_url: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Optional[AsyncClient] = None,
    ):
        """Initialize catalog client.

        Args:
            api_url: Base URL of the catalog API (defaults to settings.catalog_url)
            timeout: Request timeout in seconds
            client: Pre-built httpx client, mostly for tests
        """
        self.api_url = (api_url or settings.catalog_url).rstrip("/")
        self.client = client or AsyncClient(
            timeout=timeout or settings.catalog_timeout
        )

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.aclose()

    async def aclose(self) -> None:
        await self.client.aclose()

    @staticmethod
    def _decode(method: str, url: str, response: httpx.Response) -> Dict[str, Any]:
        try:
            data = response.json()
        except ValueError as e:
            logger.error(f"{method} {url} returned invalid JSON: {e}")
            raise CatalogError(f"{method} {url} returned invalid JSON") from e
        if not isinstance(data, dict):
            raise CatalogError(f"{method} {url} returned an unexpected payload")
        return data

    async def _get(self, url: str) -> Dict[str, Any]:
        try:
            response = await self.client.get(url, headers={"Cache-Control": "no-store"})
        except httpx.HTTPError as e:
            logger.error(f"GET {url} failed: {e}")
            raise CatalogError(f"GET {url} failed: {e}") from e
        if response.is_error:
            raise CatalogError(f"GET {url} failed: {response.status_code}")
        return self._decode("GET", url, response)

    async def _post(self, url: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        try:
            response = await self.client.post(
                url,
                json=payload,
                headers={"Content-Type": "application/json", "Cache-Control": "no-store"},
            )
        except httpx.HTTPError as e:
            logger.error(f"POST {url} failed: {e}")
            raise CatalogError(f"POST {url} failed: {e}") from e
        if response.is_error:
            raise CatalogError(f"POST {url} failed: {response.status_code}")
        return self._decode("POST", url, response)

    async def list_products(self) -> List[Product]:
        """List all products the catalog offers."""
        data = await self._get(f"{self.api_url}/products")
        try:
            return [Product(**p) for p in data.get("products", [])]
        except (TypeError, ValueError) as e:
            logger.error(f"Malformed products payload: {e}")
            raise CatalogError("Malformed products response") from e

    async def search(self, query: SearchQuery) -> SearchResponse:
        """Run one search page on the remote catalog."""
        payload = query.model_dump(mode="json", exclude_none=True)
        data = await self._post(f"{self.api_url}/scenes-search", payload)
        try:
            return SearchResponse(**data)
        except (TypeError, ValueError) as e:
            logger.error(f"Malformed search payload: {e}")
            raise CatalogError("Malformed search response") from e
