"""Router for catalog endpoints."""

from fastapi import APIRouter, Depends, Request

from app.api.v1.features.catalog.errors import (
    CatalogError,
    catalog_unavailable_error,
    products_error,
)
from app.api.v1.features.catalog.models import SearchResponse
from app.api.v1.features.catalog.repository import CatalogPort
from app.api.v1.features.catalog.schemas import ProductsResponse, parse_search_body
from app.api.v1.features.catalog.service import get_catalog
from app.core.logging import logger

router = APIRouter()


@router.get("/products", response_model=ProductsResponse)
async def list_products(
    catalog: CatalogPort = Depends(get_catalog),
) -> ProductsResponse:
    """List all products (data layers) in the catalog."""
    try:
        return ProductsResponse(products=await catalog.list_products())
    except CatalogError as e:
        raise catalog_unavailable_error(e.message)
    except Exception as e:
        logger.error(f"Failed to list products: {e}")
        raise products_error()


@router.post("/scenes-search", response_model=SearchResponse)
async def search_scenes(
    request: Request,
    catalog: CatalogPort = Depends(get_catalog),
) -> SearchResponse:
    """Search scenes by product, date range and region of interest.

    The body is read leniently: invalid JSON counts as an empty query,
    unusable filters are ignored, and page/limit fall back to 1/20.
    Results are sorted newest first.
    """
    try:
        body = await request.json()
    except ValueError:
        body = {}

    query = parse_search_body(body)
    try:
        return await catalog.search(query)
    except CatalogError as e:
        logger.error(f"Scene search failed: {e.message}")
        raise catalog_unavailable_error(e.message)
    except Exception as e:
        logger.error(f"Scene search failed: {e}")
        raise catalog_unavailable_error("Search failed")
