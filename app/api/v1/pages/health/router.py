from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter, Depends

from app.api.v1.features.catalog.repository import CatalogPort
from app.api.v1.features.catalog.service import get_catalog
from app.core.config import settings
from app.core.logging import logger

router = APIRouter()


@router.get("/live")
async def liveness_check() -> Dict[str, Any]:
    """Liveness probe for container orchestration."""
    return {"status": "alive", "timestamp": datetime.now(timezone.utc)}


@router.get("/ready")
async def readiness_check(
    catalog: CatalogPort = Depends(get_catalog),
) -> Dict[str, Any]:
    """Readiness probe: the catalog must answer a product listing."""
    try:
        await catalog.list_products()
        catalog_status = "healthy"
    except Exception as e:
        logger.warning(f"Catalog not ready: {e}")
        catalog_status = "unhealthy"

    return {
        "status": "ready" if catalog_status == "healthy" else "degraded",
        "timestamp": datetime.now(timezone.utc),
        "services": {"catalog": catalog_status, "backend": settings.catalog_backend},
    }
