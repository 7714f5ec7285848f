"""Wire schemas for catalog endpoints."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from app.api.v1.features.catalog.engine import (
    clean_bbox,
    clean_date,
    normalize_limit,
    normalize_page,
)
from app.api.v1.features.catalog.models import Product, SearchQuery
from app.core.config import settings


class ProductsResponse(BaseModel):
    """Response model for the product list."""

    products: List[Product] = Field(default_factory=list)


def _clean_text(value: Any) -> Optional[str]:
    if isinstance(value, str) and value:
        return value
    return None


class SearchRequest(BaseModel):
    """Lenient search request.

    Every field is accepted as-is and cleaned in ``to_query``: unusable
    values are dropped and page/limit fall back to their defaults, so a
    malformed query degrades instead of failing.
    """

    product_id: Any = None
    date_start: Any = None
    date_end: Any = None
    roi_bbox: Any = None
    page: Any = None
    limit: Any = None

    @classmethod
    def from_body(cls, body: Any) -> "SearchRequest":
        if not isinstance(body, dict):
            return cls()
        return cls(**{k: v for k, v in body.items() if k in cls.model_fields})

    def to_query(self) -> SearchQuery:
        return SearchQuery(
            product_id=_clean_text(self.product_id),
            date_start=clean_date(self.date_start),
            date_end=clean_date(self.date_end),
            roi_bbox=clean_bbox(self.roi_bbox),
            page=normalize_page(
                settings.default_page if self.page is None else self.page
            ),
            limit=normalize_limit(
                settings.default_limit if self.limit is None else self.limit
            ),
        )


def parse_search_body(body: Optional[Dict[str, Any]]) -> SearchQuery:
    """Turn an arbitrary JSON body into a normalized query."""
    return SearchRequest.from_body(body).to_query()
