"""In-memory scene search.

The engine is a pure function over a ``Catalog``: filter, sort, paginate.
It trusts its input (``page >= 1``, ``1 <= limit``); callers normalize
wire values with ``normalize_page`` / ``normalize_limit`` first.
"""

import math
from datetime import date
from typing import Any, Iterable, List, Optional

from app.api.v1.features.catalog.models import (
    BBox,
    Catalog,
    Scene,
    SearchQuery,
    SearchResponse,
)
from app.core.config import settings


def intersects_bbox(a: BBox, b: BBox) -> bool:
    """Axis-aligned overlap test. Touching edges and corners intersect."""
    a_min_x, a_min_y, a_max_x, a_max_y = a
    b_min_x, b_min_y, b_max_x, b_max_y = b
    x_overlap = a_min_x <= b_max_x and a_max_x >= b_min_x
    y_overlap = a_min_y <= b_max_y and a_max_y >= b_min_y
    return x_overlap and y_overlap


def normalize_bbox(bbox: Iterable[float]) -> BBox:
    """Order corners so that min <= max on both axes."""
    x1, y1, x2, y2 = (float(v) for v in bbox)
    return (min(x1, x2), min(y1, y2), max(x1, x2), max(y1, y2))


def as_finite_number(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def clean_date(value: Any) -> Optional[str]:
    """``YYYY-MM-DD`` prefix of a date string, or None when unparseable."""
    if not isinstance(value, str) or len(value) < 10:
        return None
    try:
        return date.fromisoformat(value[:10]).isoformat()
    except ValueError:
        return None


def clean_bbox(value: Any) -> Optional[BBox]:
    """Four finite numbers as an ordered bbox, or None."""
    if not isinstance(value, (list, tuple)) or len(value) != 4:
        return None
    numbers = [as_finite_number(v) for v in value]
    if any(n is None for n in numbers):
        return None
    return normalize_bbox(numbers)


def normalize_page(value: Any) -> int:
    """Non-finite or < 1 pages fall back to the first page."""
    number = as_finite_number(value)
    if number is None or number < 1:
        return settings.default_page
    return int(number)


def normalize_limit(value: Any) -> int:
    """Non-finite, < 1 or oversized limits fall back to the default."""
    number = as_finite_number(value)
    if number is None or number < 1 or number > settings.max_limit:
        return settings.default_limit
    return int(number)


def total_pages(total: int, limit: int) -> int:
    return max(1, math.ceil(total / limit))


def _date_only(instant: str) -> str:
    return instant[:10]


def filter_scenes(scenes: Iterable[Scene], query: SearchQuery) -> List[Scene]:
    """Apply product, date and ROI filters in catalog order."""
    filtered = list(scenes)

    if query.product_id:
        filtered = [s for s in filtered if s.product_id == query.product_id]

    if query.date_start:
        filtered = [
            s for s in filtered if _date_only(s.datetime_end) >= query.date_start
        ]
    if query.date_end:
        filtered = [
            s for s in filtered if _date_only(s.datetime_start) <= query.date_end
        ]

    if query.roi_bbox:
        filtered = [s for s in filtered if intersects_bbox(s.bbox, query.roi_bbox)]

    return filtered


def search(catalog: Catalog, query: SearchQuery) -> SearchResponse:
    """Filter, sort newest first and paginate the catalog's scenes."""
    filtered = filter_scenes(catalog.scenes, query)

    # sorted() keeps equal keys in input order even with reverse=True
    ordered = sorted(filtered, key=lambda s: s.datetime_start, reverse=True)

    start = (query.page - 1) * query.limit
    items = ordered[start : start + query.limit]

    return SearchResponse(
        total=len(ordered), page=query.page, limit=query.limit, items=items
    )
