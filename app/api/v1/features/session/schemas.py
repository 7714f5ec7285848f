"""Schemas for browsing session endpoints."""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from app.api.v1.features.catalog.models import (
    BBox,
    Product,
    Scene,
    SearchQuery,
    SearchResponse,
)
from app.api.v1.features.session.map import Viewport


class RoiSource(str, Enum):
    """Where an ROI edit came from."""

    MANUAL = "manual"
    DRAG = "drag"


class PointerEventType(str, Enum):
    DOWN = "down"
    MOVE = "move"
    UP = "up"
    FEATURE_CLICK = "feature-click"
    FEATURE_HOVER = "feature-hover"
    FEATURE_LEAVE = "feature-leave"


class PointerEvent(BaseModel):
    """Raw map input: pixel pointer events and footprint hit events."""

    type: PointerEventType
    x: float = 0.0
    y: float = 0.0
    button: int = Field(0, description="0 = primary button")
    scene_uid: Optional[str] = None


class FilterPatch(BaseModel):
    """Partial filter update; only fields that are sent are applied.

    Dates, ROI and limit are taken as-is and cleaned by the controller,
    so malformed values degrade instead of failing the request.
    """

    product_id: Optional[str] = None
    date_start: Any = Field(None, description="YYYY-MM-DD")
    date_end: Any = Field(None, description="YYYY-MM-DD")
    roi_bbox: Any = Field(None, description="[min_lon, min_lat, max_lon, max_lat]")
    limit: Any = None


class PageRequest(BaseModel):
    """Requested page; anything below 1 or non-numeric means page 1."""

    page: Any = None


class SelectRequest(BaseModel):
    scene_uid: Optional[str] = None


class RoiRequest(BaseModel):
    """Manual ROI edit; must be four finite numbers."""

    roi_bbox: Any = Field(..., description="[min_lon, min_lat, max_lon, max_lat]")
    source: RoiSource = RoiSource.MANUAL


class EditModeRequest(BaseModel):
    """Set ROI edit mode, or toggle it when ``enabled`` is omitted."""

    enabled: Optional[bool] = None


class OpacityRequest(BaseModel):
    opacity: float = Field(..., ge=0, le=1)


class SessionView(BaseModel):
    """Read-only session snapshot returned to clients."""

    session_id: str
    query: SearchQuery
    result: SearchResponse
    selected_uid: Optional[str] = None
    selected_scene: Optional[Scene] = None
    hovered_uid: Optional[str] = None
    roi_edit_mode: bool = False
    drawing: bool = False
    loading: bool = False
    error: Optional[str] = None
    products: List[Product] = Field(default_factory=list)
    opacity: float = 0.7
    total_pages: int = 1
    has_prev: bool = False
    has_next: bool = False


class PointerResponse(BaseModel):
    """Session view after a pointer event, plus the ROI a drag produced."""

    roi_bbox: Optional[BBox] = None
    session: SessionView


class MapPayload(BaseModel):
    """Everything a map renderer needs to draw the session."""

    roi: Dict[str, Any]
    footprints: Dict[str, Any]
    selected_filter: List[Any]
    hover_filter: List[Any]
    preview: Optional[Dict[str, Any]] = None
    viewport: Viewport
    drag_pan_enabled: bool = True
    drag_box: Optional[List[float]] = None
    cursor: str = ""
