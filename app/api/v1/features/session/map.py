"""Map collaborator seen from the ROI drawing protocol."""

import math
from typing import NamedTuple, Optional, Protocol, Tuple, runtime_checkable

from pydantic import BaseModel, Field

# MapLibre renders 512px world tiles
TILE_SIZE = 512
_MAX_MERCATOR_LAT = 85.05112878


class PixelRect(NamedTuple):
    """Axis-aligned rectangle in map container pixels (y grows downwards)."""

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @classmethod
    def spanning(cls, x1: float, y1: float, x2: float, y2: float) -> "PixelRect":
        return cls(min(x1, x2), min(y1, y2), max(x1, x2), max(y1, y2))

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y


@runtime_checkable
class MapPort(Protocol):
    """What the ROI protocol needs from a map: projection and input control."""

    def unproject(self, x: float, y: float) -> Tuple[float, float]: ...

    def set_drag_pan(self, enabled: bool) -> None: ...

    def show_drag_box(self, rect: Optional[PixelRect]) -> None: ...


class Viewport(BaseModel):
    """Visible map area in Web Mercator."""

    center_lon: float = Field(127.0, ge=-180, le=180)
    center_lat: float = Field(36.5, ge=-_MAX_MERCATOR_LAT, le=_MAX_MERCATOR_LAT)
    zoom: float = Field(7.0, ge=0, le=24)
    width: int = Field(1024, gt=0)
    height: int = Field(768, gt=0)


def lonlat_to_world(lon: float, lat: float, zoom: float) -> Tuple[float, float]:
    """Project lon/lat to Web Mercator world pixels at ``zoom``."""
    world = TILE_SIZE * 2**zoom
    lat = max(-_MAX_MERCATOR_LAT, min(_MAX_MERCATOR_LAT, lat))
    x = (lon + 180.0) / 360.0 * world
    y = (
        (180.0 - math.degrees(math.log(math.tan(math.pi / 4 + math.radians(lat) / 2))))
        / 360.0
        * world
    )
    return x, y


def world_to_lonlat(x: float, y: float, zoom: float) -> Tuple[float, float]:
    """Inverse of ``lonlat_to_world``."""
    world = TILE_SIZE * 2**zoom
    lon = x / world * 360.0 - 180.0
    y2 = 180.0 - y / world * 360.0
    lat = math.degrees(2 * math.atan(math.exp(math.radians(y2)))) - 90.0
    return lon, lat


class ViewportMap:
    """Headless map: Web Mercator projection plus recorded input state.

    Stands in for the browser map when pointer events are replayed on the
    server, and keeps the drag box / pan flags so clients can render them.
    """

    def __init__(self, viewport: Optional[Viewport] = None) -> None:
        self.viewport = viewport or Viewport()
        self.drag_pan_enabled = True
        self.drag_box: Optional[PixelRect] = None

    def set_viewport(self, viewport: Viewport) -> None:
        self.viewport = viewport

    def project(self, lon: float, lat: float) -> Tuple[float, float]:
        v = self.viewport
        cx, cy = lonlat_to_world(v.center_lon, v.center_lat, v.zoom)
        wx, wy = lonlat_to_world(lon, lat, v.zoom)
        return wx - cx + v.width / 2, wy - cy + v.height / 2

    def unproject(self, x: float, y: float) -> Tuple[float, float]:
        v = self.viewport
        cx, cy = lonlat_to_world(v.center_lon, v.center_lat, v.zoom)
        return world_to_lonlat(cx + x - v.width / 2, cy + y - v.height / 2, v.zoom)

    def set_drag_pan(self, enabled: bool) -> None:
        self.drag_pan_enabled = enabled

    def show_drag_box(self, rect: Optional[PixelRect]) -> None:
        self.drag_box = rect
