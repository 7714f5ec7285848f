"""Drag-to-rectangle ROI drawing.

A two-state machine fed with raw pointer events from the map. It only
reacts while ROI edit mode is on, and only ever talks back through the
``on_roi`` callback (the controller's ``set_roi_bbox``).
"""

from enum import Enum
from typing import Callable, Optional, Tuple

from app.api.v1.features.catalog.models import BBox
from app.api.v1.features.session.map import MapPort, PixelRect
from app.core.config import settings
from app.core.logging import logger

PRIMARY_BUTTON = 0


class DragState(str, Enum):
    IDLE = "idle"
    DRAGGING = "dragging"


def round6(value: float) -> float:
    return round(value, 6)


class RoiDragProtocol:
    """Turns a press-drag-release gesture into an ROI bbox."""

    def __init__(
        self,
        map_port: MapPort,
        on_roi: Callable[[BBox], None],
        is_edit_mode: Callable[[], bool],
        min_drag_px: Optional[float] = None,
    ) -> None:
        self.map = map_port
        self.on_roi = on_roi
        self.is_edit_mode = is_edit_mode
        self.min_drag_px = (
            settings.roi_min_drag_px if min_drag_px is None else min_drag_px
        )
        self.state = DragState.IDLE
        self.drag_start: Optional[Tuple[float, float]] = None

    @property
    def drawing(self) -> bool:
        return self.state is DragState.DRAGGING

    def pointer_down(self, x: float, y: float, button: int = PRIMARY_BUTTON) -> bool:
        """Start a gesture. Returns True when the map must not handle the event."""
        if not self.is_edit_mode() or button != PRIMARY_BUTTON:
            return False
        if self.state is DragState.DRAGGING:
            return True

        self.drag_start = (x, y)
        self.state = DragState.DRAGGING
        self.map.show_drag_box(PixelRect(x, y, x, y))
        self.map.set_drag_pan(False)
        return True

    def pointer_move(self, x: float, y: float) -> Optional[PixelRect]:
        """Resize the visual drag box; no state change."""
        if self.state is not DragState.DRAGGING or self.drag_start is None:
            return None
        rect = PixelRect.spanning(*self.drag_start, x, y)
        self.map.show_drag_box(rect)
        return rect

    def pointer_up(self, x: float, y: float) -> Optional[BBox]:
        """Finish the gesture and emit the ROI unless it was a click or jitter."""
        if self.state is not DragState.DRAGGING:
            return None

        start = self.drag_start
        self._reset()
        if start is None:
            return None

        rect = PixelRect.spanning(*start, x, y)
        if rect.width < self.min_drag_px or rect.height < self.min_drag_px:
            logger.debug(f"Ignoring ROI drag below {self.min_drag_px}px: {rect}")
            return None

        # Screen y grows downwards: bottom-left is south-west
        sw_lon, sw_lat = self.map.unproject(rect.min_x, rect.max_y)
        ne_lon, ne_lat = self.map.unproject(rect.max_x, rect.min_y)
        bbox = (round6(sw_lon), round6(sw_lat), round6(ne_lon), round6(ne_lat))

        self.on_roi(bbox)
        return bbox

    def cancel(self) -> bool:
        """Abort an in-progress gesture without emitting. Returns True if one was live."""
        if self.state is not DragState.DRAGGING:
            return False
        self._reset()
        logger.debug("ROI drag cancelled")
        return True

    def _reset(self) -> None:
        self.state = DragState.IDLE
        self.drag_start = None
        self.map.show_drag_box(None)
        self.map.set_drag_pan(True)
