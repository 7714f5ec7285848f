"""Service layer tying a session's controller, map and ROI drawing together."""

from datetime import datetime, timezone
from typing import Optional

from app.api.v1.features.catalog.models import BBox
from app.api.v1.features.catalog.repository import CatalogPort
from app.api.v1.features.session.controller import SearchController, SessionState
from app.api.v1.features.session.geojson import (
    footprints_feature_collection,
    highlight_filter,
    preview_layer,
    roi_feature_collection,
)
from app.api.v1.features.session.map import Viewport, ViewportMap
from app.api.v1.features.session.roi import RoiDragProtocol
from app.api.v1.features.session.schemas import (
    MapPayload,
    PointerEvent,
    PointerEventType,
    RoiSource,
    SessionView,
)
from app.core.config import settings
from app.core.logging import session_logger


def should_auto_search(policy: str, source: RoiSource) -> bool:
    """Whether an ROI edit coming from ``source`` triggers a search."""
    if policy == "always":
        return True
    if policy == "never":
        return False
    return policy == source.value


class BrowserSession:
    """One user's scene browser: search state plus map interaction."""

    def __init__(
        self,
        session_id: str,
        catalog: CatalogPort,
        viewport: Optional[Viewport] = None,
        roi_auto_search: Optional[str] = None,
    ) -> None:
        self.session_id = session_id
        self.created_at = datetime.now(timezone.utc)
        self.roi_auto_search = roi_auto_search or settings.roi_auto_search
        self.log = session_logger(session_id)
        self.controller = SearchController(catalog, log=self.log)
        self.map = ViewportMap(viewport)
        self.roi = RoiDragProtocol(
            self.map,
            on_roi=self.controller.set_roi_bbox,
            is_edit_mode=lambda: self.controller.state.roi_edit_mode,
        )
        self.controller.subscribe(self._on_state)

    def _on_state(self, state: SessionState) -> None:
        # Leaving edit mode mid-gesture drops the gesture
        if not state.roi_edit_mode and self.roi.drawing:
            self.roi.cancel()

    @property
    def state(self) -> SessionState:
        return self.controller.state

    async def apply_roi(self, bbox: BBox, source: RoiSource) -> SessionState:
        """Set the ROI from a numeric edit and search if the policy says so."""
        self.controller.set_roi_bbox(bbox)
        if should_auto_search(self.roi_auto_search, source):
            return await self.controller.run_search()
        return self.state

    async def handle_pointer(self, event: PointerEvent) -> Optional[BBox]:
        """Feed one map event into the ROI protocol or the selection state.

        Returns the ROI emitted by a completed drag, if any.
        """
        if event.type is PointerEventType.DOWN:
            self.roi.pointer_down(event.x, event.y, event.button)
        elif event.type is PointerEventType.MOVE:
            self.roi.pointer_move(event.x, event.y)
        elif event.type is PointerEventType.UP:
            bbox = self.roi.pointer_up(event.x, event.y)
            if bbox is not None:
                self.log.info(f"ROI drawn {bbox}")
                if should_auto_search(self.roi_auto_search, RoiSource.DRAG):
                    await self.controller.run_search()
            return bbox
        elif event.type is PointerEventType.FEATURE_CLICK:
            # Footprint clicks are part of the map's own click handling,
            # which is off while drawing an ROI
            if event.scene_uid and not self.state.roi_edit_mode:
                self.controller.select(event.scene_uid)
        elif event.type is PointerEventType.FEATURE_HOVER:
            self.controller.hover(event.scene_uid)
        elif event.type is PointerEventType.FEATURE_LEAVE:
            self.controller.hover(None)
        return None

    def set_viewport(self, viewport: Viewport) -> None:
        self.map.set_viewport(viewport)

    def view(self) -> SessionView:
        state = self.state
        return SessionView(
            session_id=self.session_id,
            query=state.query,
            result=state.result,
            selected_uid=state.selected_uid,
            selected_scene=state.selected_scene,
            hovered_uid=state.hovered_uid,
            roi_edit_mode=state.roi_edit_mode,
            drawing=self.roi.drawing,
            loading=state.loading,
            error=state.error,
            products=state.products,
            opacity=state.opacity,
            total_pages=state.total_pages,
            has_prev=state.result.page > 1,
            has_next=state.result.page < state.total_pages,
        )

    def map_payload(self) -> MapPayload:
        state = self.state
        box = self.map.drag_box
        return MapPayload(
            roi=roi_feature_collection(state.query.roi_bbox),
            footprints=footprints_feature_collection(state.result.items),
            selected_filter=highlight_filter(state.selected_uid),
            hover_filter=highlight_filter(state.hovered_uid),
            preview=preview_layer(state.selected_scene, state.opacity),
            viewport=self.map.viewport,
            drag_pan_enabled=self.map.drag_pan_enabled,
            drag_box=list(box) if box is not None else None,
            cursor="crosshair" if state.roi_edit_mode else "",
        )
