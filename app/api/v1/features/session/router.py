"""Router for browsing session endpoints."""

from typing import Optional

from fastapi import APIRouter, Body, Depends, status

from app.api.v1.features.catalog.repository import CatalogPort
from app.api.v1.features.catalog.service import get_catalog
from app.api.v1.features.session.errors import (
    invalid_filters_error,
    invalid_roi_error,
    session_not_found_error,
)
from app.api.v1.features.session.manager import SessionManager, get_session_manager
from app.api.v1.features.session.map import Viewport
from app.api.v1.features.session.schemas import (
    EditModeRequest,
    FilterPatch,
    MapPayload,
    OpacityRequest,
    PageRequest,
    PointerEvent,
    PointerResponse,
    RoiRequest,
    SelectRequest,
    SessionView,
)
from app.api.v1.features.session.service import BrowserSession

router = APIRouter()


def get_browser_session(
    session_id: str,
    manager: SessionManager = Depends(get_session_manager),
) -> BrowserSession:
    session = manager.get_session(session_id)
    if session is None:
        raise session_not_found_error(session_id)
    return session


@router.post("", response_model=SessionView, status_code=status.HTTP_201_CREATED)
async def create_session(
    viewport: Optional[Viewport] = Body(None, embed=True),
    catalog: CatalogPort = Depends(get_catalog),
    manager: SessionManager = Depends(get_session_manager),
) -> SessionView:
    """Open a browsing session.

    Loads the product list and runs the first search over the default ROI.
    A catalog failure is reported in ``error`` rather than failing the call.
    """
    session = await manager.create_session(catalog, viewport=viewport)
    return session.view()


@router.get("/{session_id}", response_model=SessionView)
async def get_session(
    session: BrowserSession = Depends(get_browser_session),
) -> SessionView:
    return session.view()


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_session(
    session_id: str,
    manager: SessionManager = Depends(get_session_manager),
) -> None:
    if not manager.delete_session(session_id):
        raise session_not_found_error(session_id)


@router.patch("/{session_id}/filters", response_model=SessionView)
async def set_filters(
    patch: FilterPatch,
    session: BrowserSession = Depends(get_browser_session),
) -> SessionView:
    """Update product/date/ROI filters. Resets to page 1 without searching."""
    try:
        session.controller.set_filters(patch.model_dump(exclude_unset=True))
    except ValueError as e:
        raise invalid_filters_error(str(e))
    return session.view()


@router.post("/{session_id}/search", response_model=SessionView)
async def run_search(
    session: BrowserSession = Depends(get_browser_session),
) -> SessionView:
    """Search from page 1 with the current filters."""
    await session.controller.run_search()
    return session.view()


@router.post("/{session_id}/page", response_model=SessionView)
async def change_page(
    request: PageRequest,
    session: BrowserSession = Depends(get_browser_session),
) -> SessionView:
    await session.controller.change_page(request.page)
    return session.view()


@router.post("/{session_id}/select", response_model=SessionView)
async def select_scene(
    request: SelectRequest,
    session: BrowserSession = Depends(get_browser_session),
) -> SessionView:
    session.controller.select(request.scene_uid)
    return session.view()


@router.post("/{session_id}/hover", response_model=SessionView)
async def hover_scene(
    request: SelectRequest,
    session: BrowserSession = Depends(get_browser_session),
) -> SessionView:
    session.controller.hover(request.scene_uid)
    return session.view()


@router.post("/{session_id}/roi/edit-mode", response_model=SessionView)
async def set_roi_edit_mode(
    request: EditModeRequest,
    session: BrowserSession = Depends(get_browser_session),
) -> SessionView:
    """Turn ROI drawing on or off; toggles when ``enabled`` is omitted."""
    if request.enabled is None:
        session.controller.toggle_roi_edit_mode()
    else:
        session.controller.set_roi_edit_mode(request.enabled)
    return session.view()


@router.put("/{session_id}/roi", response_model=SessionView)
async def set_roi(
    request: RoiRequest,
    session: BrowserSession = Depends(get_browser_session),
) -> SessionView:
    try:
        await session.apply_roi(request.roi_bbox, request.source)
    except ValueError as e:
        raise invalid_roi_error(str(e))
    return session.view()


@router.post("/{session_id}/roi/reset", response_model=SessionView)
async def reset_roi(
    session: BrowserSession = Depends(get_browser_session),
) -> SessionView:
    session.controller.reset_roi()
    return session.view()


@router.put("/{session_id}/viewport", response_model=MapPayload)
async def set_viewport(
    viewport: Viewport,
    session: BrowserSession = Depends(get_browser_session),
) -> MapPayload:
    session.set_viewport(viewport)
    return session.map_payload()


@router.post("/{session_id}/pointer", response_model=PointerResponse)
async def pointer_event(
    event: PointerEvent,
    session: BrowserSession = Depends(get_browser_session),
) -> PointerResponse:
    """Replay one map input event (pointer down/move/up or footprint hit)."""
    bbox = await session.handle_pointer(event)
    return PointerResponse(roi_bbox=bbox, session=session.view())


@router.put("/{session_id}/opacity", response_model=SessionView)
async def set_opacity(
    request: OpacityRequest,
    session: BrowserSession = Depends(get_browser_session),
) -> SessionView:
    session.controller.set_opacity(request.opacity)
    return session.view()


@router.get("/{session_id}/map", response_model=MapPayload)
async def get_map(
    session: BrowserSession = Depends(get_browser_session),
) -> MapPayload:
    """GeoJSON sources and highlight filters for the map renderer."""
    return session.map_payload()
