"""Search and selection state for one browsing session.

``SearchController`` is the only writer of a session's state. Every
transition builds a new frozen ``SessionState`` and swaps it in whole,
then hands the new snapshot to subscribers, so readers never see a half
applied update.

Searches are the only suspension points. Each ``run_search`` /
``change_page`` call takes a ticket from a monotonically increasing
counter; when the catalog answers, the result is committed only if no
newer request has been issued since. Older completions (results and
failures alike) are dropped.
"""

from itertools import count
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Mapping, Optional

from pydantic import BaseModel, Field

from app.api.v1.features.catalog.engine import (
    clean_bbox,
    clean_date,
    normalize_bbox,
    normalize_limit,
    normalize_page,
    total_pages,
)
from app.api.v1.features.catalog.errors import CatalogError
from app.api.v1.features.catalog.models import (
    BBox,
    Product,
    Scene,
    SearchQuery,
    SearchResponse,
)
from app.api.v1.features.catalog.repository import CatalogPort
from app.core.config import settings
from app.core.logging import logger

if TYPE_CHECKING:
    from loguru import Logger

FILTER_FIELDS = ("product_id", "date_start", "date_end", "roi_bbox", "limit")

Subscriber = Callable[["SessionState"], None]


class SessionState(BaseModel):
    """Immutable snapshot of a session."""

    query: SearchQuery
    result: SearchResponse = Field(default_factory=SearchResponse)
    selected_uid: Optional[str] = None
    hovered_uid: Optional[str] = None
    roi_edit_mode: bool = False
    loading: bool = False
    error: Optional[str] = None
    products: List[Product] = Field(default_factory=list)
    opacity: float = Field(0.7, ge=0, le=1)

    class Config:
        frozen = True

    @property
    def selected_scene(self) -> Optional[Scene]:
        """The selected scene if it is on the current page."""
        return self.find_scene(self.selected_uid)

    @property
    def hovered_scene(self) -> Optional[Scene]:
        return self.find_scene(self.hovered_uid)

    @property
    def total_pages(self) -> int:
        return total_pages(self.result.total, self.result.limit)

    def find_scene(self, scene_uid: Optional[str]) -> Optional[Scene]:
        if not scene_uid:
            return None
        for scene in self.result.items:
            if scene.scene_uid == scene_uid:
                return scene
        return None


def default_query() -> SearchQuery:
    return SearchQuery(
        roi_bbox=normalize_bbox(settings.default_roi_bbox),
        page=settings.default_page,
        limit=settings.default_limit,
    )


class SearchController:
    """Owns and mutates one session's ``SessionState``."""

    def __init__(
        self,
        catalog: CatalogPort,
        query: Optional[SearchQuery] = None,
        log: Optional["Logger"] = None,
    ) -> None:
        self.catalog = catalog
        self.log = log or logger
        self._state = SessionState(query=query or default_query())
        self._subscribers: List[Subscriber] = []
        self._tickets = count(1)
        self._latest_ticket = 0

    @property
    def state(self) -> SessionState:
        return self._state

    def snapshot(self) -> SessionState:
        return self._state

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register a view; returns a function that unsubscribes it."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _commit(self, **changes: Any) -> SessionState:
        self._state = self._state.model_copy(update=changes)
        for callback in list(self._subscribers):
            callback(self._state)
        return self._state

    # Filters and ROI

    def set_filters(self, patch: Mapping[str, Any]) -> SessionState:
        """Merge filter fields into the query and go back to page 1.

        Does not search; call ``run_search`` for that. A field given as
        ``None`` is cleared. Values are cleaned the way the catalog cleans
        wire queries: unparseable dates and ROIs are dropped and a bad
        limit falls back to the default.
        """
        unknown = set(patch) - set(FILTER_FIELDS)
        if unknown:
            raise ValueError(f"Unknown filter fields: {sorted(unknown)}")

        values: Dict[str, Any] = self._state.query.model_dump()
        values.update(patch)
        values["product_id"] = values.get("product_id") or None
        values["date_start"] = clean_date(values.get("date_start"))
        values["date_end"] = clean_date(values.get("date_end"))
        values["roi_bbox"] = clean_bbox(values.get("roi_bbox"))
        values["limit"] = normalize_limit(values.get("limit"))
        values["page"] = 1
        return self._commit(query=SearchQuery(**values))

    def set_roi_bbox(self, bbox: BBox) -> SessionState:
        """Replace the ROI wholesale and go back to page 1."""
        roi = clean_bbox(bbox)
        if roi is None:
            raise ValueError("roi_bbox must be four finite numbers")
        return self._commit(
            query=self._state.query.model_copy(update={"roi_bbox": roi, "page": 1})
        )

    def reset_roi(self) -> SessionState:
        return self.set_roi_bbox(tuple(settings.default_roi_bbox))

    def set_roi_edit_mode(self, enabled: bool) -> SessionState:
        return self._commit(roi_edit_mode=bool(enabled))

    def toggle_roi_edit_mode(self) -> SessionState:
        return self.set_roi_edit_mode(not self._state.roi_edit_mode)

    # Selection

    def select(self, scene_uid: Optional[str]) -> SessionState:
        return self._commit(selected_uid=scene_uid)

    def hover(self, scene_uid: Optional[str] = None) -> SessionState:
        return self._commit(hovered_uid=scene_uid)

    def set_opacity(self, opacity: float) -> SessionState:
        return self._commit(opacity=min(1.0, max(0.0, float(opacity))))

    # Fetching

    async def initialize(self) -> SessionState:
        """Load products and run the first search with the starting query."""
        self._commit(error=None)
        try:
            products = await self.catalog.list_products()
        except Exception as e:
            self.log.error(f"Failed to load products: {e}")
            return self._commit(error=_error_message(e))
        self._commit(products=products)
        return await self._fetch(self._state.query)

    async def run_search(self) -> SessionState:
        """Search from page 1 with the current filters; leaves ROI edit mode."""
        self._commit(roi_edit_mode=False)
        return await self._fetch(self._state.query.model_copy(update={"page": 1}))

    async def change_page(self, page: Any) -> SessionState:
        """Fetch another page of the current filters."""
        query = self._state.query.model_copy(update={"page": normalize_page(page)})
        return await self._fetch(query)

    def is_current(self, ticket: int) -> bool:
        return ticket == self._latest_ticket

    async def _fetch(self, query: SearchQuery) -> SessionState:
        ticket = next(self._tickets)
        self._latest_ticket = ticket
        self._commit(loading=True, error=None)

        try:
            result = await self.catalog.search(query)
        except Exception as e:
            if not self.is_current(ticket):
                self.log.debug(f"Dropping failure of superseded search #{ticket}: {e}")
                return self._state
            self.log.error(f"Search #{ticket} failed: {e}")
            return self._commit(loading=False, error=_error_message(e))

        if not self.is_current(ticket):
            self.log.debug(
                f"Dropping stale result of search #{ticket} "
                f"(latest is #{self._latest_ticket})"
            )
            return self._state

        first = result.items[0].scene_uid if result.items else None
        # Filters edited while the request was in flight are kept
        committed_query = self._state.query.model_copy(update={"page": query.page})
        return self._commit(
            query=committed_query,
            result=result,
            selected_uid=first,
            hovered_uid=None,
            loading=False,
        )


def _error_message(error: Exception) -> str:
    if isinstance(error, CatalogError):
        return error.message
    return str(error) or error.__class__.__name__
