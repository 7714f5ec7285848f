from typing import Dict, List, Optional
from uuid import uuid4

from app.api.v1.features.catalog.repository import CatalogPort
from app.api.v1.features.session.map import Viewport
from app.api.v1.features.session.service import BrowserSession
from app.core.logging import logger


class SessionManager:
    """Keeps one BrowserSession per session id. Sessions never share state."""

    def __init__(self, max_sessions: int = 1000) -> None:
        self.sessions: Dict[str, BrowserSession] = {}
        self.max_sessions = max_sessions

    async def create_session(
        self, catalog: CatalogPort, viewport: Optional[Viewport] = None
    ) -> BrowserSession:
        """Creates a session and runs its initial product load and search."""
        if len(self.sessions) >= self.max_sessions:
            self._evict_oldest()

        session = BrowserSession(str(uuid4()), catalog, viewport=viewport)
        self.sessions[session.session_id] = session
        await session.controller.initialize()
        logger.info(f"Session created: {session.session_id}")
        return session

    def get_session(self, session_id: str) -> Optional[BrowserSession]:
        """Retrieves a session."""
        return self.sessions.get(session_id)

    def delete_session(self, session_id: str) -> bool:
        """Deletes a session."""
        if session_id in self.sessions:
            del self.sessions[session_id]
            logger.info(f"Session deleted: {session_id}")
            return True
        return False

    def list_sessions(self) -> List[str]:
        return list(self.sessions)

    def _evict_oldest(self) -> None:
        oldest = min(self.sessions.values(), key=lambda s: s.created_at)
        logger.warning(f"Session limit reached, evicting {oldest.session_id}")
        del self.sessions[oldest.session_id]


session_manager = SessionManager()


def get_session_manager() -> SessionManager:
    """Dependency returning the process-wide session manager."""
    return session_manager
