"""
SessionStore - per-client map view state

In-memory storage; view state is transient and never persisted
"""

import logging
import uuid
from datetime import datetime, timedelta
from typing import Dict, List, Optional

from ink_atlas.constants.catalog import CATALOG, DEFAULT_CITY_KEY
from ink_atlas.models.schemas import Language, SessionViewState

logger = logging.getLogger(__name__)


def initial_view(session_id: str, language: Language = Language.ZH) -> SessionViewState:
    """Opening view: the default catalog city"""
    city = CATALOG[DEFAULT_CITY_KEY]
    return SessionViewState(
        session_id=session_id,
        city_name=city.name.resolve(language),
        center=city.center,
        landmarks=list(city.locations),
        language=language,
    )


class SessionStore:
    """In-memory session storage"""

    def __init__(self):
        self.sessions: Dict[str, SessionViewState] = {}
        self.updated_at: Dict[str, datetime] = {}
        logger.info("SessionStore initialized")

    def create_session(self, language: Language = Language.ZH) -> SessionViewState:
        """Create new session at the opening view"""
        session_id = f"session_{uuid.uuid4().hex[:16]}"
        view = initial_view(session_id, language)
        self.sessions[session_id] = view
        self.updated_at[session_id] = datetime.now()
        logger.info(f"✅ Created session: {session_id}")
        return view

    async def get(self, session_id: str) -> Optional[SessionViewState]:
        view = self.sessions.get(session_id)
        if view is None:
            logger.warning(f"Session not found: {session_id}")
        return view

    async def save(self, view: SessionViewState):
        self.sessions[view.session_id] = view
        self.updated_at[view.session_id] = datetime.now()
        logger.debug(f"Saved session: {view.session_id}")

    async def delete(self, session_id: str) -> bool:
        if session_id not in self.sessions:
            logger.warning(f"Cannot delete - session not found: {session_id}")
            return False
        del self.sessions[session_id]
        self.updated_at.pop(session_id, None)
        logger.info(f"🗑️  Deleted session: {session_id}")
        return True

    def get_active_sessions_count(self) -> int:
        return len(self.sessions)

    def cleanup_old_sessions(self, max_age_hours: float = 24) -> List[str]:
        """
        Remove sessions idle longer than max_age_hours

        Returns:
            Ids of the evicted sessions
        """
        cutoff_time = datetime.now() - timedelta(hours=max_age_hours)
        old_sessions = [sid for sid, ts in self.updated_at.items() if ts < cutoff_time]

        for session_id in old_sessions:
            self.sessions.pop(session_id, None)
            self.updated_at.pop(session_id, None)

        if old_sessions:
            logger.info(f"🗑️  Cleaned up {len(old_sessions)} old sessions")
        return old_sessions


# Singleton instance
_session_store = None

def get_session_store() -> SessionStore:
    """Get singleton SessionStore instance"""
    global _session_store
    if _session_store is None:
        _session_store = SessionStore()
    return _session_store
