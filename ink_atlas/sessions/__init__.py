"""
Session view-state management
"""

from .session_store import SessionStore, get_session_store, initial_view

__all__ = [
    "SessionStore",
    "get_session_store",
    "initial_view",
]
