"""
Search orchestration
"""

from .search_orchestrator import (
    LandmarkNotFoundError,
    SearchOrchestrator,
    SessionNotFoundError,
    get_search_orchestrator,
)

__all__ = [
    "SearchOrchestrator",
    "SessionNotFoundError",
    "LandmarkNotFoundError",
    "get_search_orchestrator",
]
