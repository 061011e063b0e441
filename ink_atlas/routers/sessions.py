"""
Session API Router

Map view state, landmark search, selection and language
"""

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException

from ink_atlas.config import get_config
from ink_atlas.models.schemas import (
    LanguageRequest,
    SearchOutcome,
    SearchRequest,
    SelectRequest,
    SessionViewState,
)
from ink_atlas.orchestrator.search_orchestrator import (
    LandmarkNotFoundError,
    SessionNotFoundError,
    get_search_orchestrator,
)
from ink_atlas.sessions.session_store import get_session_store

router = APIRouter(prefix="/sessions", tags=["sessions"])
logger = logging.getLogger(__name__)


def _not_found(session_id: str) -> HTTPException:
    return HTTPException(status_code=404, detail=f"Session not found: {session_id}")


@router.post("", response_model=SessionViewState, status_code=201)
async def create_session(request: Optional[LanguageRequest] = None):
    """Create a session at the opening view, evicting idle ones first"""
    store = get_session_store()
    for session_id in store.cleanup_old_sessions(get_config().session_max_age_hours):
        get_search_orchestrator().forget_session(session_id)

    if request is not None and request.language is not None:
        return store.create_session(request.language)
    return store.create_session()


@router.get("/{session_id}", response_model=SessionViewState)
async def get_session(session_id: str):
    view = await get_session_store().get(session_id)
    if view is None:
        raise _not_found(session_id)
    return view


@router.delete("/{session_id}")
async def delete_session(session_id: str):
    if not await get_session_store().delete(session_id):
        raise _not_found(session_id)
    get_search_orchestrator().forget_session(session_id)
    return {"message": "Session deleted successfully"}


@router.post("/{session_id}/search", response_model=SearchOutcome)
async def search(session_id: str, request: SearchRequest):
    """
    Search literary landmarks for a city

    Failures the user should see (missing key, no results, provider error)
    come back as status "failed" with a message, not as HTTP errors.
    """
    try:
        logger.info(f"Received search for {request.city} on {session_id}")
        return await get_search_orchestrator().search(session_id, request.city)
    except SessionNotFoundError:
        raise _not_found(session_id)
    except Exception as e:
        logger.error(f"Search failed: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/{session_id}/select", response_model=SessionViewState)
async def select_landmark(session_id: str, request: SelectRequest):
    try:
        return await get_search_orchestrator().select_landmark(session_id, request.landmark_id)
    except SessionNotFoundError:
        raise _not_found(session_id)
    except LandmarkNotFoundError:
        raise HTTPException(status_code=404, detail=f"Landmark not found: {request.landmark_id}")


@router.delete("/{session_id}/selection", response_model=SessionViewState)
async def clear_selection(session_id: str):
    try:
        return await get_search_orchestrator().clear_selection(session_id)
    except SessionNotFoundError:
        raise _not_found(session_id)


@router.put("/{session_id}/language", response_model=SessionViewState)
async def set_language(session_id: str, request: LanguageRequest):
    """Set display language; omit it to toggle"""
    try:
        return await get_search_orchestrator().set_language(session_id, request.language)
    except SessionNotFoundError:
        raise _not_found(session_id)
