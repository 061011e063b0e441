"""
SearchOrchestrator - decides between the offline catalog and an AI provider

State machine per session: Idle -> Searching -> {Displaying, Failed}

Priority:
1. Catalog city and no usable credential -> catalog
2. Otherwise -> selected provider
   - non-empty result -> AI landmarks
   - empty result     -> "not found", view unchanged
   - provider failure -> catalog fallback (with warning) for catalog cities, else error

Overlapping searches on one session are cancel-and-replace: the newer search
cancels the in-flight one, and results are only committed by the current generation.
"""

import asyncio
import logging
import random
from typing import Dict, List, Optional

from ink_atlas.constants.catalog import get_city
from ink_atlas.data_sources.base_provider import BaseProvider
from ink_atlas.data_sources.errors import MalformedResponseError, ProviderError
from ink_atlas.data_sources.provider_registry import get_providers
from ink_atlas.data_sources.settings_store import SettingsStore, get_settings_store
from ink_atlas.models.schemas import (
    AIProvider,
    CityEntry,
    LandmarkDraft,
    LandmarkRecord,
    Language,
    MapCenter,
    SearchErrorKind,
    SearchOutcome,
    SearchSource,
    SearchStatus,
    SessionViewState,
)
from ink_atlas.sessions.session_store import SessionStore, get_session_store

logger = logging.getLogger(__name__)

COVER_URL = "https://picsum.photos/200/300?random={}"

MESSAGES: Dict[str, Dict[str, str]] = {
    "missing_credential": {
        "en": "Please configure an API Key in settings.",
        "zh": "请先在设置中配置 API 密钥。",
    },
    "not_found": {
        "en": 'Could not find literary secrets in "{city}".',
        "zh": '在 "{city}" 未找到文学秘密。',
    },
    "ink_dry": {
        "en": "The ink has run dry.",
        "zh": "墨水已干，请重试。",
    },
    "fallback": {
        "en": "AI Search failed: {reason}\nLoaded offline archives instead.",
        "zh": "AI 搜索失败：{reason}\n已改为加载离线档案。",
    },
    "error": {
        "en": "Error: {reason}",
        "zh": "错误：{reason}",
    },
}


def localized_message(key: str, language: Language, **kwargs) -> str:
    return MESSAGES[key][Language(language).value].format(**kwargs)


class SessionNotFoundError(LookupError):
    """Unknown session id"""


class LandmarkNotFoundError(LookupError):
    """Landmark id not among the session's current landmarks"""


def enrich_drafts(drafts: List[LandmarkDraft], provider: AIProvider, city: str) -> List[LandmarkRecord]:
    """Assign result-set ids and placeholder covers"""
    return [
        LandmarkRecord(
            **draft.model_dump(),
            id=f"ai-{AIProvider(provider).value}-{city}-{index}",
            cover_url=COVER_URL.format(random.randint(0, 999)),
        )
        for index, draft in enumerate(drafts)
    ]


class SearchOrchestrator:
    """Owns search transitions for every session"""

    def __init__(
        self,
        session_store: Optional[SessionStore] = None,
        settings_store: Optional[SettingsStore] = None,
        providers: Optional[Dict[AIProvider, BaseProvider]] = None,
    ):
        self.session_store = session_store or get_session_store()
        self.settings_store = settings_store or get_settings_store()
        self._providers = providers
        self._tasks: Dict[str, asyncio.Task] = {}
        self._generations: Dict[str, int] = {}
        logger.info("SearchOrchestrator initialized")

    @property
    def providers(self) -> Dict[AIProvider, BaseProvider]:
        if self._providers is None:
            self._providers = get_providers()
        return self._providers

    # ========================================
    # SEARCH
    # ========================================

    async def search(self, session_id: str, city: str) -> SearchOutcome:
        """
        Run a search for city on a session, replacing any in-flight search

        Returns:
            SearchOutcome; status SUPERSEDED if a newer search replaced this one

        Raises:
            SessionNotFoundError: unknown session
        """
        await self._require_view(session_id)

        previous = self._tasks.get(session_id)
        if previous is not None and not previous.done():
            logger.info(f"Cancelling in-flight search on {session_id}")
            previous.cancel()

        generation = self._generations.get(session_id, 0) + 1
        self._generations[session_id] = generation

        task = asyncio.create_task(self._run_search(session_id, city, generation))
        self._tasks[session_id] = task
        try:
            return await task
        except asyncio.CancelledError:
            if self._is_current(session_id, generation):
                raise
            logger.info(f"Search for {city} on {session_id} superseded")
            view = await self._require_view(session_id)
            return SearchOutcome(status=SearchStatus.SUPERSEDED, view=view)
        finally:
            if self._tasks.get(session_id) is task:
                del self._tasks[session_id]

    async def _run_search(self, session_id: str, city: str, generation: int) -> SearchOutcome:
        city = city.strip()
        view = await self._require_view(session_id)
        view = view.model_copy(update={"is_loading": True, "selected_landmark": None})
        await self.session_store.save(view)

        try:
            outcome = await self._decide(view, city)
        except BaseException:
            if self._is_current(session_id, generation):
                await self.session_store.save(view.model_copy(update={"is_loading": False}))
            raise

        settled = outcome.view.model_copy(update={"is_loading": False})
        outcome = outcome.model_copy(update={"view": settled})
        if self._is_current(session_id, generation):
            await self.session_store.save(settled)
        return outcome

    async def _decide(self, view: SessionViewState, city: str) -> SearchOutcome:
        language = view.language
        settings = self.settings_store.load()
        catalog_entry = get_city(city)
        has_credential = settings.has_usable_credential()

        # TIER 1: offline catalog when no credential is configured
        if catalog_entry is not None and not has_credential:
            logger.info(f"[Catalog] {city} served from offline archive")
            return self._catalog_outcome(view, catalog_entry)

        if not has_credential:
            logger.warning(f"No credential for {settings.provider.value}; cannot search {city}")
            return self._failed(
                view,
                localized_message("missing_credential", language),
                SearchErrorKind.MISSING_CREDENTIAL,
            )

        # TIER 2: selected AI provider
        provider = self.providers[settings.provider]
        try:
            drafts = await provider.find_landmarks(city, settings.credential_for(settings.provider))
        except ProviderError as e:
            kind = (
                SearchErrorKind.MALFORMED_RESPONSE
                if isinstance(e, MalformedResponseError)
                else SearchErrorKind.PROVIDER_ERROR
            )
            reason = e.message or localized_message("ink_dry", language)

            # TIER 3: offline catalog as fallback
            if catalog_entry is not None:
                logger.warning(f"AI search failed for {city}, falling back to catalog: {reason}")
                return self._catalog_outcome(
                    view,
                    catalog_entry,
                    warning=localized_message("fallback", language, reason=reason),
                    error_kind=kind,
                )
            return self._failed(view, localized_message("error", language, reason=reason), kind)

        if not drafts:
            logger.info(f"✗ No landmarks found for {city}")
            return self._failed(
                view,
                localized_message("not_found", language, city=city),
                SearchErrorKind.EMPTY_RESULT,
            )

        landmarks = enrich_drafts(drafts, settings.provider, city)
        logger.info(f"✓ Displaying {len(landmarks)} AI landmarks for {city}")
        return SearchOutcome(
            status=SearchStatus.DISPLAYING,
            source=SearchSource.AI,
            view=view.model_copy(update={
                "city_name": city,
                "center": MapCenter(lat=landmarks[0].lat, lng=landmarks[0].lng),
                "landmarks": landmarks,
            }),
        )

    @staticmethod
    def _catalog_outcome(
        view: SessionViewState,
        entry: CityEntry,
        warning: Optional[str] = None,
        error_kind: Optional[SearchErrorKind] = None,
    ) -> SearchOutcome:
        return SearchOutcome(
            status=SearchStatus.DISPLAYING,
            source=SearchSource.CATALOG,
            warning=warning,
            error_kind=error_kind,
            view=view.model_copy(update={
                "city_name": entry.name.resolve(view.language),
                "center": entry.center,
                "landmarks": list(entry.locations),
            }),
        )

    @staticmethod
    def _failed(view: SessionViewState, message: str, kind: SearchErrorKind) -> SearchOutcome:
        # Landmarks and city stay as they were
        return SearchOutcome(status=SearchStatus.FAILED, message=message, error_kind=kind, view=view)

    def _is_current(self, session_id: str, generation: int) -> bool:
        return self._generations.get(session_id) == generation

    # ========================================
    # VIEW ACTIONS
    # ========================================

    async def select_landmark(self, session_id: str, landmark_id: str) -> SessionViewState:
        view = await self._require_view(session_id)
        for landmark in view.landmarks:
            if landmark.id == landmark_id:
                view = view.model_copy(update={"selected_landmark": landmark})
                await self.session_store.save(view)
                return view
        raise LandmarkNotFoundError(landmark_id)

    async def clear_selection(self, session_id: str) -> SessionViewState:
        view = await self._require_view(session_id)
        view = view.model_copy(update={"selected_landmark": None})
        await self.session_store.save(view)
        return view

    async def set_language(self, session_id: str, language: Optional[Language] = None) -> SessionViewState:
        """Set display language; None toggles en/zh"""
        view = await self._require_view(session_id)
        if language is None:
            language = Language.EN if view.language == Language.ZH else Language.ZH
        view = view.model_copy(update={"language": Language(language)})
        await self.session_store.save(view)
        return view

    async def _require_view(self, session_id: str) -> SessionViewState:
        view = await self.session_store.get(session_id)
        if view is None:
            raise SessionNotFoundError(session_id)
        return view

    def forget_session(self, session_id: str):
        """Cancel in-flight work and drop bookkeeping for a deleted session"""
        task = self._tasks.pop(session_id, None)
        if task is not None and not task.done():
            task.cancel()
        self._generations.pop(session_id, None)


# Singleton instance
_search_orchestrator = None

def get_search_orchestrator() -> SearchOrchestrator:
    """Get singleton SearchOrchestrator instance"""
    global _search_orchestrator
    if _search_orchestrator is None:
        _search_orchestrator = SearchOrchestrator()
    return _search_orchestrator
