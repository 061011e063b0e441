import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("GEMINI_API_KEY", "")

import pytest
from sqlalchemy.orm import sessionmaker

from ink_atlas.data_sources.base_provider import BaseProvider
from ink_atlas.data_sources.settings_store import SettingsStore
from ink_atlas.database import create_db_engine, init_db
from ink_atlas.models.schemas import AIProvider, LandmarkDraft
from ink_atlas.orchestrator.search_orchestrator import SearchOrchestrator
from ink_atlas.sessions.session_store import SessionStore


def make_landmark(name="Shakespeare and Company", lat=48.8526, lng=2.3471, **overrides):
    data = {
        "name": {"en": name, "zh": "莎士比亚书店"},
        "bookTitle": {"en": "A Moveable Feast", "zh": "流动的盛宴"},
        "author": {"en": "Ernest Hemingway", "zh": "欧内斯特·海明威"},
        "quote": {"en": "Paris is always a good idea.", "zh": "巴黎永远是个好主意。"},
        "travelerNote": {"en": "Browse upstairs.", "zh": "去楼上看看。"},
        "lat": lat,
        "lng": lng,
    }
    data.update(overrides)
    return data


class FakeProvider(BaseProvider):
    """Provider returning canned drafts or raising a canned error"""

    display_name = "Fake"

    def __init__(self, provider_id=AIProvider.GEMINI, result=None, error=None):
        super().__init__(provider_id)
        self.result = result or []
        self.error = error
        self.calls = []

    async def fetch_landmarks(self, city, credential):
        self.calls.append((city, credential))
        if self.error is not None:
            raise self.error
        return [LandmarkDraft.model_validate(item) for item in self.result]


@pytest.fixture
def session_factory():
    engine = create_db_engine("sqlite://")
    init_db(engine)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def settings_store(session_factory):
    return SettingsStore(session_factory=session_factory)


@pytest.fixture
def session_store():
    return SessionStore()


@pytest.fixture
def providers():
    return {provider: FakeProvider(provider) for provider in AIProvider}


@pytest.fixture
def orchestrator(session_store, settings_store, providers):
    return SearchOrchestrator(
        session_store=session_store,
        settings_store=settings_store,
        providers=providers,
    )
