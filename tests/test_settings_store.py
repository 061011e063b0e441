from ink_atlas.data_sources.settings_store import SETTINGS_KEY, SettingsStore
from ink_atlas.database import get_db_context
from ink_atlas.models.database import AppSetting
from ink_atlas.models.schemas import AIProvider, AISettings


def test_missing_blob_yields_baseline(settings_store):
    settings = settings_store.load()
    assert settings == AISettings(provider=AIProvider.GEMINI)
    assert settings.gemini_key == settings.openai_key == settings.deepseek_key == ""


def test_baseline_provider_is_configurable(session_factory):
    store = SettingsStore(session_factory=session_factory, default_provider="deepseek")
    assert store.load().provider == AIProvider.DEEPSEEK


def test_save_then_load_round_trips(settings_store):
    saved = AISettings(provider=AIProvider.OPENAI, gemini_key="", openai_key="sk-abc", deepseek_key="")
    settings_store.save(saved)
    assert settings_store.load() == saved


def test_save_replaces_whole_blob(settings_store, session_factory):
    settings_store.save(AISettings(provider=AIProvider.GEMINI, gemini_key="g1", openai_key="o1"))
    settings_store.save(AISettings(provider=AIProvider.DEEPSEEK, deepseek_key="d1"))

    loaded = settings_store.load()
    assert loaded == AISettings(provider=AIProvider.DEEPSEEK, deepseek_key="d1")
    with get_db_context(session_factory) as db:
        assert db.query(AppSetting).count() == 1


def test_blob_uses_camel_case_keys(settings_store, session_factory):
    settings_store.save(AISettings(gemini_key="g"))
    with get_db_context(session_factory) as db:
        raw = db.get(AppSetting, SETTINGS_KEY).value
    assert '"geminiKey":"g"' in raw.replace(" ", "")
    assert '"provider":"gemini"' in raw.replace(" ", "")


def test_corrupt_blob_yields_baseline(settings_store, session_factory):
    with get_db_context(session_factory) as db:
        db.add(AppSetting(key=SETTINGS_KEY, value="{not json"))
    assert settings_store.load() == AISettings()


def test_unknown_provider_in_blob_yields_baseline(settings_store, session_factory):
    with get_db_context(session_factory) as db:
        db.add(AppSetting(key=SETTINGS_KEY, value='{"provider": "claude", "geminiKey": "x"}'))
    assert settings_store.load() == AISettings()


def test_absent_fields_default_to_empty(settings_store, session_factory):
    with get_db_context(session_factory) as db:
        db.add(AppSetting(key=SETTINGS_KEY, value='{"provider": "openai", "openaiKey": "sk"}'))
    loaded = settings_store.load()
    assert loaded.openai_key == "sk"
    assert loaded.gemini_key == "" and loaded.deepseek_key == ""
