"""
SettingsStore - persists AISettings as one JSON blob under a fixed key
Read at startup, written whole on every save (no merge, no versioning)
"""

import json
import logging
from typing import Optional

from pydantic import ValidationError
from sqlalchemy.orm import sessionmaker

from ink_atlas.config import get_config
from ink_atlas.database import get_db_context, get_session_factory
from ink_atlas.models.database import AppSetting
from ink_atlas.models.schemas import AIProvider, AISettings

logger = logging.getLogger(__name__)

SETTINGS_KEY = "ink_atlas_settings"


def baseline_settings(provider: Optional[str] = None) -> AISettings:
    """Default provider, empty credentials"""
    try:
        selected = AIProvider(provider or AIProvider.GEMINI.value)
    except ValueError:
        logger.warning(f"Unknown default provider '{provider}', using gemini")
        selected = AIProvider.GEMINI
    return AISettings(provider=selected)


class SettingsStore:
    """Single-owner settings record"""

    def __init__(self, session_factory: Optional[sessionmaker] = None, default_provider: Optional[str] = None):
        self.session_factory = session_factory
        self.default_provider = default_provider

    def _factory(self) -> sessionmaker:
        return self.session_factory or get_session_factory()

    def load(self) -> AISettings:
        """Stored settings; missing or corrupt blob yields the baseline"""
        with get_db_context(self._factory()) as db:
            row = db.get(AppSetting, SETTINGS_KEY)
            raw = row.value if row is not None else None

        if raw is None:
            return baseline_settings(self.default_provider)

        try:
            data = json.loads(raw)
            if not isinstance(data, dict):
                raise ValueError("settings blob is not an object")
            return AISettings.model_validate(data)
        except (ValueError, ValidationError) as e:
            logger.warning(f"Stored settings unreadable, using defaults: {e}")
            return baseline_settings(self.default_provider)

    def save(self, settings: AISettings) -> AISettings:
        """Replace the whole stored blob in one transaction"""
        blob = settings.model_dump_json(by_alias=True)
        with get_db_context(self._factory()) as db:
            row = db.get(AppSetting, SETTINGS_KEY)
            if row is None:
                db.add(AppSetting(key=SETTINGS_KEY, value=blob))
            else:
                row.value = blob
        logger.info(f"✅ Settings saved (provider: {settings.provider.value})")
        return settings


# Singleton instance
_settings_store = None

def get_settings_store() -> SettingsStore:
    """Get singleton SettingsStore instance"""
    global _settings_store
    if _settings_store is None:
        _settings_store = SettingsStore(default_provider=get_config().default_provider)
    return _settings_store
