"""
Data Sources Layer - offline catalog, AI providers, settings persistence
"""

from .base_provider import BaseProvider
from .errors import MalformedResponseError, MissingCredentialError, ProviderError, ProviderRequestError
from .gemini_provider import GeminiProvider
from .openai_compatible_provider import OpenAICompatibleProvider
from .provider_registry import build_providers, get_provider, get_providers
from .settings_store import SettingsStore, get_settings_store

__all__ = [
    "BaseProvider",
    "GeminiProvider",
    "OpenAICompatibleProvider",
    "ProviderError",
    "MissingCredentialError",
    "ProviderRequestError",
    "MalformedResponseError",
    "build_providers",
    "get_provider",
    "get_providers",
    "SettingsStore",
    "get_settings_store",
]
