"""
Provider registry - maps each AIProvider tag to its adapter
"""

import logging
from typing import Dict, Optional

from ink_atlas.config import AppConfig, get_config
from ink_atlas.data_sources.base_provider import BaseProvider
from ink_atlas.data_sources.gemini_provider import GeminiProvider
from ink_atlas.data_sources.openai_compatible_provider import OpenAICompatibleProvider
from ink_atlas.models.schemas import AIProvider

logger = logging.getLogger(__name__)


def build_providers(config: AppConfig) -> Dict[AIProvider, BaseProvider]:
    """Instantiate one adapter per provider tag"""
    return {
        AIProvider.GEMINI: GeminiProvider(
            model_name=config.gemini_model,
            search_grounding=config.gemini_search_grounding,
        ),
        AIProvider.OPENAI: OpenAICompatibleProvider(
            AIProvider.OPENAI,
            base_url=config.openai_base_url,
            model=config.openai_model,
            display_name="OpenAI",
            timeout=config.provider_timeout_seconds,
        ),
        AIProvider.DEEPSEEK: OpenAICompatibleProvider(
            AIProvider.DEEPSEEK,
            base_url=config.deepseek_base_url,
            model=config.deepseek_model,
            display_name="DeepSeek",
            timeout=config.provider_timeout_seconds,
        ),
    }


# Singleton instance
_providers: Optional[Dict[AIProvider, BaseProvider]] = None

def get_providers() -> Dict[AIProvider, BaseProvider]:
    """Get singleton provider table"""
    global _providers
    if _providers is None:
        _providers = build_providers(get_config())
        logger.info(f"Provider registry initialized: {[p.value for p in _providers]}")
    return _providers


def get_provider(provider_id: AIProvider) -> BaseProvider:
    return get_providers()[AIProvider(provider_id)]
