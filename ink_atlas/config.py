"""
Application configuration loaded from the environment (.env supported)
"""

import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class AppConfig:
    database_url: str
    debug: bool
    frontend_url: str
    backend_port: int
    log_level: str

    gemini_api_key: str
    gemini_model: str
    gemini_image_model: str
    gemini_search_grounding: bool

    openai_base_url: str
    openai_model: str
    deepseek_base_url: str
    deepseek_model: str

    default_provider: str
    provider_timeout_seconds: float
    session_max_age_hours: float

    @classmethod
    def from_env(cls) -> "AppConfig":
        load_dotenv()
        return cls(
            database_url=os.getenv("DATABASE_URL", "sqlite:///./ink_atlas.db").strip(),
            debug=_env_bool("DEBUG", "false"),
            frontend_url=os.getenv("FRONTEND_URL", "http://localhost:3000").strip(),
            backend_port=int(os.getenv("BACKEND_PORT", "8000")),
            log_level=os.getenv("LOG_LEVEL", "INFO").strip().upper(),
            gemini_api_key=os.getenv("GEMINI_API_KEY", "").strip(),
            gemini_model=os.getenv("GEMINI_MODEL", "gemini-2.5-flash").strip(),
            gemini_image_model=os.getenv("GEMINI_IMAGE_MODEL", "gemini-2.5-flash-image").strip(),
            gemini_search_grounding=_env_bool("GEMINI_SEARCH_GROUNDING", "false"),
            openai_base_url=os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1").strip().rstrip("/"),
            openai_model=os.getenv("OPENAI_MODEL", "gpt-4o").strip(),
            deepseek_base_url=os.getenv("DEEPSEEK_BASE_URL", "https://api.deepseek.com").strip().rstrip("/"),
            deepseek_model=os.getenv("DEEPSEEK_MODEL", "deepseek-chat").strip(),
            default_provider=os.getenv("DEFAULT_PROVIDER", "gemini").strip().lower(),
            provider_timeout_seconds=float(os.getenv("PROVIDER_TIMEOUT_SECONDS", "60")),
            session_max_age_hours=float(os.getenv("SESSION_MAX_AGE_HOURS", "24")),
        )


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """Get singleton AppConfig instance"""
    return AppConfig.from_env()
