"""
Ink & Atlas - Main FastAPI Application
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ink_atlas import __version__
from ink_atlas.config import get_config
from ink_atlas.database import init_db
from ink_atlas.routers import cities, darkroom, sessions, settings
from ink_atlas.sessions.session_store import get_session_store
from ink_atlas.utils.logging import setup_logging

config = get_config()
setup_logging(config.log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize database on startup"""
    init_db()
    logger.info("✅ Ink & Atlas API started")
    yield


app = FastAPI(
    title="Ink & Atlas API",
    description="Literary landmark maps from an offline archive or AI providers",
    version=__version__,
    debug=config.debug,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[config.frontend_url],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
async def root():
    return {
        "message": "Ink & Atlas API",
        "version": __version__,
        "status": "running",
    }


@app.get("/health")
async def health_check():
    return {
        "status": "healthy",
        "database": "connected",
        "gemini_api": "configured" if config.gemini_api_key else "missing",
        "providers": ["gemini", "openai", "deepseek"],
        "active_sessions": get_session_store().get_active_sessions_count(),
    }


app.include_router(cities.router, prefix="/api")
app.include_router(settings.router, prefix="/api")
app.include_router(sessions.router, prefix="/api")
app.include_router(darkroom.router, prefix="/api")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "ink_atlas.main:app",
        host="0.0.0.0",
        port=config.backend_port,
        reload=config.debug,
    )
