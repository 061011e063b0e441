"""
Settings API Router

Single save entry point for provider selection and credentials
"""

import logging

from fastapi import APIRouter, HTTPException

from ink_atlas.data_sources.settings_store import get_settings_store
from ink_atlas.models.schemas import AISettings

router = APIRouter(prefix="/settings", tags=["settings"])
logger = logging.getLogger(__name__)


@router.get("", response_model=AISettings)
async def read_settings():
    return get_settings_store().load()


@router.put("", response_model=AISettings)
async def save_settings(settings: AISettings):
    """Replace the stored settings as a whole"""
    try:
        return get_settings_store().save(settings)
    except Exception as e:
        logger.error(f"Saving settings failed: {e}")
        raise HTTPException(status_code=500, detail=str(e))
