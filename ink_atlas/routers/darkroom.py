"""
Darkroom API Router - AI photo aging

Every failure is soft: 200 with image null and an alert message
"""

import logging

from fastapi import APIRouter, HTTPException

from ink_atlas.config import get_config
from ink_atlas.data_sources.settings_store import get_settings_store
from ink_atlas.models.schemas import DarkroomRequest, DarkroomResponse
from ink_atlas.utils.image_editor import ImageEditError, get_image_editor

router = APIRouter(prefix="/darkroom", tags=["darkroom"])
logger = logging.getLogger(__name__)

DEVELOP_FAILED_MESSAGE = "Failed to develop photograph. The spirits are quiet."
MISSING_KEY_MESSAGE = "Please configure a Gemini API Key in settings."


@router.post("/develop", response_model=DarkroomResponse)
async def develop(request: DarkroomRequest):
    credential = get_settings_store().load().gemini_key.strip() or get_config().gemini_api_key
    if not credential:
        return DarkroomResponse(message=MISSING_KEY_MESSAGE)

    try:
        image = await get_image_editor().develop(request.image, request.instruction, credential)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except ImageEditError as e:
        logger.warning(f"Darkroom call failed: {e}")
        return DarkroomResponse(message=DEVELOP_FAILED_MESSAGE)

    if image is None:
        return DarkroomResponse(message=DEVELOP_FAILED_MESSAGE)
    return DarkroomResponse(image=image)
