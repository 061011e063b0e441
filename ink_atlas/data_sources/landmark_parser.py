"""
Normalize provider text into LandmarkDraft records
"""

import json
import logging
from typing import Any, List

from pydantic import TypeAdapter, ValidationError

from ink_atlas.data_sources.errors import MalformedResponseError
from ink_atlas.models.schemas import LandmarkDraft

logger = logging.getLogger(__name__)

_drafts_adapter = TypeAdapter(List[LandmarkDraft])

# Wrapper keys some models put around the array
_WRAPPER_KEYS = ("landmarks", "locations")


def strip_code_fences(text: str) -> str:
    """Remove ```json / ``` markers a chat model may add"""
    return text.replace("```json", "").replace("```", "").strip()


def parse_landmark_payload(text: str) -> List[LandmarkDraft]:
    """
    Parse and validate a JSON landmark array

    Raises:
        MalformedResponseError: invalid JSON, not an array, or a record fails validation
    """
    try:
        data: Any = json.loads(text)
    except json.JSONDecodeError as e:
        logger.error(f"✗ Provider returned invalid JSON: {e}")
        raise MalformedResponseError(f"Provider returned invalid JSON: {e.msg}") from e

    if isinstance(data, dict):
        for key in _WRAPPER_KEYS:
            if isinstance(data.get(key), list):
                data = data[key]
                break

    if not isinstance(data, list):
        raise MalformedResponseError("Provider response is not a JSON array of landmarks")

    try:
        return _drafts_adapter.validate_python(data)
    except ValidationError as e:
        logger.error(f"✗ Landmark schema mismatch: {e.error_count()} error(s)")
        raise MalformedResponseError(f"Landmark data failed validation: {e.errors()[0]['msg']}") from e
