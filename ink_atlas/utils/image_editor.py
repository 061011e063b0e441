"""
ImageEditor - "darkroom" photo aging via a Gemini image-capable model
"""

import base64
import binascii
import logging
import re
from typing import Optional

from ink_atlas.utils.gemini_client import configured_model

logger = logging.getLogger(__name__)

_DATA_URL_PREFIX = re.compile(r"^data:image/(png|jpeg|jpg);base64,")


class ImageEditError(Exception):
    """The image edit call itself failed"""


def strip_data_url(image: str) -> str:
    return _DATA_URL_PREFIX.sub("", image.strip())


def edit_prompt(instruction: str) -> str:
    return f"Edit this image: {instruction}. Maintain the aspect ratio. Return the edited image."


class ImageEditor:
    """Single-request image edit; returns the first inline image or None"""

    def __init__(self, model_name: str = "gemini-2.5-flash-image"):
        self.model_name = model_name

    async def develop(self, image_b64: str, instruction: str, credential: str) -> Optional[str]:
        """
        Apply instruction to an image

        Args:
            image_b64: base64 image, data URL prefix allowed
            instruction: free-text edit instruction
            credential: Gemini API key

        Returns:
            data:image/png;base64 URL, or None when the model returned no image

        Raises:
            ValueError: image payload is not valid base64
            ImageEditError: transport / SDK failure
        """
        try:
            image_bytes = base64.b64decode(strip_data_url(image_b64), validate=True)
        except (binascii.Error, ValueError) as e:
            raise ValueError("Image is not valid base64") from e

        try:
            model = configured_model(credential, self.model_name)
            response = await model.generate_content_async([
                {"mime_type": "image/png", "data": image_bytes},
                edit_prompt(instruction),
            ])
        except Exception as e:
            logger.error(f"❌ Gemini image edit failed: {e}")
            raise ImageEditError(str(e)) from e

        for candidate in (getattr(response, "candidates", None) or [])[:1]:
            content = getattr(candidate, "content", None)
            for part in getattr(content, "parts", None) or []:
                inline = getattr(part, "inline_data", None)
                if inline is not None and inline.data:
                    data = inline.data
                    if isinstance(data, bytes):
                        data = base64.b64encode(data).decode("ascii")
                    logger.info("✅ Darkroom image developed")
                    return f"data:image/png;base64,{data}"

        logger.warning("Gemini returned no image")
        return None


# Singleton instance
_image_editor = None

def get_image_editor() -> ImageEditor:
    """Get singleton ImageEditor instance"""
    global _image_editor
    if _image_editor is None:
        from ink_atlas.config import get_config
        _image_editor = ImageEditor(model_name=get_config().gemini_image_model)
    return _image_editor
