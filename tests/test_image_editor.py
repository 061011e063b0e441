import asyncio
import base64
from unittest.mock import AsyncMock, MagicMock

import pytest

from ink_atlas.utils import gemini_client
from ink_atlas.utils.image_editor import ImageEditError, ImageEditor, edit_prompt, strip_data_url


@pytest.fixture
def fake_genai(monkeypatch):
    genai = MagicMock()
    genai.GenerativeModel.return_value.generate_content_async = AsyncMock()
    monkeypatch.setattr(gemini_client, "genai", genai)
    return genai


def _response(*parts):
    candidate = MagicMock()
    candidate.content.parts = list(parts)
    return MagicMock(candidates=[candidate])


def _part(data=None):
    part = MagicMock()
    part.inline_data = None if data is None else MagicMock(data=data)
    return part


RAW_PNG = base64.b64encode(b"\x89PNG fake").decode()


def test_strip_data_url():
    assert strip_data_url("data:image/jpeg;base64,QUJD") == "QUJD"
    assert strip_data_url("QUJD") == "QUJD"


def test_prompt_wraps_instruction():
    assert edit_prompt("add film grain") == (
        "Edit this image: add film grain. Maintain the aspect ratio. Return the edited image."
    )


def test_returns_first_inline_image(fake_genai):
    fake_genai.GenerativeModel.return_value.generate_content_async.return_value = _response(
        _part(), _part(b"first"), _part(b"second")
    )

    result = asyncio.run(ImageEditor().develop("data:image/png;base64," + RAW_PNG, "sepia", "k"))

    assert result == "data:image/png;base64," + base64.b64encode(b"first").decode()
    contents = fake_genai.GenerativeModel.return_value.generate_content_async.call_args.args[0]
    assert contents[0] == {"mime_type": "image/png", "data": b"\x89PNG fake"}
    assert "sepia" in contents[1]


def test_no_image_returns_none(fake_genai):
    fake_genai.GenerativeModel.return_value.generate_content_async.return_value = _response(_part())
    assert asyncio.run(ImageEditor().develop(RAW_PNG, "sepia", "k")) is None


def test_call_failure_is_distinguishable(fake_genai):
    fake_genai.GenerativeModel.return_value.generate_content_async.side_effect = RuntimeError("quota")
    with pytest.raises(ImageEditError):
        asyncio.run(ImageEditor().develop(RAW_PNG, "sepia", "k"))


def test_invalid_base64_is_rejected(fake_genai):
    with pytest.raises(ValueError):
        asyncio.run(ImageEditor().develop("not base64!!", "sepia", "k"))
    fake_genai.GenerativeModel.assert_not_called()
