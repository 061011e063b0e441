"""
GeminiProvider - literary landmarks via the google-generativeai SDK
Structured JSON output (response schema), with web-search grounding on model
families that accept the retrieval tool alongside JSON output
"""

from typing import List, Optional

import google.generativeai as genai

from ink_atlas.data_sources.base_provider import BaseProvider
from ink_atlas.data_sources.errors import ProviderRequestError
from ink_atlas.data_sources.landmark_parser import parse_landmark_payload
from ink_atlas.data_sources.prompts import LOCALIZED_FIELDS, SYSTEM_PROMPT, user_prompt
from ink_atlas.models.schemas import AIProvider, LandmarkDraft
from ink_atlas.utils.gemini_client import configured_model

SEARCH_FAILED_MESSAGE = "Gemini search failed. Please check your API key."
SEARCH_RETRIEVAL_TOOL = "google_search_retrieval"

# Gemini 2.x rejects google_search_retrieval, and any tool combined with a JSON response type
SEARCH_RETRIEVAL_FAMILIES = ("gemini-1.5",)


def supports_search_retrieval(model_name: str) -> bool:
    name = model_name.strip().lower()
    if name.startswith("models/"):
        name = name[len("models/"):]
    return name.startswith(SEARCH_RETRIEVAL_FAMILIES)


def build_landmark_schema() -> genai.protos.Schema:
    """Array of landmark objects; every field required"""
    localized = genai.protos.Schema(
        type=genai.protos.Type.OBJECT,
        properties={
            "en": genai.protos.Schema(type=genai.protos.Type.STRING),
            "zh": genai.protos.Schema(type=genai.protos.Type.STRING),
        },
        required=["en", "zh"],
    )
    properties = {field: localized for field in LOCALIZED_FIELDS}
    properties["lat"] = genai.protos.Schema(type=genai.protos.Type.NUMBER)
    properties["lng"] = genai.protos.Schema(type=genai.protos.Type.NUMBER)

    return genai.protos.Schema(
        type=genai.protos.Type.ARRAY,
        items=genai.protos.Schema(
            type=genai.protos.Type.OBJECT,
            properties=properties,
            required=list(LOCALIZED_FIELDS) + ["lat", "lng"],
        ),
    )


class GeminiProvider(BaseProvider):
    """Native SDK provider"""

    display_name = "Gemini"

    def __init__(self, model_name: str = "gemini-2.5-flash", search_grounding: bool = False):
        super().__init__(AIProvider.GEMINI)
        self.model_name = model_name
        self.search_grounding = search_grounding
        if search_grounding and not supports_search_retrieval(model_name):
            self.logger.warning(f"Search grounding is not available on {model_name}; sending no tools")

    @property
    def grounding_tool(self) -> Optional[str]:
        if self.search_grounding and supports_search_retrieval(self.model_name):
            return SEARCH_RETRIEVAL_TOOL
        return None

    def _build_model(self, credential: str) -> genai.GenerativeModel:
        return configured_model(
            credential,
            self.model_name,
            system_instruction=SYSTEM_PROMPT,
            tools=self.grounding_tool,
            generation_config=genai.GenerationConfig(
                candidate_count=1,
                response_mime_type="application/json",
                response_schema=build_landmark_schema(),
            ),
        )

    @staticmethod
    def _response_text(response) -> Optional[str]:
        # .text raises ValueError when the candidate has no parts (e.g. blocked)
        try:
            return response.text
        except (ValueError, AttributeError):
            return None

    async def fetch_landmarks(self, city: str, credential: str) -> List[LandmarkDraft]:
        try:
            model = self._build_model(credential)
            response = await model.generate_content_async(user_prompt(city))
        except Exception as e:
            self.logger.error(f"Gemini API error: {e}")
            raise ProviderRequestError(SEARCH_FAILED_MESSAGE) from e

        text = self._response_text(response) if response is not None else None
        if not text or not text.strip():
            self.logger.warning("Gemini returned empty response")
            return []

        return parse_landmark_payload(text)
