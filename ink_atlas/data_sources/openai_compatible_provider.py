"""
OpenAICompatibleProvider - chat-completion style HTTP backends (OpenAI, DeepSeek)
"""

from typing import List, Optional

import httpx

from ink_atlas.data_sources.base_provider import BaseProvider
from ink_atlas.data_sources.errors import MalformedResponseError, ProviderRequestError
from ink_atlas.data_sources.landmark_parser import parse_landmark_payload, strip_code_fences
from ink_atlas.data_sources.prompts import RAW_JSON_SUFFIX, SYSTEM_PROMPT, user_prompt
from ink_atlas.models.schemas import AIProvider, LandmarkDraft

GENERIC_FAILURE_MESSAGE = "API request failed"
TEMPERATURE = 0.7


class OpenAICompatibleProvider(BaseProvider):
    """One instance per backend; only base URL and model differ"""

    def __init__(
        self,
        provider_id: AIProvider,
        base_url: str,
        model: str,
        display_name: str,
        timeout: float = 60.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(provider_id)
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.display_name = display_name
        self.timeout = timeout
        self.transport = transport

    def _build_payload(self, city: str) -> dict:
        return {
            "model": self.model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT + RAW_JSON_SUFFIX},
                {"role": "user", "content": user_prompt(city)},
            ],
            "temperature": TEMPERATURE,
        }

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        """Provider's embedded error.message, else generic"""
        try:
            body = response.json()
        except ValueError:
            return GENERIC_FAILURE_MESSAGE
        if isinstance(body, dict):
            error = body.get("error")
            if isinstance(error, dict) and error.get("message"):
                return str(error["message"])
        return GENERIC_FAILURE_MESSAGE

    @staticmethod
    def _message_content(body) -> str:
        try:
            content = body["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            raise MalformedResponseError("Chat completion has no message content") from e
        if not isinstance(content, str):
            raise MalformedResponseError("Chat completion content is not text")
        return content

    async def fetch_landmarks(self, city: str, credential: str) -> List[LandmarkDraft]:
        url = f"{self.base_url}/chat/completions"
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {credential}",
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(url, json=self._build_payload(city), headers=headers)
        except httpx.HTTPError as e:
            raise ProviderRequestError(str(e) or GENERIC_FAILURE_MESSAGE) from e

        if not response.is_success:
            message = self._error_message(response)
            self.logger.error(f"{self.display_name} HTTP {response.status_code}: {message}")
            raise ProviderRequestError(message)

        try:
            body = response.json()
        except ValueError as e:
            raise MalformedResponseError("Chat completion body is not JSON") from e

        content = strip_code_fences(self._message_content(body))
        return parse_landmark_payload(content)
