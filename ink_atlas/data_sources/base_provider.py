"""
BaseProvider - Abstract base class for all landmark providers
"""

import logging
import time
from abc import ABC, abstractmethod
from typing import List

from ink_atlas.data_sources.errors import MissingCredentialError
from ink_atlas.models.schemas import AIProvider, LandmarkDraft


class BaseProvider(ABC):
    """One implementation per AIProvider tag"""

    # Shown in user-facing messages
    display_name: str = "AI"

    def __init__(self, provider_id: AIProvider):
        self.provider_id = AIProvider(provider_id)
        self.logger = logging.getLogger(f"provider.{self.provider_id.value}")

    @abstractmethod
    async def fetch_landmarks(self, city: str, credential: str) -> List[LandmarkDraft]:
        """
        Issue one provider request and normalize the reply

        Args:
            city: City name as typed by the user
            credential: Provider API key

        Returns:
            Landmark drafts (no id / coverUrl yet), possibly empty

        Raises:
            ProviderRequestError: transport/auth failure
            MalformedResponseError: reply is not valid landmark JSON
        """

    async def find_landmarks(self, city: str, credential: str) -> List[LandmarkDraft]:
        """Run fetch_landmarks with credential check and timing"""
        if not credential or not credential.strip():
            raise MissingCredentialError(f"{self.display_name} API Key is missing.")

        start_time = time.time()
        self.logger.info(f"🔎 Searching literary landmarks in {city}")
        try:
            drafts = await self.fetch_landmarks(city, credential.strip())
        except Exception as e:
            elapsed_ms = int((time.time() - start_time) * 1000)
            self.logger.error(f"✗ {self.display_name} failed after {elapsed_ms}ms: {e}")
            raise

        elapsed_ms = int((time.time() - start_time) * 1000)
        self.logger.info(f"✓ {self.display_name} returned {len(drafts)} landmarks in {elapsed_ms}ms")
        return drafts

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} provider={self.provider_id.value}>"
