"""
Pydantic schemas for Ink & Atlas
Wire format is camelCase (bookTitle, travelerNote, geminiKey...), attributes are snake_case
"""

import math
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator, model_validator

MAX_REVIEWS = 2


# ============================================================================
# ENUMS
# ============================================================================

class Language(str, Enum):
    """Display language"""
    EN = "en"
    ZH = "zh"


class AIProvider(str, Enum):
    """Supported landmark providers"""
    GEMINI = "gemini"
    OPENAI = "openai"
    DEEPSEEK = "deepseek"


class SearchStatus(str, Enum):
    """Terminal state of a search"""
    DISPLAYING = "displaying"
    FAILED = "failed"
    SUPERSEDED = "superseded"


class SearchSource(str, Enum):
    CATALOG = "catalog"
    AI = "ai"
    NONE = "none"


class SearchErrorKind(str, Enum):
    MISSING_CREDENTIAL = "missing_credential"
    PROVIDER_ERROR = "provider_error"
    MALFORMED_RESPONSE = "malformed_response"
    EMPTY_RESULT = "empty_result"


class CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


# ============================================================================
# LANDMARK MODELS
# ============================================================================

class LocalizedText(CamelModel):
    """Bilingual text; both keys are required"""
    en: str
    zh: str

    def resolve(self, language: Language) -> str:
        """Requested language, else English, else empty"""
        value = self.zh if Language(language) == Language.ZH else self.en
        return value or self.en or ""


class LandmarkDraft(CamelModel):
    """Landmark as returned by a provider, before id/cover assignment"""
    name: LocalizedText
    book_title: LocalizedText = Field(..., alias="bookTitle")
    author: LocalizedText
    quote: LocalizedText
    traveler_note: LocalizedText = Field(..., alias="travelerNote")
    lat: float
    lng: float
    reviews: Optional[List[str]] = None
    google_maps_uri: Optional[str] = Field(None, alias="googleMapsUri")

    @field_validator("lat")
    @classmethod
    def valid_latitude(cls, v: float) -> float:
        if not math.isfinite(v) or not -90.0 <= v <= 90.0:
            raise ValueError(f"latitude out of range: {v}")
        return v

    @field_validator("lng")
    @classmethod
    def valid_longitude(cls, v: float) -> float:
        if not math.isfinite(v) or not -180.0 <= v <= 180.0:
            raise ValueError(f"longitude out of range: {v}")
        return v

    @field_validator("reviews")
    @classmethod
    def keep_first_reviews(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        if v is None:
            return v
        return v[:MAX_REVIEWS]

    @model_validator(mode="after")
    def headline_text_present(self):
        for field in ("name", "book_title", "author"):
            if not getattr(self, field).en.strip():
                raise ValueError(f"{field} must have English text")
        return self


class LandmarkRecord(LandmarkDraft):
    """Landmark ready for display"""
    id: str
    cover_url: Optional[str] = Field(None, alias="coverUrl")


class MapCenter(CamelModel):
    lat: float
    lng: float


class CityEntry(CamelModel):
    """Static catalog city"""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name: LocalizedText
    lat: float
    lng: float
    locations: List[LandmarkRecord]

    @property
    def center(self) -> MapCenter:
        return MapCenter(lat=self.lat, lng=self.lng)


class CitySummary(CamelModel):
    key: str
    name: LocalizedText
    center: MapCenter
    landmark_count: int = Field(..., alias="landmarkCount")


# ============================================================================
# SETTINGS
# ============================================================================

class AISettings(CamelModel):
    """Selected provider plus one credential per provider"""
    provider: AIProvider = AIProvider.GEMINI
    gemini_key: str = Field("", alias="geminiKey")
    openai_key: str = Field("", alias="openaiKey")
    deepseek_key: str = Field("", alias="deepseekKey")

    @field_validator("gemini_key", "openai_key", "deepseek_key", mode="before")
    @classmethod
    def none_as_empty(cls, v):
        return "" if v is None else v

    def credential_for(self, provider: AIProvider) -> str:
        return {
            AIProvider.GEMINI: self.gemini_key,
            AIProvider.OPENAI: self.openai_key,
            AIProvider.DEEPSEEK: self.deepseek_key,
        }[AIProvider(provider)]

    def has_usable_credential(self) -> bool:
        """Selected provider has its own non-blank key"""
        return bool(self.credential_for(self.provider).strip())


# ============================================================================
# SESSION / SEARCH
# ============================================================================

class SessionViewState(CamelModel):
    """Transient per-client view state"""
    session_id: str = Field(..., alias="sessionId")
    city_name: str = Field(..., alias="cityName")
    center: MapCenter
    landmarks: List[LandmarkRecord] = Field(default_factory=list)
    selected_landmark: Optional[LandmarkRecord] = Field(None, alias="selectedLandmark")
    is_loading: bool = Field(False, alias="isLoading")
    language: Language = Language.ZH

    @computed_field(alias="exportFilename")
    @property
    def export_filename(self) -> str:
        return f"ink-and-atlas-{self.city_name}.png"


class SearchRequest(CamelModel):
    city: str = Field(..., min_length=1)

    @field_validator("city")
    @classmethod
    def not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("city must not be blank")
        return v


class SearchOutcome(CamelModel):
    status: SearchStatus
    source: SearchSource = SearchSource.NONE
    message: Optional[str] = None
    warning: Optional[str] = None
    error_kind: Optional[SearchErrorKind] = Field(None, alias="errorKind")
    view: SessionViewState


class SelectRequest(CamelModel):
    landmark_id: str = Field(..., alias="landmarkId")


class LanguageRequest(CamelModel):
    language: Optional[Language] = None


# ============================================================================
# DARKROOM
# ============================================================================

class DarkroomRequest(CamelModel):
    image: str = Field(..., min_length=1, description="base64 image, data URL prefix allowed")
    instruction: str = Field(..., min_length=1)


class DarkroomResponse(CamelModel):
    image: Optional[str] = None
    message: Optional[str] = None
