import math

import pytest
from pydantic import ValidationError

from ink_atlas.constants.catalog import CATALOG, get_city, list_cities
from ink_atlas.models.schemas import (
    AIProvider,
    AISettings,
    LandmarkDraft,
    Language,
    LocalizedText,
    MapCenter,
    SessionViewState,
)
from tests.conftest import make_landmark


def test_localized_text_resolve_falls_back_to_english():
    text = LocalizedText(en="Lido", zh="")
    assert text.resolve(Language.ZH) == "Lido"
    assert text.resolve(Language.EN) == "Lido"
    assert LocalizedText(en="", zh="").resolve(Language.ZH) == ""


def test_localized_text_requires_both_keys():
    with pytest.raises(ValidationError):
        LocalizedText.model_validate({"en": "Only English"})


def test_landmark_accepts_camel_case_wire_format():
    draft = LandmarkDraft.model_validate(make_landmark())
    assert draft.book_title.en == "A Moveable Feast"
    assert draft.traveler_note.zh == "去楼上看看。"
    dumped = draft.model_dump(by_alias=True)
    assert "bookTitle" in dumped and "travelerNote" in dumped


@pytest.mark.parametrize("lat,lng", [(91.0, 0.0), (-90.5, 0.0), (0.0, 180.5), (math.nan, 0.0), (0.0, math.inf)])
def test_landmark_rejects_bad_coordinates(lat, lng):
    with pytest.raises(ValidationError):
        LandmarkDraft.model_validate(make_landmark(lat=lat, lng=lng))


def test_landmark_requires_english_headline_text():
    data = make_landmark()
    data["author"] = {"en": "", "zh": "佚名"}
    with pytest.raises(ValidationError):
        LandmarkDraft.model_validate(data)


def test_landmark_keeps_at_most_two_reviews():
    draft = LandmarkDraft.model_validate(make_landmark(reviews=["a", "b", "c"]))
    assert draft.reviews == ["a", "b"]


def test_ai_settings_defaults_and_credentials():
    settings = AISettings.model_validate({"provider": "openai", "openaiKey": "sk-1"})
    assert settings.gemini_key == ""
    assert settings.deepseek_key == ""
    assert settings.credential_for(AIProvider.OPENAI) == "sk-1"
    assert settings.has_usable_credential()


def test_credential_check_is_provider_specific():
    settings = AISettings(provider=AIProvider.DEEPSEEK, gemini_key="g", openai_key="o")
    assert not settings.has_usable_credential()
    assert not AISettings(provider=AIProvider.GEMINI, gemini_key="   ").has_usable_credential()


def test_view_export_filename():
    view = SessionViewState(session_id="s", city_name="Lisbon", center=MapCenter(lat=0, lng=0))
    assert view.export_filename == "ink-and-atlas-Lisbon.png"
    assert view.model_dump(by_alias=True)["exportFilename"] == "ink-and-atlas-Lisbon.png"


def test_catalog_lookup_is_case_insensitive():
    assert get_city("LONDON") is CATALOG["london"]
    assert get_city("  Florence ") is CATALOG["florence"]
    assert get_city("Atlantis") is None


def test_catalog_london_entry():
    london = CATALOG["london"]
    assert (london.lat, london.lng) == (51.5074, -0.1278)
    assert [loc.name.en for loc in london.locations] == ["221B Baker Street", "The British Museum"]
    assert london.name.resolve(Language.ZH) == "伦敦"


def test_list_cities_summaries():
    summaries = {summary.key: summary for summary in list_cities()}
    assert set(summaries) == {"london", "florence", "venice", "rome", "naples"}
    assert summaries["venice"].landmark_count == 1
    assert (summaries["london"].center.lat, summaries["london"].center.lng) == (51.5074, -0.1278)
