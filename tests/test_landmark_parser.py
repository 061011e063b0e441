import json

import pytest

from ink_atlas.data_sources.errors import MalformedResponseError
from ink_atlas.data_sources.landmark_parser import parse_landmark_payload, strip_code_fences
from tests.conftest import make_landmark


def test_strip_code_fences():
    text = '```json\n[{"a": 1}]\n```'
    assert strip_code_fences(text) == '[{"a": 1}]'
    assert strip_code_fences("  []  ") == "[]"


def test_parse_array_keeps_order_and_duplicates():
    payload = json.dumps([make_landmark("A"), make_landmark("B"), make_landmark("A")])
    drafts = parse_landmark_payload(payload)
    assert [d.name.en for d in drafts] == ["A", "B", "A"]


def test_parse_unwraps_landmarks_object():
    payload = json.dumps({"landmarks": [make_landmark()]})
    assert len(parse_landmark_payload(payload)) == 1


def test_parse_empty_array():
    assert parse_landmark_payload("[]") == []


@pytest.mark.parametrize("payload", [
    "not json",
    '{"city": "Paris"}',
    '"just a string"',
    json.dumps([{"name": {"en": "x", "zh": "y"}}]),
    json.dumps([make_landmark(lat=123.0)]),
])
def test_parse_rejects_malformed_payloads(payload):
    with pytest.raises(MalformedResponseError):
        parse_landmark_payload(payload)


def test_one_bad_record_fails_the_whole_response():
    payload = json.dumps([make_landmark(), make_landmark(lng="east")])
    with pytest.raises(MalformedResponseError):
        parse_landmark_payload(payload)
