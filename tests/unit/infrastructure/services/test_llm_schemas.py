"""
Name: Segmentation Response Schema Tests

Responsibilities:
  - Parse valid JSON payloads into segments
  - Reject empty, malformed and off-schema payloads
"""

import json

import pytest

from cardsmith.crosscutting.exceptions import SegmentationResponseError
from cardsmith.domain.entities import SegmentLayout
from cardsmith.infrastructure.services.llm.schemas import parse_split_response

pytestmark = pytest.mark.unit

_VALID = {
    "segments": [
        {"title": "Main", "content": "", "layout": "cover"},
        {"title": "Intro", "content": " Body. ", "layout": "standard"},
        {"title": "THE END", "content": "", "layout": "cover"},
    ]
}


def test_parses_valid_payload():
    segments = parse_split_response(json.dumps(_VALID))

    assert [s.layout for s in segments] == [
        SegmentLayout.COVER,
        SegmentLayout.STANDARD,
        SegmentLayout.COVER,
    ]
    assert segments[1].content == "Body."


def test_strips_code_fences():
    raw = "```json\n" + json.dumps(_VALID) + "\n```"

    assert len(parse_split_response(raw)) == 3


@pytest.mark.parametrize("raw", [None, "", "   ", "```\n```"])
def test_rejects_empty_payload(raw):
    with pytest.raises(SegmentationResponseError):
        parse_split_response(raw)


@pytest.mark.parametrize(
    "raw",
    [
        "not json",
        json.dumps({"segments": [{"title": "x", "content": "y", "layout": "grid"}]}),
        json.dumps({"segments": [{"title": "x"}]}),
        json.dumps({"cards": []}),
    ],
)
def test_rejects_malformed_payload(raw):
    with pytest.raises(SegmentationResponseError):
        parse_split_response(raw)


def test_rejects_empty_segment_list():
    with pytest.raises(SegmentationResponseError):
        parse_split_response(json.dumps({"segments": []}))
