"""
Name: Paragraph Segmenter Unit Tests

Responsibilities:
  - Header promotion (no redundancy)
  - Bounded packing (words / CJK characters)
  - Title suffixes and cover wrapping
"""

import pytest

from cardsmith.domain.entities import SegmentLayout, validate_deck
from cardsmith.infrastructure.text.paragraph_segmenter import (
    ParagraphSegmenter,
    cjk_density,
    count_words,
)

pytestmark = pytest.mark.unit


def _body(segments):
    return segments[1:-1]


class TestParagraphSegmenter:
    def test_markdown_header_becomes_title(self):
        """R: "## Header\\nBody text." -> title "Header", content "Body text."."""
        segments = ParagraphSegmenter().segment("## Header\nBody text.")

        body = _body(segments)
        assert len(body) == 1
        assert body[0].title == "Header"
        assert body[0].content == "Body text."
        assert body[0].layout == SegmentLayout.STANDARD

    def test_short_unpunctuated_paragraph_is_header(self):
        segments = ParagraphSegmenter().segment("Intro\n\nSome text here.")

        body = _body(segments)
        assert [(s.title, s.content) for s in body] == [("Intro", "Some text here.")]

    def test_wraps_with_covers(self):
        segments = ParagraphSegmenter().segment("Some text.", title="My Piece")

        assert segments[0].is_cover and segments[0].title == "My Piece"
        assert segments[-1].is_cover and segments[-1].title == "The End"
        assert segments[0].content == "" and segments[-1].content == ""
        validate_deck(segments)

    def test_default_cover_title(self):
        segments = ParagraphSegmenter().segment("Some text.")

        assert segments[0].title == "Project Text"

    @pytest.mark.parametrize("text", ["", "   ", "\n\n\n"])
    def test_empty_input_yields_covers_only(self, text):
        segments = ParagraphSegmenter().segment(text)

        assert len(segments) == 2
        assert all(s.is_cover for s in segments)

    def test_no_paragraph_breaks_yields_one_body(self):
        text = "One sentence. Another sentence.\nA wrapped line."

        body = _body(ParagraphSegmenter().segment(text))

        assert len(body) == 1
        assert body[0].content == text

    def test_packs_until_bound(self):
        segmenter = ParagraphSegmenter(max_words=5)

        body = _body(segmenter.segment("one two three.\n\nfour five six.\n\nseven."))

        assert [s.content for s in body] == ["one two three.", "four five six.\n\nseven."]
        assert all(count_words(s.content) <= 5 for s in body)

    def test_oversized_block_is_kept_whole(self):
        text = " ".join(f"w{i}" for i in range(12)) + "."

        body = _body(ParagraphSegmenter(max_words=5).segment(text))

        assert len(body) == 1
        assert body[0].content == text

    def test_repeated_title_gets_suffix(self):
        text = "Chapter\n\none two three.\n\nfour five six.\n\nseven eight nine."

        body = _body(ParagraphSegmenter(max_words=3).segment(text))

        assert [s.title for s in body] == ["Chapter", "Chapter (2)", "Chapter (3)"]

    def test_untitled_segments_have_no_suffix(self):
        body = _body(ParagraphSegmenter(max_words=3).segment("a b c.\n\nd e f."))

        assert [s.title for s in body] == ["", ""]

    def test_header_followed_by_header_stays_as_text(self):
        body = _body(ParagraphSegmenter().segment("Lonely\n\nNext\n\nBody."))

        assert [(s.title, s.content) for s in body] == [("", "Lonely"), ("Next", "Body.")]

    @pytest.mark.parametrize(
        ("text", "content"),
        [
            ("Buy milk and eggs", "Buy milk and eggs"),
            ("## Only a heading", "Only a heading"),
            ("你好世界", "你好世界"),
            ("**Bold note**", "**Bold note**"),
        ],
    )
    def test_single_short_line_becomes_one_body(self, text, content):
        segments = ParagraphSegmenter().segment(text)

        body = _body(segments)
        assert [(s.title, s.content) for s in body] == [("", content)]
        assert body[0].layout == SegmentLayout.STANDARD
        validate_deck(segments)

    def test_trailing_short_line_is_kept(self):
        body = _body(ParagraphSegmenter().segment("Body text here.\n\nThanks for reading"))

        assert [s.content for s in body] == ["Body text here.\n\nThanks for reading"]

    def test_trailing_header_keeps_previous_title(self):
        text = "## Part\nBody text here.\n\n## Afterword"

        body = _body(ParagraphSegmenter(max_words=3).segment(text))

        assert [(s.title, s.content) for s in body] == [
            ("Part", "Body text here."),
            ("Part (2)", "Afterword"),
        ]

    def test_header_never_in_content(self):
        text = "# Title\nFirst.\n\n## Part Two\nSecond."

        body = _body(ParagraphSegmenter().segment(text))

        assert [s.title for s in body] == ["Title", "Part Two"]
        assert all("#" not in s.content for s in body)

    def test_list_items_are_not_headers(self):
        body = _body(ParagraphSegmenter().segment("- item one\n\n- item two"))

        assert len(body) == 1
        assert body[0].title == ""

    def test_default_section_title(self):
        body = _body(ParagraphSegmenter(default_title="Notes").segment("Text."))

        assert body[0].title == "Notes"

    def test_cjk_text_is_measured_in_characters(self):
        paragraph = "一二三四五六。"
        text = f"{paragraph}\n\n{paragraph}"

        body = _body(ParagraphSegmenter(max_chars_cjk=10).segment(text))

        assert [s.content for s in body] == [paragraph, paragraph]

    def test_cjk_density(self):
        assert cjk_density("漢字") == 1.0
        assert cjk_density("abc") == 0.0
        assert cjk_density("   ") == 0.0

    @pytest.mark.parametrize(
        "kwargs",
        [{"max_words": 0}, {"max_chars_cjk": -1}, {"header_max_chars": 0}, {"cjk_density": 1.5}],
    )
    def test_rejects_invalid_configuration(self, kwargs):
        with pytest.raises(ValueError):
            ParagraphSegmenter(**kwargs)
