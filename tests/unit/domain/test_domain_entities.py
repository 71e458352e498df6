"""
Name: Domain Entities Unit Tests

Responsibilities:
  - Test Segment creation, serialization and deck validation
  - Test value objects (Selection, ToggleResult)

Collaborators:
  - cardsmith.domain.entities
  - cardsmith.domain.value_objects
"""

import pytest

from cardsmith.crosscutting.exceptions import DeckInvariantError
from cardsmith.domain.entities import (
    Segment,
    SegmentLayout,
    TextRun,
    deck_to_payload,
    validate_deck,
)
from cardsmith.domain.value_objects import Selection, ToggleResult


@pytest.mark.unit
class TestSegment:
    """Test suite for Segment entity."""

    def test_defaults_to_standard_layout(self):
        """R: Should default to standard layout with empty content."""
        segment = Segment(title="Intro")

        assert segment.layout == SegmentLayout.STANDARD
        assert segment.content == ""
        assert segment.extras == {}
        assert not segment.is_cover

    def test_cover_factory(self):
        """R: Should build an empty cover segment."""
        cover = Segment.cover("The End")

        assert cover.is_cover
        assert cover.title == "The End"
        assert cover.content == ""

    def test_ids_are_unique(self):
        """R: Should assign a distinct id to each segment."""
        assert Segment(title="a").id != Segment(title="a").id

    def test_to_dict_includes_extras(self):
        """R: Should serialize core fields plus passthrough extras."""
        segment = Segment(title="T", content="c", extras={"image": "x.png"})

        assert segment.to_dict() == {
            "image": "x.png",
            "title": "T",
            "content": "c",
            "layout": "standard",
        }

    def test_from_dict_keeps_unknown_keys(self):
        """R: Should keep presentation fields in extras."""
        segment = Segment.from_dict(
            {"title": "T", "content": "c", "layout": "cover", "imageConfig": {"x": 1}}
        )

        assert segment.layout == SegmentLayout.COVER
        assert segment.extras == {"imageConfig": {"x": 1}}

    def test_from_dict_missing_layout_is_standard(self):
        """R: Should read a missing layout as standard."""
        segment = Segment.from_dict({"title": "T", "content": "c"})

        assert segment.layout == SegmentLayout.STANDARD

    def test_from_dict_rejects_unknown_layout(self):
        """R: Should reject layouts other than standard/cover."""
        with pytest.raises(ValueError):
            Segment.from_dict({"title": "T", "layout": "grid"})


@pytest.mark.unit
class TestValidateDeck:
    """Test suite for deck shape validation."""

    def test_accepts_valid_deck(self, sample_deck):
        """R: Should accept cover, standard*, cover."""
        validate_deck(sample_deck)

    def test_accepts_covers_only(self):
        """R: Should accept a deck with no body segments."""
        validate_deck([Segment.cover("A"), Segment.cover("B")])

    def test_rejects_short_deck(self):
        """R: Should reject decks shorter than two elements."""
        with pytest.raises(DeckInvariantError):
            validate_deck([Segment.cover("A")])

    def test_rejects_cover_with_content(self):
        """R: Should reject a cover that carries body text."""
        deck = [Segment(title="A", content="x", layout=SegmentLayout.COVER), Segment.cover("B")]

        with pytest.raises(DeckInvariantError):
            validate_deck(deck)

    def test_rejects_standard_edge(self):
        """R: Should reject a deck that does not start with a cover."""
        with pytest.raises(DeckInvariantError):
            validate_deck([Segment(title="A", content="x"), Segment.cover("B")])

    def test_rejects_cover_in_body(self):
        """R: Should reject a cover in the middle of the deck."""
        deck = [Segment.cover("A"), Segment.cover("Mid"), Segment.cover("B")]

        with pytest.raises(DeckInvariantError):
            validate_deck(deck)

    def test_deck_to_payload(self, sample_deck):
        """R: Should serialize every segment in order."""
        payload = deck_to_payload(sample_deck)

        assert [item["layout"] for item in payload] == [
            "cover",
            "standard",
            "standard",
            "cover",
        ]


@pytest.mark.unit
class TestValueObjects:
    """Test suite for Selection and ToggleResult."""

    def test_selection_clamp_orders_and_bounds(self):
        """R: Should order reversed offsets and clamp to the text length."""
        assert Selection(9, -3).clamp(5) == Selection(0, 5)

    def test_selection_cursor(self):
        """R: Should detect a zero-width selection."""
        assert Selection(2, 2).is_cursor
        assert not Selection(2, 3).is_cursor

    def test_toggle_result_selection(self):
        """R: Should expose the restored selection."""
        assert ToggleResult("**a**", 2, 3).selection == Selection(2, 3)

    def test_text_run_is_frozen(self):
        """R: Should be immutable."""
        run = TextRun("a", bold=True)

        with pytest.raises(AttributeError):
            run.text = "b"
