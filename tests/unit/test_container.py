"""
Name: Composition Root Tests

Responsibilities:
  - Factories honor Settings (fake LLM, disabled primary, fallback bounds)
"""

import pytest

from cardsmith import container
from cardsmith.infrastructure.services import FakeCardSplitter
from cardsmith.infrastructure.text import ParagraphSegmenter


@pytest.fixture(autouse=True)
def _clear_container_cache():
    container.get_card_splitter.cache_clear()
    container.get_paragraph_segmenter.cache_clear()
    yield
    container.get_card_splitter.cache_clear()
    container.get_paragraph_segmenter.cache_clear()


@pytest.mark.unit
class TestContainer:
    def test_fake_llm_uses_fake_splitter(self, monkeypatch):
        monkeypatch.setenv("FAKE_LLM", "1")

        assert isinstance(container.get_card_splitter(), FakeCardSplitter)

    def test_disabled_primary_has_no_splitter(self, monkeypatch):
        monkeypatch.setenv("PRIMARY_ENABLED", "0")

        assert container.get_card_splitter() is None

    def test_segmenter_reads_bounds(self, monkeypatch):
        monkeypatch.setenv("FAKE_LLM", "1")
        monkeypatch.setenv("MAX_SEGMENT_WORDS", "12")

        segmenter = container.get_paragraph_segmenter()

        assert isinstance(segmenter, ParagraphSegmenter)
        assert segmenter.max_words == 12

    @pytest.mark.asyncio
    async def test_offline_use_case_skips_primary(self, monkeypatch):
        monkeypatch.setenv("FAKE_LLM", "1")
        from cardsmith.application.usecases import SegmentTextInput

        use_case = container.get_segment_text_use_case(offline=True)
        result = await use_case.execute(SegmentTextInput(text="Some text."))

        assert result.strategy == "fallback"

    @pytest.mark.asyncio
    async def test_offline_use_case_needs_no_api_key(self, monkeypatch):
        monkeypatch.setenv("PRIMARY_ENABLED", "1")
        monkeypatch.setenv("FAKE_LLM", "0")
        monkeypatch.delenv("GOOGLE_API_KEY", raising=False)
        monkeypatch.setenv("MAX_SEGMENT_WORDS", "3")
        from cardsmith.application.usecases import SegmentTextInput

        use_case = container.get_segment_text_use_case(offline=True)
        result = await use_case.execute(SegmentTextInput(text="a b c.\n\nd e f."))

        assert result.strategy == "fallback"
        assert result.fallback_reason == "primary_disabled"
        assert [s.content for s in result.segments[1:-1]] == ["a b c.", "d e f."]

    def test_editor_session_from_payload(self):
        session = container.get_editor_session(
            [
                {"title": "A", "content": "", "layout": "cover"},
                {"title": "", "content": "Body."},
                {"title": "B", "content": "", "layout": "cover"},
            ]
        )

        assert len(session.segments) == 3
