"""Adapters de segmentación con LLM (Gemini + fake determinista)."""

from .fake_card_splitter import FakeCardSplitter
from .google_card_splitter import GoogleCardSplitter
from .schemas import CardSegmentPayload, SplitResponse, parse_split_response

__all__ = [
    "FakeCardSplitter",
    "GoogleCardSplitter",
    "CardSegmentPayload",
    "SplitResponse",
    "parse_split_response",
]
