"""Utilidades de texto (segmentación, markup inline, overflow)."""

from .markup import (
    build_index_map,
    logical_to_storage,
    parse_runs,
    plain_text,
    serialize_runs,
    toggle_bold_at_selection,
)
from .overflow import split_overflow
from .paragraph_segmenter import ParagraphSegmenter

__all__ = [
    "build_index_map",
    "logical_to_storage",
    "parse_runs",
    "plain_text",
    "serialize_runs",
    "toggle_bold_at_selection",
    "split_overflow",
    "ParagraphSegmenter",
]
