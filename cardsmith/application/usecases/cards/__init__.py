"""
Card Use Cases

Segmentación de texto en decks, edición de tarjetas y re-split por overflow.
"""

from .card_results import (
    CardError,
    CardErrorCode,
    EditSegmentResult,
    SegmentTextResult,
    SplitOverflowResult,
)
from .edit_segment import EditSegmentUseCase
from .editor_session import EditCommand, EditorSession, ReplaceText, ToggleBold
from .segment_text import SegmentTextInput, SegmentTextUseCase
from .split_overflow import SplitOverflowUseCase

__all__ = [
    "CardError",
    "CardErrorCode",
    "EditSegmentResult",
    "SegmentTextResult",
    "SplitOverflowResult",
    "EditSegmentUseCase",
    "EditCommand",
    "EditorSession",
    "ReplaceText",
    "ToggleBold",
    "SegmentTextInput",
    "SegmentTextUseCase",
    "SplitOverflowUseCase",
]
