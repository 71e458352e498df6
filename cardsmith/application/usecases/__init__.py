"""
Use Cases Layer (Business Operations)

Structure
---------
usecases/
└── cards/   # segmentación, edición y overflow de tarjetas

Usage
-----
    from cardsmith.application.usecases import SegmentTextUseCase
"""

from .cards import (
    CardError,
    CardErrorCode,
    EditorSession,
    EditSegmentResult,
    EditSegmentUseCase,
    ReplaceText,
    SegmentTextInput,
    SegmentTextResult,
    SegmentTextUseCase,
    SplitOverflowResult,
    SplitOverflowUseCase,
    ToggleBold,
)

__all__ = [
    "CardError",
    "CardErrorCode",
    "EditorSession",
    "EditSegmentResult",
    "EditSegmentUseCase",
    "ReplaceText",
    "SegmentTextInput",
    "SegmentTextResult",
    "SegmentTextUseCase",
    "SplitOverflowResult",
    "SplitOverflowUseCase",
    "ToggleBold",
]
