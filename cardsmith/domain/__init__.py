"""
===============================================================================
TARJETA CRC — domain/__init__.py
===============================================================================

Módulo:
    Exportaciones de la Capa de Dominio

Reglas:
    - Solo re-exporta contratos/entidades del dominio.
    - No importar infraestructura aquí.
===============================================================================
"""

from .deck_policy import clean_title, normalize_primary_deck, strip_title_line
from .entities import (
    Segment,
    SegmentLayout,
    TextRun,
    deck_to_payload,
    validate_deck,
)
from .services import CardSplitterService, SegmenterService
from .value_objects import OverflowSplit, Selection, ToggleResult

__all__ = [
    "clean_title",
    "normalize_primary_deck",
    "strip_title_line",
    "Segment",
    "SegmentLayout",
    "TextRun",
    "deck_to_payload",
    "validate_deck",
    "CardSplitterService",
    "SegmenterService",
    "OverflowSplit",
    "Selection",
    "ToggleResult",
]
