"""
===============================================================================
TARJETA CRC — domain/services.py
===============================================================================

Módulo:
    Puertos de Servicios Externos (Protocols)

Responsabilidades:
    - Definir el contrato de la estrategia primaria de segmentación (LLM).
    - Definir el contrato de la estrategia determinística (fallback).
    - Mantener el dominio independiente de SDKs.

Colaboradores:
    - infrastructure/services/llm/*: implementaciones del splitter.
    - infrastructure/text/paragraph_segmenter.py: implementación del fallback.
    - application/usecases/cards: consumen estos puertos.

Reglas:
    - SOLO interfaces: nada de implementación.
===============================================================================
"""

from __future__ import annotations

from typing import List, Optional, Protocol

from .entities import Segment


class CardSplitterService(Protocol):
    """Contrato para segmentar texto con un modelo de lenguaje."""

    async def split_into_segments(self, text: str) -> List[Segment]:
        """
        Devuelve el deck completo (cover, body..., cover).

        Cualquier falla (red, timeout, payload inválido) se propaga como
        excepción; el caso de uso decide el fallback.
        """
        ...


class SegmenterService(Protocol):
    """Contrato para segmentar texto sin IO (nunca falla)."""

    def segment(self, text: str, *, title: Optional[str] = None) -> List[Segment]: ...
