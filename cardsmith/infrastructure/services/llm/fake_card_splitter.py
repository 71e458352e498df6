"""
Name: Fake Card Splitter (Deterministic Test Double)

Qué es
------
Implementación determinista de `domain.services.CardSplitterService` para
tests/CI/modo offline. No realiza IO y permite simular:
  - respuestas válidas (una tarjeta por párrafo)
  - fallas del proveedor (`fail_with`)
  - latencia (`delay_seconds`) para ejercitar timeout/cancelación
  - payloads crudos (`raw_response`) que pasan por el mismo parser que Gemini

CRC (Class-Responsibility-Collaboration)
----------------------------------------
Class: FakeCardSplitter
Responsibilities:
  - Generar decks deterministas para el mismo input
  - Registrar las llamadas recibidas (asserts en tests)
Collaborators:
  - domain.entities.Segment
  - schemas.parse_split_response
Constraints:
  - Sin IO / sin dependencias externas
"""

from __future__ import annotations

import asyncio
import hashlib
import re
from typing import List, Optional

from ....crosscutting.exceptions import LLMError
from ....crosscutting.logger import logger
from ....domain.entities import Segment, SegmentLayout
from .schemas import parse_split_response

_PARAGRAPH_BREAK = re.compile(r"\n\s*\n")


def _fake_title(text: str) -> str:
    """R: Título estable derivado del contenido (firma corta)."""
    digest = hashlib.sha256(text.strip().encode("utf-8")).hexdigest()[:8]
    return f"Fake Title {digest}"


class FakeCardSplitter:
    """
    R: Deterministic CardSplitterService for tests/CI.
    """

    MODEL_ID = "fake-splitter-v1"
    CLOSING_TITLE = "THE END"

    def __init__(
        self,
        *,
        fail_with: Optional[BaseException] = None,
        delay_seconds: float = 0.0,
        raw_response: Optional[str] = None,
    ) -> None:
        if delay_seconds < 0:
            raise ValueError("delay_seconds must be >= 0")
        self._fail_with = fail_with
        self._delay_seconds = delay_seconds
        self._raw_response = raw_response
        self.calls: List[str] = []

        logger.debug("FakeCardSplitter initialized", extra={"model_id": self.MODEL_ID})

    @property
    def model_id(self) -> str:
        return self.MODEL_ID

    async def split_into_segments(self, text: str) -> List[Segment]:
        self.calls.append(text)

        if self._delay_seconds:
            await asyncio.sleep(self._delay_seconds)

        if self._fail_with is not None:
            raise self._fail_with

        if self._raw_response is not None:
            return parse_split_response(self._raw_response)

        if not (text or "").strip():
            raise LLMError("Text must not be empty")

        body = [
            Segment(title="", content=part.strip(), layout=SegmentLayout.STANDARD)
            for part in _PARAGRAPH_BREAK.split(text)
            if part.strip()
        ]
        return [
            Segment.cover(_fake_title(text)),
            *body,
            Segment.cover(self.CLOSING_TITLE),
        ]
