"""
===============================================================================
TARJETA CRC — infrastructure/services/llm/schemas.py
===============================================================================

Módulo:
    Schema estricto de la respuesta de segmentación (pydantic)

Responsabilidades:
    - Declarar el JSON que se le exige al modelo (`response_schema`).
    - Validar la respuesta: cualquier desvío de forma => error tipado.
    - Limpiar fences ```json que algunos modelos agregan igual.

Colaboradores:
    - google_card_splitter.GoogleCardSplitter
    - crosscutting.exceptions.SegmentationResponseError
===============================================================================
"""

from __future__ import annotations

import re
from typing import List, Literal

from pydantic import BaseModel, ValidationError

from ....crosscutting.exceptions import SegmentationResponseError
from ....domain.entities import Segment, SegmentLayout

_CODE_FENCE = re.compile(r"```(?:json)?", re.IGNORECASE)


class CardSegmentPayload(BaseModel):
    """Una tarjeta tal como la devuelve el modelo."""

    title: str
    content: str
    layout: Literal["standard", "cover"]

    def to_segment(self) -> Segment:
        return Segment(
            title=self.title.strip(),
            content=self.content.strip(),
            layout=SegmentLayout(self.layout),
        )


class SplitResponse(BaseModel):
    """Secuencia de tarjetas: Title Card -> Body Cards -> End Card."""

    segments: List[CardSegmentPayload]


def parse_split_response(raw: str | None) -> List[Segment]:
    """
    Parsea el texto de la respuesta a segments.

    Raises:
        SegmentationResponseError: respuesta vacía, JSON inválido, schema
            inválido o lista de segments vacía.
    """
    payload = _CODE_FENCE.sub("", raw or "").strip()
    if not payload:
        raise SegmentationResponseError("Empty response from segmentation model")

    try:
        parsed = SplitResponse.model_validate_json(payload)
    except ValidationError as exc:
        raise SegmentationResponseError(
            "Segmentation response does not match the schema", original_error=exc
        ) from exc

    if not parsed.segments:
        raise SegmentationResponseError("Segmentation response has no segments")

    return [item.to_segment() for item in parsed.segments]
