"""
===============================================================================
TARJETA CRC — domain/entities.py
===============================================================================

Módulo:
    Entidades del Dominio (Segment, SegmentLayout, TextRun)

Responsabilidades:
    - Definir la unidad "una tarjeta" (Segment) y su forma externa.
    - Definir el run de markup inline (TextRun).
    - Validar la forma del deck (cover → standard* → cover).

Colaboradores:
    - infrastructure/text: produce/consume segments y runs.
    - application/usecases/cards: mutan segments vía comandos.

Principios:
    - Sin dependencias a SDKs.
    - Campos de presentación (imagen, posición) son passthrough opaco.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Sequence
from uuid import UUID, uuid4

from ..crosscutting.exceptions import DeckInvariantError

# Claves de la representación externa que sí interpretamos.
_CORE_KEYS = frozenset({"title", "content", "layout"})


class SegmentLayout(str, Enum):
    """Layout de una tarjeta."""

    STANDARD = "standard"
    COVER = "cover"


# ---------------------------------------------------------------------------
# Segment
# ---------------------------------------------------------------------------


@dataclass
class Segment:
    """
    Una tarjeta: título + cuerpo con markup `**bold**` + layout.

    Importante:
      - `content` es texto raw (storage space, incluye marcadores).
      - `extras` guarda campos de presentación (image, imageConfig, ...) que
        el core no interpreta; se devuelven tal cual en `to_dict()`.
    """

    title: str
    content: str = ""
    layout: SegmentLayout = SegmentLayout.STANDARD
    id: UUID = field(default_factory=uuid4)
    extras: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def cover(cls, title: str) -> "Segment":
        """Tarjeta de portada o cierre (sin cuerpo)."""
        return cls(title=title, content="", layout=SegmentLayout.COVER)

    @property
    def is_cover(self) -> bool:
        return self.layout == SegmentLayout.COVER

    def to_dict(self) -> Dict[str, Any]:
        """Serializa a la representación externa `{title, content, layout}`."""
        return {
            **self.extras,
            "title": self.title,
            "content": self.content,
            "layout": self.layout.value,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Segment":
        """
        Construye desde la representación externa.

        `layout` ausente se interpreta como "standard" (igual que el renderer).
        """
        extras = {k: v for k, v in data.items() if k not in _CORE_KEYS}
        return cls(
            title=str(data.get("title") or ""),
            content=str(data.get("content") or ""),
            layout=SegmentLayout(data.get("layout") or SegmentLayout.STANDARD.value),
            extras=extras,
        )


def validate_deck(segments: Sequence[Segment]) -> None:
    """
    Verifica la forma del deck.

    Reglas:
      - al menos dos elementos
      - primero y último: cover con content ""
      - el resto: standard
    """
    if len(segments) < 2:
        raise DeckInvariantError("A deck needs a leading and a trailing cover")

    for position in (0, len(segments) - 1):
        edge = segments[position]
        if not edge.is_cover or edge.content:
            raise DeckInvariantError(
                f"Segment at position {position} must be an empty cover"
            )

    for segment in segments[1:-1]:
        if segment.is_cover:
            raise DeckInvariantError("Body segments must use the standard layout")


def deck_to_payload(segments: Sequence[Segment]) -> List[Dict[str, Any]]:
    """Serializa un deck completo a su forma externa (lista de dicts)."""
    return [segment.to_dict() for segment in segments]


# ---------------------------------------------------------------------------
# TextRun
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TextRun:
    """Tramo máximo de texto con un mismo valor de negrita."""

    text: str
    bold: bool = False
