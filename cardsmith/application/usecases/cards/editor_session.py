"""
===============================================================================
CRC CARD — application/usecases/cards/editor_session.py
===============================================================================

Clase:
  EditorSession (estado explícito de edición de un deck)

Responsabilidades:
  - Guardar el deck y la última selección restaurada (sin estado reactivo
    implícito).
  - Aplicar comandos de edición (ReplaceText, ToggleBold) sobre una tarjeta.
  - Re-partir una tarjeta desbordada insertando una nueva a continuación.
  - Preservar la forma del deck (cover → standard* → cover) en cada mutación.

Colaboradores:
  - domain/entities.py (Segment, validate_deck)
  - infrastructure/text/markup.py (toggle_bold_at_selection)
  - infrastructure/text/overflow.py (split_overflow)

Notas:
  - Las tarjetas se mutan in-place; el deck solo crece por el re-split.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Literal, Mapping, Optional, Sequence, Union
from uuid import UUID

from ....crosscutting.exceptions import DeckInvariantError, SegmentNotFoundError
from ....crosscutting.logger import logger
from ....domain.entities import Segment, SegmentLayout, deck_to_payload, validate_deck
from ....domain.value_objects import Selection
from ....infrastructure.text.markup import toggle_bold_at_selection
from ....infrastructure.text.overflow import split_overflow

EditableField = Literal["title", "content"]
_FIELDS = ("title", "content")


def _check_field(field_name: str) -> None:
    if field_name not in _FIELDS:
        raise ValueError(f"field must be one of {_FIELDS}, got {field_name!r}")


@dataclass(frozen=True)
class ReplaceText:
    """Reemplaza `title` o `content` tal cual."""

    field: EditableField
    text: str

    def __post_init__(self) -> None:
        _check_field(self.field)


@dataclass(frozen=True)
class ToggleBold:
    """Alterna negrita sobre la selección `[start, end)` (storage space)."""

    field: EditableField
    start: int
    end: int

    def __post_init__(self) -> None:
        _check_field(self.field)


EditCommand = Union[ReplaceText, ToggleBold]


class EditorSession:
    """Deck en edición + última selección restaurada."""

    def __init__(self, segments: Sequence[Segment]) -> None:
        deck = list(segments)
        validate_deck(deck)
        self._segments: List[Segment] = deck
        self.selection: Optional[Selection] = None

    @classmethod
    def from_payload(cls, items: Sequence[Mapping[str, Any]]) -> "EditorSession":
        return cls([Segment.from_dict(item) for item in items])

    @property
    def segments(self) -> List[Segment]:
        return list(self._segments)

    def to_payload(self) -> List[Dict[str, Any]]:
        return deck_to_payload(self._segments)

    def get(self, segment_id: UUID) -> Segment:
        return self._segments[self._index_of(segment_id)]

    # ------------------------------------------------------------------
    # Comandos
    # ------------------------------------------------------------------

    def apply_edit(self, segment_id: UUID, command: EditCommand) -> Segment:
        """
        Aplica el comando a la tarjeta y la devuelve (mutada in-place).

        Raises:
            SegmentNotFoundError: id inexistente.
            DeckInvariantError: edición del cuerpo de una portada.
        """
        segment = self.get(segment_id)

        if command.field == "content" and segment.is_cover:
            raise DeckInvariantError("Cover segments keep an empty content")

        if isinstance(command, ReplaceText):
            setattr(segment, command.field, command.text)
            return segment

        if isinstance(command, ToggleBold):
            result = toggle_bold_at_selection(
                getattr(segment, command.field), command.start, command.end
            )
            setattr(segment, command.field, result.text)
            self.selection = result.selection
            return segment

        raise TypeError(f"Unsupported edit command: {type(command).__name__}")

    def split_overflow(self, segment_id: UUID) -> Optional[Segment]:
        """
        Re-parte una tarjeta desbordada.

        Devuelve la tarjeta nueva (insertada a continuación) o None si el
        cuerpo no se puede partir; en ese caso no se muta nada.
        """
        index = self._index_of(segment_id)
        segment = self._segments[index]
        if segment.is_cover:
            return None

        split = split_overflow(segment.content)
        if split is None:
            return None

        segment.content = split.kept
        inserted = Segment(title="", content=split.moved, layout=SegmentLayout.STANDARD)
        self._segments.insert(index + 1, inserted)

        logger.info(
            "Overflow split applied",
            extra={
                "position": index,
                "kept_chars": len(split.kept),
                "moved_chars": len(split.moved),
            },
        )
        return inserted

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _index_of(self, segment_id: UUID) -> int:
        for index, segment in enumerate(self._segments):
            if segment.id == segment_id:
                return index
        raise SegmentNotFoundError(f"Segment {segment_id} not found")
