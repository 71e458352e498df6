"""
===============================================================================
USE CASE: Split Overflow (Re-split an overflowing card)
===============================================================================

Name:
    Split Overflow Use Case

Business Goal:
    Cuando el render detecta que el cuerpo de una tarjeta no entra, partirlo
    y mover el excedente a una tarjeta nueva insertada a continuación.

Why (Context / Intención):
    - El desborde se mide en el render (caller); acá solo se recibe la señal.
    - El caller vuelve a invocar mientras siga desbordando; cada paso
      achica la tarjeta original.

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Class:
    SplitOverflowUseCase

Responsibilities:
    - Ignorar la señal si no hay desborde.
    - Delegar en EditorSession.split_overflow.
    - Mapear "no divisible" / "no existe" a CardError tipado.

Collaborators:
    - EditorSession
    - card_results: SplitOverflowResult / CardError / CardErrorCode
===============================================================================
"""

from __future__ import annotations

from typing import Final
from uuid import UUID

from ....crosscutting.exceptions import SegmentNotFoundError
from .card_results import CardError, CardErrorCode, SplitOverflowResult
from .editor_session import EditorSession

_RESOURCE_SEGMENT: Final[str] = "Segment"
_MSG_NOT_SPLITTABLE: Final[str] = "Segment content cannot be split"


class SplitOverflowUseCase:
    """
    Use Case (Application Service / Command):
        Re-parte una tarjeta desbordada.
    """

    def __init__(self, session: EditorSession) -> None:
        self._session = session

    def execute(self, *, segment_id: UUID, overflowing: bool = True) -> SplitOverflowResult:
        try:
            segment = self._session.get(segment_id)
        except SegmentNotFoundError as exc:
            return SplitOverflowResult(
                error=CardError(
                    code=CardErrorCode.NOT_FOUND,
                    message=exc.message,
                    resource=_RESOURCE_SEGMENT,
                )
            )

        if not overflowing:
            return SplitOverflowResult(segment=segment)

        inserted = self._session.split_overflow(segment_id)
        if inserted is None:
            return SplitOverflowResult(
                segment=segment,
                error=CardError(
                    code=CardErrorCode.NOT_SPLITTABLE,
                    message=_MSG_NOT_SPLITTABLE,
                    resource=_RESOURCE_SEGMENT,
                ),
            )

        return SplitOverflowResult(segment=segment, inserted=inserted)
