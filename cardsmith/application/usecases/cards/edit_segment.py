"""
===============================================================================
USE CASE: Edit Segment (Replace Text / Toggle Bold)
===============================================================================

Name:
    Edit Segment Use Case

Business Goal:
    Aplicar un comando de edición a una tarjeta del deck en sesión y devolver
    la tarjeta resultante más la selección a restaurar en el editor.

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Class:
    EditSegmentUseCase

Responsibilities:
    - Delegar el comando en EditorSession.apply_edit.
    - Mapear excepciones esperadas a CardError tipado.

Collaborators:
    - EditorSession
    - card_results: EditSegmentResult / CardError / CardErrorCode

Error Mapping:
    - NOT_FOUND: segment_id inexistente.
    - INVARIANT_VIOLATION: edición del cuerpo de una portada.
===============================================================================
"""

from __future__ import annotations

from typing import Final
from uuid import UUID

from ....crosscutting.exceptions import DeckInvariantError, SegmentNotFoundError
from .card_results import CardError, CardErrorCode, EditSegmentResult
from .editor_session import EditCommand, EditorSession, ToggleBold

_RESOURCE_SEGMENT: Final[str] = "Segment"


class EditSegmentUseCase:
    """
    Use Case (Application Service / Command):
        Edita una tarjeta del deck en sesión.
    """

    def __init__(self, session: EditorSession) -> None:
        self._session = session

    def execute(self, *, segment_id: UUID, command: EditCommand) -> EditSegmentResult:
        try:
            segment = self._session.apply_edit(segment_id, command)
        except SegmentNotFoundError as exc:
            return EditSegmentResult(
                error=CardError(
                    code=CardErrorCode.NOT_FOUND,
                    message=exc.message,
                    resource=_RESOURCE_SEGMENT,
                )
            )
        except DeckInvariantError as exc:
            return EditSegmentResult(
                error=CardError(
                    code=CardErrorCode.INVARIANT_VIOLATION,
                    message=exc.message,
                    resource=_RESOURCE_SEGMENT,
                )
            )

        selection = self._session.selection if isinstance(command, ToggleBold) else None
        return EditSegmentResult(segment=segment, selection=selection)
