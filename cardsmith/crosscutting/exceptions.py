# cardsmith/crosscutting/exceptions.py
"""
===============================================================================
MÓDULO: Excepciones tipadas
===============================================================================

Jerarquía:

  CardsmithError
  ├── LLMError                    proveedor de segmentación caído / rechazó
  │   └── SegmentationResponseError   payload vacío o fuera de schema
  ├── DeckInvariantError          se rompería cover → standard* → cover
  └── SegmentNotFoundError        id desconocido en la sesión

Cada instancia lleva un error_id para cruzarla con los logs. El mensaje nunca
incluye el texto del usuario.
===============================================================================
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import ClassVar
from uuid import uuid4


@dataclass(frozen=True)
class ErrorResponse:
    error_code: str
    message: str
    error_id: str

    def to_dict(self) -> dict[str, str]:
        return asdict(self)


class CardsmithError(Exception):
    error_code: ClassVar[str] = "CARDSMITH_ERROR"

    def __init__(
        self,
        message: str,
        *,
        original_error: BaseException | None = None,
        error_id: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.original_error = original_error
        self.error_id = error_id or uuid4().hex

    def to_response(self) -> ErrorResponse:
        """Vista serializable (logs, salida del CLI)."""
        return ErrorResponse(self.error_code, self.message, self.error_id)


class LLMError(CardsmithError):
    error_code: ClassVar[str] = "LLM_ERROR"


class SegmentationResponseError(LLMError):
    error_code: ClassVar[str] = "SEGMENTATION_RESPONSE_ERROR"


class DeckInvariantError(CardsmithError):
    error_code: ClassVar[str] = "DECK_INVARIANT_ERROR"


class SegmentNotFoundError(CardsmithError):
    error_code: ClassVar[str] = "SEGMENT_NOT_FOUND"
