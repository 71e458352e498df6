"""
===============================================================================
CARD USE CASE RESULTS (Shared Result / Error Models)
===============================================================================

Name:
    Card Use Case Results

Business Goal:
    Proveer tipos consistentes de resultados y errores para los casos de uso
    de tarjetas:
      - segmentar texto en un deck
      - editar una tarjeta (texto / negrita)
      - re-partir una tarjeta desbordada

Why (Context / Intención):
    - Los use cases devuelven resultados tipados en lugar de propagar
      excepciones para condiciones esperadas (id inexistente, no divisible).
    - El campo `resource` en CardError indica qué recurso falló.

-------------------------------------------------------------------------------
CRC CARD (Module-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Component:
    card_results models (module)

Responsibilities:
    - Definir CardErrorCode como conjunto estable de categorías de error.
    - Definir CardError como contrato mínimo de error.
    - Definir DTOs de resultados por caso de uso.

Collaborators:
    - domain.entities: Segment
    - domain.value_objects: Selection
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Literal

from ....domain.entities import Segment
from ....domain.value_objects import Selection

SegmentationStrategy = Literal["primary", "fallback"]


class CardErrorCode(str, Enum):
    """
    Categorías de error para casos de uso de tarjetas.

    Códigos:
      - VALIDATION_ERROR: input inválido/incompleto.
      - NOT_FOUND: segment_id inexistente en el deck.
      - NOT_SPLITTABLE: el cuerpo no se puede partir (vacío / 1 carácter / portada).
      - INVARIANT_VIOLATION: la operación rompería la forma del deck.
    """

    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    NOT_SPLITTABLE = "NOT_SPLITTABLE"
    INVARIANT_VIOLATION = "INVARIANT_VIOLATION"


@dataclass(frozen=True)
class CardError:
    """
    Error de caso de uso para tarjetas.

    Campos:
      - code: CardErrorCode (categoría estable)
      - message: mensaje humano (UI/logs)
      - resource: nombre del recurso afectado (opcional), ej. "Segment"
    """

    code: CardErrorCode
    message: str
    resource: str | None = None


@dataclass
class SegmentTextResult:
    """
    Resultado de segmentar texto.

    Campos:
      - segments: deck completo (portada, cuerpo, cierre).
      - strategy: "primary" (LLM) o "fallback" (párrafos).
      - fallback_reason: motivo por el que no se usó la primaria (si aplica).
      - error: error tipado si el input era inválido.
    """

    segments: List[Segment] = field(default_factory=list)
    strategy: SegmentationStrategy = "fallback"
    fallback_reason: str | None = None
    error: CardError | None = None


@dataclass
class EditSegmentResult:
    """
    Resultado de aplicar un comando de edición.

    Contrato:
      - Éxito: segment != None y error == None
      - Falla: segment == None y error != None
    """

    segment: Segment | None = None
    selection: Selection | None = None
    error: CardError | None = None


@dataclass
class SplitOverflowResult:
    """
    Resultado de re-partir una tarjeta desbordada.

    Campos:
      - segment: la tarjeta original (ya recortada).
      - inserted: la tarjeta nueva insertada a continuación.
      - error: NOT_SPLITTABLE / NOT_FOUND si no hubo cambios.
    """

    segment: Segment | None = None
    inserted: Segment | None = None
    error: CardError | None = None
