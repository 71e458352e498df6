"""
===============================================================================
USE CASE: Segment Text (Raw Text -> Deck of Cards)
===============================================================================

Name:
    Segment Text Use Case

Business Goal:
    Convertir un texto crudo en un deck de tarjetas listo para editar:
      - intenta la estrategia primaria (LLM) con timeout
      - ante cualquier falla cae a la estrategia determinística (párrafos)
      - el caller siempre recibe un deck válido

Why (Context / Intención):
    - El LLM da mejores cortes y títulos, pero puede fallar, demorar o
      devolver basura; el usuario nunca debe quedarse sin deck.
    - La salida del LLM se repara con la misma política del deck que cumple
      el fallback (portadas vacías, cuerpo standard, sin título repetido).

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Class:
    SegmentTextUseCase

Responsibilities:
    - Validar input.
    - Ejecutar la primaria bajo asyncio.wait_for(timeout).
    - Normalizar el deck primario (normalize_primary_deck).
    - Caer al ParagraphSegmenter ante error / timeout / cancelación interna.
    - Devolver SegmentTextResult con la estrategia usada y el motivo.

Collaborators:
    - domain.services.CardSplitterService (primaria)
    - domain.services.SegmenterService (fallback: ParagraphSegmenter)
    - domain.deck_policy.normalize_primary_deck
    - crosscutting.logger

-------------------------------------------------------------------------------
INPUTS / OUTPUTS (Contrato del caso de uso)
-------------------------------------------------------------------------------
Inputs:
    SegmentTextInput:
      - text: str
      - title: Optional[str] (título de portada para este texto)

Outputs:
    SegmentTextResult:
      - segments, strategy, fallback_reason, error

Error Mapping:
    - VALIDATION_ERROR: text no es str.
    - Las fallas de la primaria NO son errores: se registran y se usa fallback.
===============================================================================
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Final, List, Optional

from ....crosscutting.exceptions import CardsmithError
from ....crosscutting.logger import logger
from ....domain.deck_policy import normalize_primary_deck
from ....domain.entities import Segment
from ....domain.services import CardSplitterService, SegmenterService
from .card_results import CardError, CardErrorCode, SegmentTextResult

_DEFAULT_TIMEOUT_SECONDS: Final[float] = 30.0
_DEFAULT_COVER_TITLE: Final[str] = "Project Text"
_DEFAULT_CLOSING_TITLE: Final[str] = "The End"

_MSG_TEXT_REQUIRED: Final[str] = "text must be a string"

# Motivos de fallback (valores estables para logs / resultado).
REASON_DISABLED: Final[str] = "primary_disabled"
REASON_EMPTY_INPUT: Final[str] = "empty_input"
REASON_TIMEOUT: Final[str] = "timeout"
REASON_CANCELLED: Final[str] = "cancelled"
REASON_ERROR: Final[str] = "error"


@dataclass(frozen=True)
class SegmentTextInput:
    """
    DTO de entrada para SegmentText.

    Attributes:
        text: Texto crudo a segmentar.
        title: Título de portada (si None se usa el configurado).
    """

    text: str
    title: Optional[str] = None


class SegmentTextUseCase:
    """
    Use Case (Application Service / Orchestration):
        Segmenta texto con estrategia primaria + fallback determinístico.
    """

    def __init__(
        self,
        splitter: CardSplitterService | None,
        fallback: SegmenterService,
        *,
        timeout_seconds: float = _DEFAULT_TIMEOUT_SECONDS,
        primary_enabled: bool = True,
        cover_title: str = _DEFAULT_COVER_TITLE,
        closing_title: str = _DEFAULT_CLOSING_TITLE,
    ) -> None:
        if timeout_seconds <= 0:
            raise ValueError(f"timeout_seconds debe ser > 0, got {timeout_seconds}")
        self._splitter = splitter
        self._fallback = fallback
        self._timeout_seconds = timeout_seconds
        self._primary_enabled = primary_enabled
        self._cover_title = cover_title
        self._closing_title = closing_title

    async def execute(self, input_data: SegmentTextInput) -> SegmentTextResult:
        if not isinstance(input_data.text, str):
            return SegmentTextResult(
                error=CardError(
                    code=CardErrorCode.VALIDATION_ERROR,
                    message=_MSG_TEXT_REQUIRED,
                    resource="Text",
                )
            )

        # ---------------------------------------------------------------------
        # 1) ¿Corresponde intentar la primaria?
        # ---------------------------------------------------------------------
        if not self._primary_enabled or self._splitter is None:
            return self._run_fallback(input_data, REASON_DISABLED)
        if not input_data.text.strip():
            return self._run_fallback(input_data, REASON_EMPTY_INPUT)

        # ---------------------------------------------------------------------
        # 2) Primaria con timeout. Cualquier falla => fallback.
        # ---------------------------------------------------------------------
        try:
            segments = await asyncio.wait_for(
                self._splitter.split_into_segments(input_data.text),
                timeout=self._timeout_seconds,
            )
            deck = normalize_primary_deck(
                segments,
                cover_title=input_data.title or self._cover_title,
                closing_title=self._closing_title,
            )
        except asyncio.TimeoutError as exc:
            self._log_primary_failure(REASON_TIMEOUT, exc)
            return self._run_fallback(input_data, REASON_TIMEOUT)
        except asyncio.CancelledError as exc:
            # Si cancelan al propio caso de uso, la cancelación se propaga.
            task = asyncio.current_task()
            if task is not None and task.cancelling():
                raise
            self._log_primary_failure(REASON_CANCELLED, exc)
            return self._run_fallback(input_data, REASON_CANCELLED)
        except Exception as exc:
            self._log_primary_failure(REASON_ERROR, exc)
            return self._run_fallback(input_data, REASON_ERROR)

        if input_data.title:
            deck[0].title = input_data.title

        logger.info(
            "Segmentation completed",
            extra={"strategy": "primary", "segments": len(deck)},
        )
        return SegmentTextResult(segments=deck, strategy="primary")

    # =========================================================================
    # Helpers privados
    # =========================================================================

    def _run_fallback(
        self, input_data: SegmentTextInput, reason: str
    ) -> SegmentTextResult:
        segments: List[Segment] = self._fallback.segment(
            input_data.text, title=input_data.title
        )
        logger.info(
            "Segmentation completed",
            extra={
                "strategy": "fallback",
                "fallback_reason": reason,
                "segments": len(segments),
            },
        )
        return SegmentTextResult(
            segments=segments, strategy="fallback", fallback_reason=reason
        )

    @staticmethod
    def _log_primary_failure(reason: str, exc: BaseException) -> None:
        extra = {"reason": reason, "error_type": type(exc).__name__}
        if isinstance(exc, CardsmithError):
            response = exc.to_response()
            extra.update(error_code=response.error_code, error_id=response.error_id)
        logger.warning("Primary segmentation failed, using fallback", extra=extra)
