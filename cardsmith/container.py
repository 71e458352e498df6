"""
===============================================================================
TARJETA CRC — cardsmith/container.py (Composition Root / DI manual)
===============================================================================

Responsabilidades:
  - Componer dependencias (segmentadores, adapters LLM) siguiendo DIP.
  - Exponer factories para el CLI (y cualquier otro entrypoint).
  - Mantener singletons con caching (lru_cache) para recursos pesados.
  - Centralizar decisiones runtime basadas en Settings (config).

Colaboradores:
  - cardsmith.crosscutting.config.get_settings
  - cardsmith.domain.services.* (puertos)
  - cardsmith.infrastructure.* (implementaciones)
  - cardsmith.application.usecases.* (casos de uso)

Notas:
  - Este archivo NO contiene lógica de negocio.
===============================================================================
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Mapping, Sequence

from .application.usecases import (
    EditorSession,
    EditSegmentUseCase,
    SegmentTextUseCase,
    SplitOverflowUseCase,
)
from .crosscutting.config import Settings, get_settings
from .domain.services import CardSplitterService
from .infrastructure.prompts import PromptLoader
from .infrastructure.services import (
    FakeCardSplitter,
    GoogleCardSplitter,
    create_retry_decorator,
)
from .infrastructure.text import ParagraphSegmenter


def _build_paragraph_segmenter(settings: Settings) -> ParagraphSegmenter:
    return ParagraphSegmenter(
        max_words=settings.max_segment_words,
        max_chars_cjk=settings.max_segment_chars_cjk,
        header_max_chars=settings.header_max_chars,
        cjk_density=settings.cjk_density_threshold,
        default_title=settings.default_section_title,
        cover_title=settings.cover_title,
        closing_title=settings.closing_title,
    )


@lru_cache(maxsize=1)
def get_paragraph_segmenter() -> ParagraphSegmenter:
    """Fallback determinístico, configurado desde Settings."""
    return _build_paragraph_segmenter(get_settings())


@lru_cache(maxsize=1)
def get_card_splitter() -> CardSplitterService | None:
    """Estrategia primaria (fake si FAKE_LLM; None si está deshabilitada)."""
    settings = get_settings()
    if not settings.primary_enabled:
        return None
    if settings.fake_llm:
        return FakeCardSplitter()
    return GoogleCardSplitter(
        settings.google_api_key,
        model_id=settings.gemini_model_id,
        prompt_loader=PromptLoader(version=settings.prompt_version),
        retry_decorator=create_retry_decorator(
            max_attempts=settings.retry_max_attempts,
            base_delay=settings.retry_base_delay_seconds,
            max_delay=settings.retry_max_delay_seconds,
        ),
        timeout_seconds=settings.segment_timeout_seconds,
    )


def get_segment_text_use_case(*, offline: bool = False) -> SegmentTextUseCase:
    """
    `offline=True` usa solo el fallback: no construye el adapter LLM ni exige
    GOOGLE_API_KEY. Los settings se leen con la primaria apagada, sin tocar el
    entorno ni el singleton.
    """
    if offline:
        settings = Settings(primary_enabled=False)
        splitter, fallback = None, _build_paragraph_segmenter(settings)
    else:
        settings = get_settings()
        splitter, fallback = get_card_splitter(), get_paragraph_segmenter()

    return SegmentTextUseCase(
        splitter=splitter,
        fallback=fallback,
        timeout_seconds=settings.segment_timeout_seconds,
        primary_enabled=settings.primary_enabled,
        cover_title=settings.cover_title,
        closing_title=settings.closing_title,
    )


def get_editor_session(items: Sequence[Mapping[str, Any]]) -> EditorSession:
    """Sesión de edición a partir de la representación externa del deck."""
    return EditorSession.from_payload(items)


def get_edit_segment_use_case(session: EditorSession) -> EditSegmentUseCase:
    return EditSegmentUseCase(session)


def get_split_overflow_use_case(session: EditorSession) -> SplitOverflowUseCase:
    return SplitOverflowUseCase(session)
