"""
Name: Google Gemini Card Splitter (Adapter)

Qué hace
--------
Implementa `domain.services.CardSplitterService` con Gemini (cliente async
de google-genai): prompt versionado -> JSON con `response_schema` ->
`Segment`s. Los errores transitorios se reintentan con tenacity.

CRC
---
Class: GoogleCardSplitter
Responsibilities:
  - Pedir la segmentación al modelo y parsear la respuesta
  - Envolver fallas del SDK en LLMError (el payload inválido ya llega como
    SegmentationResponseError desde schemas)
Collaborators:
  - PromptLoader, schemas.parse_split_response, retry.create_retry_decorator
  - google.genai.Client (`client.aio.models.generate_content`)
Constraints:
  - CancelledError atraviesa el adapter tal cual (ni se envuelve ni se
    reintenta): el caso de uso la traduce a fallback.
  - El deck crudo se devuelve sin normalizar.
"""

from __future__ import annotations

import asyncio
import os
from typing import Any, Callable, List, Optional

from google import genai
from google.genai import types

from ....crosscutting.exceptions import LLMError
from ....crosscutting.logger import logger
from ....domain.entities import Segment
from ...prompts import PromptLoader, get_prompt_loader
from ..retry import create_retry_decorator
from .schemas import SplitResponse, parse_split_response


def _build_client(api_key: str, timeout_seconds: float | None) -> genai.Client:
    options = None
    if timeout_seconds:
        # HttpOptions.timeout va en milisegundos.
        options = types.HttpOptions(timeout=int(timeout_seconds * 1000))
    return genai.Client(api_key=api_key, http_options=options)


class GoogleCardSplitter:
    """Gemini-backed CardSplitterService."""

    DEFAULT_MODEL_ID = "gemini-3-flash-preview"

    def __init__(
        self,
        api_key: str | None = None,
        *,
        client: genai.Client | None = None,
        model_id: str | None = None,
        prompt_loader: Optional[PromptLoader] = None,
        retry_decorator: Optional[Callable[[Callable[..., Any]], Callable[..., Any]]] = None,
        timeout_seconds: float | None = None,
    ) -> None:
        """
        `client` replaces the SDK client (tests); otherwise one is built from
        `api_key` or GOOGLE_API_KEY. Raises LLMError when neither exists.
        """
        if client is None:
            key = (api_key or os.getenv("GOOGLE_API_KEY") or "").strip()
            if not key:
                logger.error("Gemini splitter requested without an API key")
                raise LLMError("GOOGLE_API_KEY not configured")
            client = _build_client(key, timeout_seconds)

        self._client = client
        self._model_id = (model_id or self.DEFAULT_MODEL_ID).strip()
        self._prompt_loader = prompt_loader or get_prompt_loader()
        self._request_config = types.GenerateContentConfig(
            response_mime_type="application/json",
            response_schema=SplitResponse,
        )

        with_retry = retry_decorator or create_retry_decorator()
        self._generate = with_retry(self._client.aio.models.generate_content)

        logger.info("Gemini splitter ready", extra=self._log_context())

    @property
    def model_id(self) -> str:
        return self._model_id

    @property
    def prompt_version(self) -> str:
        return self._prompt_loader.version

    def _log_context(self, **extra: Any) -> dict[str, Any]:
        return {"model_id": self._model_id, "prompt_version": self.prompt_version, **extra}

    async def split_into_segments(self, text: str) -> List[Segment]:
        """
        Raw deck for `text` as returned by the model.

        Raises LLMError (blank input, provider failure) or
        SegmentationResponseError (empty or off-schema payload).
        """
        if not (text or "").strip():
            raise LLMError("Text must not be empty")

        try:
            response = await self._generate(
                model=self._model_id,
                contents=self._prompt_loader.format(text=text),
                config=self._request_config,
            )
        except (asyncio.CancelledError, LLMError):
            raise
        except Exception as exc:
            logger.error(
                "Gemini segmentation request failed",
                exc_info=True,
                extra=self._log_context(error_type=type(exc).__name__),
            )
            raise LLMError("Failed to split text into cards", original_error=exc) from exc

        segments = parse_split_response(getattr(response, "text", None))
        logger.info(
            "Gemini segmentation completed",
            extra=self._log_context(segments=len(segments), input_chars=len(text)),
        )
        return segments
