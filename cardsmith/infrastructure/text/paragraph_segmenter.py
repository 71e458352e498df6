"""
===============================================================================
CRC CARD — infrastructure/text/paragraph_segmenter.py
===============================================================================

Clase:
  ParagraphSegmenter (Strategy determinística / fallback)

Responsabilidades:
  - Partir texto raw en tarjetas sin IO (nunca falla).
  - Promover headers a títulos (nunca se duplican dentro del cuerpo).
  - Empaquetar párrafos hasta un límite (palabras, o caracteres si el texto
    es denso en CJK).
  - Envolver el resultado con tarjeta de portada y de cierre.

Colaboradores:
  - domain/entities.py (Segment)
  - application/usecases/cards/segment_text.py (lo usa como fallback)

Notas:
  - Un párrafo que solo ya excede el límite se entrega sin tocar; el
    re-split por overflow (infrastructure/text/overflow.py) lo resuelve al
    renderizar.
===============================================================================
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Final, Optional

from ...crosscutting.logger import logger
from ...domain.deck_policy import clean_title, is_markdown_header
from ...domain.entities import Segment, SegmentLayout

# Detectores (simples y determinísticos)
_PARAGRAPH_BREAK: Final[re.Pattern] = re.compile(r"\n\s*\n")
_LIST_ITEM: Final[re.Pattern] = re.compile(r"^\s*(?:[-*+>]\s|\d+[.)]\s)")
_CJK: Final[re.Pattern] = re.compile(
    "[\u3040-\u30ff\u3400-\u4dbf\u4e00-\u9fff\uac00-\ud7af\uf900-\ufaff]"
)

_TERMINAL_PUNCTUATION: Final[frozenset[str]] = frozenset(".!?:;。！？…")
_BLOCK_SEPARATOR: Final[str] = "\n\n"

DEFAULT_MAX_WORDS: Final[int] = 80
DEFAULT_MAX_CHARS_CJK: Final[int] = 160
DEFAULT_HEADER_MAX_CHARS: Final[int] = 40
DEFAULT_CJK_DENSITY: Final[float] = 0.3
DEFAULT_COVER_TITLE: Final[str] = "Project Text"
DEFAULT_CLOSING_TITLE: Final[str] = "The End"


@dataclass(frozen=True)
class _Block:
    text: str
    is_header: bool = False
    source: str = ""  # texto original del header (sin `#`)


def count_words(text: str) -> int:
    return len(text.split())


def count_chars(text: str) -> int:
    return len(text)


def cjk_density(text: str) -> float:
    """Proporción de caracteres CJK sobre los caracteres no-espacio."""
    visible = [c for c in text if not c.isspace()]
    if not visible:
        return 0.0
    cjk = sum(1 for c in visible if _CJK.match(c))
    return cjk / len(visible)


class ParagraphSegmenter:
    """
    Segmentador por párrafos.

    Parámetros:
      - max_words: límite del cuerpo en palabras (texto no-CJK)
      - max_chars_cjk: límite del cuerpo en caracteres (texto denso en CJK)
      - header_max_chars: un párrafo más corto que esto y sin puntuación
        final se considera header
      - cjk_density: umbral para medir en caracteres en vez de palabras
    """

    def __init__(
        self,
        max_words: int = DEFAULT_MAX_WORDS,
        max_chars_cjk: int = DEFAULT_MAX_CHARS_CJK,
        header_max_chars: int = DEFAULT_HEADER_MAX_CHARS,
        cjk_density: float = DEFAULT_CJK_DENSITY,
        *,
        default_title: str = "",
        cover_title: str = DEFAULT_COVER_TITLE,
        closing_title: str = DEFAULT_CLOSING_TITLE,
    ) -> None:
        if max_words <= 0:
            raise ValueError(f"max_words debe ser > 0, got {max_words}")
        if max_chars_cjk <= 0:
            raise ValueError(f"max_chars_cjk debe ser > 0, got {max_chars_cjk}")
        if header_max_chars <= 0:
            raise ValueError(f"header_max_chars debe ser > 0, got {header_max_chars}")
        if not 0 <= cjk_density <= 1:
            raise ValueError("cjk_density debe estar entre 0 y 1")

        self.max_words = max_words
        self.max_chars_cjk = max_chars_cjk
        self.header_max_chars = header_max_chars
        self.cjk_density = cjk_density
        self.default_title = default_title
        self.cover_title = cover_title
        self.closing_title = closing_title

    def segment(self, text: str, *, title: Optional[str] = None) -> list[Segment]:
        raw = (text or "").strip()
        measure, bound = self.measure_for(raw)

        body = self._pack(self._blocks(raw), measure, bound)

        logger.info(
            "Fallback segmentation completed",
            extra={
                "body_segments": len(body),
                "bound": bound,
                "unit": "chars" if measure is count_chars else "words",
            },
        )

        return [
            Segment.cover(title or self.cover_title),
            *body,
            Segment.cover(self.closing_title),
        ]

    def measure_for(self, text: str) -> tuple[Callable[[str], int], int]:
        """Unidad de medida + límite, decididos una vez por input."""
        if text and cjk_density(text) >= self.cjk_density:
            return count_chars, self.max_chars_cjk
        return count_words, self.max_words

    # ---------------------------------------------------------------------
    # Helpers
    # ---------------------------------------------------------------------

    def is_header(self, paragraph: str) -> bool:
        """Corto y sin puntuación final => header (o header markdown explícito)."""
        text = paragraph.strip()
        if not text:
            return False
        if is_markdown_header(text):
            return True
        if "\n" in text or _LIST_ITEM.match(text):
            return False
        if len(text) >= self.header_max_chars:
            return False
        return not any(c in _TERMINAL_PUNCTUATION for c in text)

    def _blocks(self, raw: str) -> list[_Block]:
        """
        Párrafos separados por línea en blanco; dentro de cada uno, las líneas
        de header markdown se separan como bloque propio.

        Un header sin cuerpo detrás (seguido de otro header o al final) se
        degrada a texto: queda como cuerpo bajo el título vigente.
        """
        blocks: list[_Block] = []
        for paragraph in _PARAGRAPH_BREAK.split(raw):
            pending: list[str] = []
            for line in paragraph.strip().split("\n"):
                if is_markdown_header(line):
                    self._add_block(blocks, pending)
                    pending = []
                    source = line.strip().strip("#").strip()
                    blocks.append(_Block(clean_title(line), is_header=True, source=source))
                else:
                    pending.append(line)
            self._add_block(blocks, pending)

        for i, block in enumerate(blocks):
            followed_by_body = i + 1 < len(blocks) and not blocks[i + 1].is_header
            if block.is_header and not followed_by_body:
                logger.debug("Header without body kept as text", extra={"header": block.text})
                blocks[i] = _Block(block.source or block.text)
        return blocks

    def _add_block(self, blocks: list[_Block], lines: list[str]) -> None:
        paragraph = "\n".join(lines).strip()
        if paragraph:
            blocks.append(self._classify(paragraph))

    def _classify(self, paragraph: str) -> _Block:
        text = paragraph.strip()
        if self.is_header(text):
            return _Block(clean_title(text), is_header=True, source=text)
        return _Block(text)

    def _pack(
        self, blocks: list[_Block], measure: Callable[[str], int], bound: int
    ) -> list[Segment]:
        segments: list[Segment] = []
        buffer: list[str] = []
        context = self.default_title
        produced = 0  # segmentos ya emitidos con el contexto actual

        def flush() -> None:
            nonlocal buffer, produced
            if not buffer:
                return
            segment_title = context
            if produced and context:
                segment_title = f"{context} ({produced + 1})"
            segments.append(
                Segment(
                    title=segment_title,
                    content=_BLOCK_SEPARATOR.join(buffer),
                    layout=SegmentLayout.STANDARD,
                )
            )
            produced += 1
            buffer = []

        for block in blocks:
            if block.is_header:
                flush()
                context = block.text
                produced = 0
                continue

            candidate = _BLOCK_SEPARATOR.join([*buffer, block.text])
            if buffer and measure(candidate) > bound:
                flush()
            buffer.append(block.text)

        flush()
        return segments
