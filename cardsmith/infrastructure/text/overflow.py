"""
===============================================================================
CRC CARD — infrastructure/text/overflow.py
===============================================================================

Componente:
  Re-split de un cuerpo que desborda su tarjeta

Responsabilidades:
  - Dividir `content` en (kept, moved) con una cascada de cortes naturales:
      1) último párrafo
      2) ~70% de las oraciones
      3) ~70% de los caracteres, marcando el corte con "..."
  - Reportar "no divisible" (None) en vez de fabricar fragmentos vacíos.

Colaboradores:
  - domain/value_objects.py (OverflowSplit)
  - application/usecases/cards/editor_session.py

Reglas:
  - El desborde lo mide el caller (render); acá no se mide nada.
  - Función pura, sin IO.
===============================================================================
"""

from __future__ import annotations

import math
import re
from typing import Final, Optional

from ...domain.value_objects import OverflowSplit

PARAGRAPH_SEPARATOR: Final[str] = "\n\n"
ELLIPSIS: Final[str] = "..."
SPLIT_RATIO: Final[float] = 0.7

_TRAILING_MARKS: Final[str] = ".!?… \t\r\n"

# Oraciones terminadas en . ! ? más un remanente sin terminador al final,
# así la concatenación de las piezas reproduce el texto completo.
_SENTENCE: Final[re.Pattern] = re.compile(r"[^.!?]*[.!?]+|[^.!?]+$")


def _split_paragraphs(content: str) -> Optional[OverflowSplit]:
    paragraphs = content.split(PARAGRAPH_SEPARATOR)
    if len(paragraphs) < 2:
        return None

    moved = paragraphs[-1]
    kept = PARAGRAPH_SEPARATOR.join(paragraphs[:-1])
    if not moved.strip() or not kept.strip():
        return None
    return OverflowSplit(kept=kept, moved=moved)


def _sentences(content: str) -> list[str]:
    """Parte en oraciones; los tramos de solo espacios se pegan a la anterior."""
    pieces: list[str] = []
    for piece in _SENTENCE.findall(content):
        if pieces and not piece.strip():
            pieces[-1] += piece
        else:
            pieces.append(piece)
    return pieces


def _split_sentences(content: str) -> Optional[OverflowSplit]:
    sentences = _sentences(content)
    if len(sentences) < 2:
        return None

    split_index = math.floor(len(sentences) * SPLIT_RATIO)
    kept = "".join(sentences[:split_index]).strip()
    moved = "".join(sentences[split_index:]).strip()
    if not kept or not moved:
        return None
    return OverflowSplit(kept=kept, moved=moved)


def _cut_point(content: str) -> int:
    middle = max(math.floor(len(content) * SPLIT_RATIO), 1)
    first = len(content) - len(content.lstrip())
    last = len(content.rstrip(_TRAILING_MARKS))
    if last - first >= 2:
        # Al menos un carácter visible a cada lado del corte.
        return min(max(middle, first + 1), last - 1)
    if content[middle:] == ELLIPSIS:
        # Con este corte `kept` reconstruiría el original.
        return middle - 1
    return middle


def _split_characters(content: str) -> OverflowSplit:
    middle = _cut_point(content)
    return OverflowSplit(
        kept=content[:middle] + ELLIPSIS,
        moved=ELLIPSIS + content[middle:],
    )


def split_overflow(content: str) -> Optional[OverflowSplit]:
    """
    Divide un cuerpo desbordado en dos.

    Returns:
        OverflowSplit con `kept` y `moved` no vacíos (`kept` nunca igual a
        `content`), o None si el contenido está vacío o tiene un solo carácter
        (el caller no debe insertar nada).
    """
    if len((content or "").strip()) < 2:
        return None

    return (
        _split_paragraphs(content)
        or _split_sentences(content)
        or _split_characters(content)
    )
