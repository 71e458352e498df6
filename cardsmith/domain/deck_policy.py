"""
===============================================================================
TARJETA CRC — domain/deck_policy.py
===============================================================================

Módulo:
    Política del Deck (forma cover → standard* → cover, sin redundancia)

Responsabilidades:
    - Normalizar títulos (quitar `#` markdown y `**` envolventes).
    - Quitar del cuerpo la línea que repite el título de la tarjeta.
    - Reparar el deck que devuelve la estrategia primaria (LLM) para que
      cumpla la forma del deck, o rechazarlo si no tiene cuerpo.

Colaboradores:
    - domain.entities.Segment, validate_deck
    - infrastructure/text/paragraph_segmenter.py (clean_title)
    - application/usecases/cards/segment_text.py (normalize_primary_deck)

Reglas (intención):
    - Un header promovido a título nunca se duplica en el cuerpo.
    - Las portadas nunca tienen cuerpo; el texto que traigan pasa al cuerpo.
===============================================================================
"""

from __future__ import annotations

import re
from typing import Final, Sequence

from ..crosscutting.exceptions import SegmentationResponseError
from .entities import Segment, SegmentLayout, validate_deck

_MD_HEADER: Final[re.Pattern] = re.compile(r"^\s{0,3}#{1,6}\s+(.+?)\s*#*\s*$")
_WRAPPED_BOLD: Final[re.Pattern] = re.compile(r"^\*\*(.+)\*\*$")


def is_markdown_header(line: str) -> bool:
    """True si la línea es un header markdown (`#` .. `######` + espacio)."""
    return bool(_MD_HEADER.match(line or ""))


def clean_title(text: str) -> str:
    """Quita marcadores de header markdown y `**` envolventes."""
    title = (text or "").strip()
    match = _MD_HEADER.match(title)
    if match:
        title = match.group(1).strip()
    bold = _WRAPPED_BOLD.match(title)
    if bold and "**" not in bold.group(1):
        title = bold.group(1).strip()
    return title


def strip_title_line(title: str, content: str) -> str:
    """Si la primera línea del cuerpo repite el título, la quita."""
    wanted = clean_title(title).casefold()
    if not wanted:
        return content

    first_line, _, rest = content.lstrip().partition("\n")
    if clean_title(first_line).casefold() != wanted:
        return content
    return rest.lstrip("\n")


def _body_segment(segment: Segment) -> Segment | None:
    content = strip_title_line(segment.title, segment.content).strip()
    if not content:
        return None
    return Segment(
        title=segment.title,
        content=content,
        layout=SegmentLayout.STANDARD,
        extras=dict(segment.extras),
    )


def normalize_primary_deck(
    segments: Sequence[Segment],
    *,
    cover_title: str,
    closing_title: str,
) -> list[Segment]:
    """
    Repara el deck del LLM.

    - portada/cierre: se reutiliza su título si vinieron como cover; si no,
      se agregan sintéticos.
    - cuerpo: layout standard, sin tarjetas vacías, sin título repetido.

    Raises:
        SegmentationResponseError: si no queda ninguna tarjeta de cuerpo.
    """
    items = list(segments)

    leading_title = cover_title
    if items and items[0].is_cover:
        head = items.pop(0)
        leading_title = clean_title(head.title) or cover_title
        if head.content.strip():
            items.insert(0, Segment(title="", content=head.content))

    trailing_title = closing_title
    if items and items[-1].is_cover:
        tail = items.pop()
        trailing_title = clean_title(tail.title) or closing_title
        if tail.content.strip():
            items.append(Segment(title="", content=tail.content))

    body = [seg for seg in (_body_segment(item) for item in items) if seg is not None]
    if not body:
        raise SegmentationResponseError("Segmentation response has no body segments")

    deck = [Segment.cover(leading_title), *body, Segment.cover(trailing_title)]
    validate_deck(deck)
    return deck
