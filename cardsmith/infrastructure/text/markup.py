"""
===============================================================================
CRC CARD — infrastructure/text/markup.py
===============================================================================

Componente:
  Modelo de markup inline `**bold**` (run-length)

Responsabilidades:
  - Parsear texto raw a runs (TextRun) y serializarlos de vuelta.
  - Traducir offsets entre storage space (con `**`) y logical space (sin `**`).
  - Togglear negrita sobre una selección y devolver la selección a restaurar.

Colaboradores:
  - domain/entities.py (TextRun)
  - domain/value_objects.py (ToggleResult, Selection)
  - application/usecases/cards/editor_session.py (comando ToggleBold)

Reglas:
  - Funciones puras: sin estado entre llamadas, sin IO.
  - Un `**` sin pareja deja el flag invertido hasta el final (no hay auto-cierre).
  - Selección mixta => siempre pone negrita.
  - El IndexMap se reconstruye en cada edición; nunca se cachea.
===============================================================================
"""

from __future__ import annotations

from typing import Final, Iterable, Literal

from ...domain.entities import TextRun
from ...domain.value_objects import Selection, ToggleResult

BOLD_MARKER: Final[str] = "**"
_MARKER_LEN: Final[int] = len(BOLD_MARKER)
_EMPTY_PAIR: Final[str] = BOLD_MARKER * 2


def _append_run(runs: list[TextRun], text: str, bold: bool) -> None:
    """Agrega `text` coalesciendo con el último run si comparte negrita."""
    if not text:
        return
    if runs and runs[-1].bold == bold:
        runs[-1] = TextRun(runs[-1].text + text, bold)
    else:
        runs.append(TextRun(text, bold))


def parse_runs(raw: str) -> list[TextRun]:
    """
    Escanea `raw` de izquierda a derecha y arma runs maximales.

    `**` invierte el flag y no aparece en el texto de ningún run.
    """
    runs: list[TextRun] = []
    bold = False
    buffer: list[str] = []
    i = 0

    while i < len(raw):
        if raw.startswith(BOLD_MARKER, i):
            _append_run(runs, "".join(buffer), bold)
            buffer = []
            bold = not bold
            i += _MARKER_LEN
            continue
        buffer.append(raw[i])
        i += 1

    _append_run(runs, "".join(buffer), bold)
    return runs


def serialize_runs(runs: Iterable[TextRun]) -> str:
    """Serializa runs a texto raw (coalescidos antes, negrita envuelta en `**`)."""
    coalesced: list[TextRun] = []
    for run in runs:
        _append_run(coalesced, run.text, run.bold)

    return "".join(
        f"{BOLD_MARKER}{run.text}{BOLD_MARKER}" if run.bold else run.text
        for run in coalesced
    )


def plain_text(raw: str) -> str:
    """Texto sin marcadores (lo que el usuario ve)."""
    return "".join(run.text for run in parse_runs(raw))


def build_index_map(raw: str) -> list[int]:
    """
    Mapea cada offset de storage en `[0, len(raw)]` a su offset lógico.

    Offsets dentro de un marcador mapean al offset lógico inmediatamente
    anterior al marcador.
    """
    index_map = [0] * (len(raw) + 1)
    plain_index = 0
    i = 0

    while i < len(raw):
        if raw.startswith(BOLD_MARKER, i):
            index_map[i] = plain_index
            index_map[i + 1] = plain_index
            i += _MARKER_LEN
            index_map[i] = plain_index
            continue
        index_map[i] = plain_index
        i += 1
        plain_index += 1
        index_map[i] = plain_index

    return index_map


def logical_to_storage(
    raw: str, logical: int, *, side: Literal["start", "end"] = "start"
) -> int:
    """
    Proyecta un offset lógico a storage space.

    - side="start": posición del carácter lógico (después de marcadores previos).
    - side="end": posición justo después del carácter `logical - 1`
      (antes de marcadores siguientes).

    Offsets fuera de rango se recortan a `len(raw)`.
    """
    if side == "end" and logical > 0:
        position = logical_to_storage(raw, logical - 1, side="start")
        return min(position + 1, len(raw))

    count = 0
    i = 0
    while i < len(raw):
        if raw.startswith(BOLD_MARKER, i):
            i += _MARKER_LEN
            continue
        if count == logical:
            return i
        i += 1
        count += 1
    return len(raw)


def apply_bold(runs: list[TextRun], start: int, end: int, bold: bool) -> list[TextRun]:
    """
    Parte los runs en los bordes `[start, end)` (logical space) y sobreescribe
    la negrita de lo que queda adentro.
    """
    result: list[TextRun] = []
    offset = 0

    for run in runs:
        run_start = offset
        run_end = offset + len(run.text)
        offset = run_end

        if run_end <= start or run_start >= end:
            _append_run(result, run.text, run.bold)
            continue

        overlap_start = max(start, run_start)
        overlap_end = min(end, run_end)

        if run_start < overlap_start:
            _append_run(result, run.text[: overlap_start - run_start], run.bold)

        _append_run(
            result,
            run.text[overlap_start - run_start : overlap_end - run_start],
            bold,
        )

        if overlap_end < run_end:
            _append_run(result, run.text[overlap_end - run_start :], run.bold)

    return result


def _selection_has_unbold(runs: list[TextRun], start: int, end: int) -> bool:
    offset = 0
    for run in runs:
        run_start = offset
        run_end = offset + len(run.text)
        offset = run_end
        if run_end <= start or run_start >= end:
            continue
        if not run.bold:
            return True
    return False


def _toggle_at_cursor(raw: str, cursor: int) -> ToggleResult:
    before = raw[:cursor]
    after = raw[cursor:]

    # "**|**": colapsa el par vacío (o cierre + apertura) alrededor del cursor.
    if before.endswith(BOLD_MARKER) and after.startswith(BOLD_MARKER):
        text = before[:-_MARKER_LEN] + after[_MARKER_LEN:]
        position = cursor - _MARKER_LEN
        return ToggleResult(text, position, position)

    text = before + _EMPTY_PAIR + after
    position = cursor + _MARKER_LEN
    return ToggleResult(text, position, position)


def toggle_bold_at_selection(raw: str, start: int, end: int) -> ToggleResult:
    """
    Togglea negrita sobre la selección `[start, end)` (storage space).

    Returns:
        ToggleResult con el texto nuevo y la selección original (en logical
        space) re-proyectada sobre el texto nuevo.
    """
    selection = Selection(start, end).clamp(len(raw))

    if selection.is_cursor:
        return _toggle_at_cursor(raw, selection.start)

    index_map = build_index_map(raw)
    plain_start = index_map[selection.start]
    plain_end = index_map[selection.end]

    runs = parse_runs(raw)
    target_bold = _selection_has_unbold(runs, plain_start, plain_end)

    text = serialize_runs(apply_bold(runs, plain_start, plain_end, target_bold))

    new_start = logical_to_storage(text, plain_start, side="start")
    if plain_end == plain_start:
        new_end = new_start
    else:
        new_end = logical_to_storage(text, plain_end, side="end")

    return ToggleResult(text, new_start, new_end)
