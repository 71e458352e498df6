"""
===============================================================================
DOMAIN: Value Objects (Immutable Domain Primitives)
===============================================================================

Contenido:
    - Selection: rango de selección en storage space
    - ToggleResult: texto editado + selección a restaurar
    - OverflowSplit: división de un cuerpo que no entra en su tarjeta

Principios:
    - Inmutabilidad (frozen dataclasses)
    - Sin side effects
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Selection:
    """
    Selección en storage space (offsets sobre el texto raw con `**`).

    `start == end` representa un cursor.
    """

    start: int
    end: int

    @property
    def is_cursor(self) -> bool:
        return self.start == self.end

    def clamp(self, length: int) -> "Selection":
        """Ordena y recorta los offsets a `[0, length]`."""
        lo, hi = sorted((self.start, self.end))
        return Selection(max(0, min(lo, length)), max(0, min(hi, length)))


@dataclass(frozen=True, slots=True)
class ToggleResult:
    """Resultado de togglear negrita: nuevo texto y selección en el texto nuevo."""

    text: str
    start: int
    end: int

    @property
    def selection(self) -> Selection:
        return Selection(self.start, self.end)


@dataclass(frozen=True, slots=True)
class OverflowSplit:
    """
    División de un cuerpo desbordado.

    Attributes:
        kept: Lo que queda en la tarjeta original.
        moved: Lo que va a una nueva tarjeta insertada a continuación.
    """

    kept: str
    moved: str
