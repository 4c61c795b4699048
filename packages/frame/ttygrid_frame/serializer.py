"""Flatten a sparse character grid into fixed-size frame arrays."""

from __future__ import annotations

from typing import Protocol

from .models import Frame

EMPTY_GLYPH = ""
EMPTY_COLOUR = (0, 0, 0)


class GridCell(Protocol):
    glyph: str
    fg_colour: tuple[int, int, int]


class CellLookup(Protocol):
    def get(self, row: int, col: int) -> GridCell | None: ...


def serialise_frame(grid: CellLookup, width: int, height: int, frame_id: int) -> Frame:
    """Scan the full frame extent in row-major order.

    The declared ``height`` counts pixel rows of colour, two per text row, so
    only ``height // 2`` text rows are read. Cells outside the extent are never
    read; missing cells become an empty glyph on black.
    """
    text: list[str] = []
    colours: list[int] = []
    for row in range(height // 2):
        for col in range(width):
            cell = grid.get(row, col)
            if cell is None:
                text.append(EMPTY_GLYPH)
                colours.extend(EMPTY_COLOUR)
            else:
                text.append(cell.glyph)
                colours.extend(cell.fg_colour)
    return Frame(id=frame_id, width=width, height=height, text=text, colours=colours)
