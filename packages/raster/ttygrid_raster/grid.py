"""Sparse character grid keyed by (row, col)."""

from __future__ import annotations

from typing import Iterator

from .models import Cell


class TTYGrid:
    """Last writer wins at a given coordinate. Bounds are only enforced when read back."""

    def __init__(self) -> None:
        self._cells: dict[tuple[int, int], Cell] = {}

    def insert(self, cell: Cell) -> None:
        self._cells[cell.tty_coords] = cell

    def get(self, row: int, col: int) -> Cell | None:
        return self._cells.get((row, col))

    def clear(self) -> None:
        self._cells.clear()

    def __contains__(self, key: object) -> bool:
        return key in self._cells

    def __len__(self) -> int:
        return len(self._cells)

    def __iter__(self) -> Iterator[Cell]:
        return iter(self._cells.values())
