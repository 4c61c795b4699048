"""Build a snapped character grid, and then a wire frame, from rendered text runs."""

from __future__ import annotations

import contextlib
import logging
from typing import ContextManager, Iterable, Protocol

from ttygrid_frame.models import Frame
from ttygrid_frame.serializer import serialise_frame

from .colours import DEFAULT_FOREGROUND, ColourSource
from .grid import TTYGrid
from .models import RGB, Cell, Dimensions, TextRun
from .normalizer import ElementTracker, normalise_whitespace
from .tracker import track_run

logger = logging.getLogger("ttygrid.raster")


class StageTimer(Protocol):
    def stage(self, name: str) -> ContextManager[object]: ...


class FrameBuilder:
    """Places every character of every run onto a grid, in discovery order.

    Runs are processed strictly in the order given: a later run overwrites an
    earlier one wherever both land on the same cell.
    """

    def __init__(
        self,
        dimensions: Dimensions,
        colour_source: ColourSource | None = None,
        default_colour: RGB = DEFAULT_FOREGROUND,
        performance: StageTimer | None = None,
    ) -> None:
        self.dimensions = dimensions
        self.colour_source = colour_source
        self.default_colour = default_colour
        self.performance = performance
        self.grid = TTYGrid()
        self._elements = ElementTracker()

    def _stage(self, name: str) -> ContextManager[object]:
        if self.performance is None:
            return contextlib.nullcontext()
        return self.performance.stage(name)

    def _reset(self) -> None:
        self.grid.clear()
        self._elements.reset()

    def _colour_for(self, run: TextRun, dom_coords: tuple[int, int]) -> RGB:
        if run.colour is not None:
            return run.colour
        if self.colour_source is not None:
            return self.colour_source.colour_at(*dom_coords)
        return self.default_colour

    def position_run(self, run: TextRun) -> int:
        text = normalise_whitespace(run.text, self._elements.is_first_run(run.element_id))
        placed = 0
        for tracked in track_run(text, run.boxes, self.dimensions):
            self.grid.insert(
                Cell(
                    glyph=tracked.glyph,
                    fg_colour=self._colour_for(run, tracked.dom_coords),
                    tty_coords=tracked.tty_coords,
                    dom_coords=tracked.dom_coords,
                    owner=run.element_id,
                )
            )
            placed += 1
        return placed

    def build_grid(self, runs: Iterable[TextRun]) -> TTYGrid:
        self._reset()
        placed = 0
        run_count = 0
        with self._stage("position text nodes"):
            for run in runs:
                placed += self.position_run(run)
                run_count += 1
        logger.debug(
            "positioned %d characters from %d runs into %d cells",
            placed,
            run_count,
            len(self.grid),
            extra={"event": "grid_built"},
        )
        return self.grid

    def build_frame(self, runs: Iterable[TextRun], frame_id: int) -> Frame:
        grid = self.build_grid(runs)
        with self._stage("serialise text frame"):
            return serialise_frame(grid, self.dimensions.frame.width, self.dimensions.frame.height, frame_id)
