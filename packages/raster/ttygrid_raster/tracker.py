"""Step a text run through its rendering boxes one character at a time.

A rendering box is always a single valid rectangle, so it never straddles two
lines. Walking a box from left to right in steps of one character width gives
the exact position of every character it holds, as long as the text index and
the two cursors stay in lock-step:

* the DOM cursor moves in pixels, one character width per step;
* the TTY cursor moves in cells, one column per step.

Layout wraps lines at spaces and never renders the space it wrapped on, so a
box that starts a new line spends its first step consuming that space without
moving either cursor.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Iterator

from .models import Dimensions, GeometryMismatchError, GridBox, RenderBox
from .snapper import snap_absolute, to_absolute

_WRAP_WHITESPACE = frozenset("\t\n\r ")


@dataclass(frozen=True)
class TrackedCharacter:
    glyph: str
    tty_coords: tuple[int, int]
    dom_coords: tuple[int, int]


@dataclass
class TrackerState:
    text: str
    index: int = 0
    dom_x: float = 0
    dom_y: float = 0
    tty_x: int = 0
    tty_y: int = 0
    previous_top: float | None = None

    @property
    def current(self) -> str:
        if self.index >= len(self.text):
            raise GeometryMismatchError(
                f"Ran out of characters at index {self.index} of {self.text!r}"
            )
        return self.text[self.index]

    @property
    def exhausted(self) -> bool:
        return self.index >= len(self.text)


def _is_new_line(state: TrackerState, absolute: RenderBox) -> bool:
    # Only consecutive boxes are compared, by their document-space top edge.
    if state.previous_top is None:
        return False
    return absolute.top > state.previous_top


def _sync_cursors(state: TrackerState, absolute: RenderBox, grid_box: GridBox) -> None:
    state.dom_x = math.floor(absolute.left)
    state.dom_y = math.floor(absolute.top)
    state.tty_x = grid_box.col_start
    state.tty_y = grid_box.row


def track_box(state: TrackerState, box: RenderBox, dimensions: Dimensions) -> Iterator[TrackedCharacter]:
    absolute = to_absolute(box, dimensions)
    grid_box = snap_absolute(absolute, dimensions)
    _sync_cursors(state, absolute, grid_box)

    steps = grid_box.width
    if _is_new_line(state, absolute) and not state.exhausted and state.current in _WRAP_WHITESPACE:
        state.index += 1
        steps = max(steps - 1, 0)
    state.previous_top = absolute.top

    for _ in range(steps):
        yield TrackedCharacter(
            glyph=state.current,
            tty_coords=(state.tty_y, state.tty_x),
            dom_coords=(int(state.dom_x), int(state.dom_y)),
        )
        state.index += 1
        state.dom_x += dimensions.char.width
        state.tty_x += 1


def track_run(text: str, boxes: Iterable[RenderBox], dimensions: Dimensions) -> Iterator[TrackedCharacter]:
    """Yield every character of ``text`` placed on the grid, box by box."""
    state = TrackerState(text=text)
    for box in boxes:
        yield from track_box(state, box, dimensions)
