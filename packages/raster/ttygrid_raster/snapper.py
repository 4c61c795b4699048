"""Snap viewport pixel boxes onto the character grid."""

from __future__ import annotations

import math

from .models import Dimensions, GridBox, RenderBox


def to_absolute(box: RenderBox, dimensions: Dimensions) -> RenderBox:
    # The whole document is one frame, so coordinates are document relative.
    return RenderBox(
        top=box.top + dimensions.dom.y_scroll,
        left=box.left + dimensions.dom.x_scroll,
        width=box.width,
    )


def snap_absolute(box: RenderBox, dimensions: Dimensions) -> GridBox:
    char = dimensions.char
    return GridBox(
        col_start=math.floor(box.left / char.width),
        row=math.floor(box.top / char.height),
        width=math.floor(box.width / char.width),
    )


def snap_box(box: RenderBox, dimensions: Dimensions) -> GridBox:
    """Floor a viewport box into grid space.

    Flooring keeps a character's cell inside its true rendered extent, at the
    cost of an occasional one cell shift against a perfectly monospaced render.
    """
    return snap_absolute(to_absolute(box, dimensions), dimensions)
