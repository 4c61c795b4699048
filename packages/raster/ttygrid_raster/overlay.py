"""Debug overlay: outline rendering boxes on top of a screenshot."""

from __future__ import annotations

from typing import Iterable

from PIL import Image, ImageDraw

from .models import Dimensions, TextRun
from .snapper import to_absolute

OUTLINE = (255, 0, 0)


def draw_box_overlay(
    image: Image.Image,
    runs: Iterable[TextRun],
    dimensions: Dimensions,
    outline: tuple[int, int, int] = OUTLINE,
) -> Image.Image:
    """Return a copy of ``image`` with every run's boxes outlined one line high.

    Boxes are drawn in document space, so the image is expected to cover the
    whole document rather than the viewport.
    """
    out = image.convert("RGB")
    draw = ImageDraw.Draw(out)
    line_height = dimensions.char.height
    for run in runs:
        for box in run.boxes:
            absolute = to_absolute(box, dimensions)
            x0, y0 = absolute.left, absolute.top
            x1 = x0 + max(absolute.width - 1, 0)
            y1 = y0 + max(line_height - 1, 0)
            draw.rectangle((x0, y0, x1, y1), outline=outline, width=1)
    return out


def blank_canvas(dimensions: Dimensions, background: tuple[int, int, int] = (255, 255, 255)) -> Image.Image:
    width = max(int(dimensions.frame.width * dimensions.char.width), 1)
    height = max(int(dimensions.frame.rows * dimensions.char.height), 1)
    return Image.new("RGB", (width, height), background)
