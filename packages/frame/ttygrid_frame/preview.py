"""Human-readable previews of text frames: plain lines and a PNG rendering."""

from __future__ import annotations

import base64
from io import BytesIO

from PIL import Image, ImageDraw, ImageFont

from .models import Frame


def frame_to_lines(frame: Frame, blank: str = " ") -> list[str]:
    lines: list[str] = []
    for row in range(frame.rows):
        start = row * frame.width
        cells = frame.text[start : start + frame.width]
        lines.append("".join(glyph or blank for glyph in cells).rstrip())
    return lines


def _font(size: int):
    try:
        return ImageFont.truetype("DejaVuSansMono.ttf", size)
    except Exception:
        return ImageFont.load_default()


def render_frame_image(
    frame: Frame,
    cell_width: int = 8,
    cell_height: int = 16,
    background: tuple[int, int, int] = (0, 0, 0),
) -> Image.Image:
    """Draw every glyph of the frame in its own colour on a fixed cell raster."""
    image = Image.new("RGB", (max(frame.width * cell_width, 1), max(frame.rows * cell_height, 1)), background)
    draw = ImageDraw.Draw(image)
    font = _font(cell_height - 2)

    for index, glyph in enumerate(frame.text):
        if not glyph or glyph.isspace():
            continue
        row, col = divmod(index, frame.width)
        fill = tuple(frame.colours[index * 3 : index * 3 + 3])
        draw.text((col * cell_width, row * cell_height), glyph, font=font, fill=fill)
    return image


def image_data_url(image: Image.Image) -> str:
    buf = BytesIO()
    image.save(buf, format="PNG")
    b64 = base64.b64encode(buf.getvalue()).decode("ascii")
    return f"data:image/png;base64,{b64}"
