"""Foreground colour sources sampled per cell."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

import numpy as np
from PIL import Image

from .models import RGB

DEFAULT_FOREGROUND: RGB = (255, 255, 255)


class ColourSource(Protocol):
    def colour_at(self, x: int, y: int) -> RGB: ...


@dataclass(frozen=True)
class FixedColour:
    colour: RGB = DEFAULT_FOREGROUND

    def colour_at(self, x: int, y: int) -> RGB:
        return self.colour


class ScreenshotColours:
    """Reads text colour from a screenshot supplied alongside the geometry.

    Pixels are addressed in document space; coordinates outside the image are
    clamped to its nearest edge.
    """

    def __init__(self, pixels: np.ndarray) -> None:
        if pixels.ndim != 3 or pixels.shape[2] < 3:
            raise ValueError("Screenshot must be an HxWx3 (or HxWx4) array")
        if pixels.shape[0] == 0 or pixels.shape[1] == 0:
            raise ValueError("Screenshot must not be empty")
        self._pixels = np.ascontiguousarray(pixels[:, :, :3], dtype=np.uint8)

    @classmethod
    def from_image(cls, image: Image.Image) -> ScreenshotColours:
        if image.mode != "RGB":
            image = image.convert("RGB")
        return cls(np.asarray(image))

    @property
    def size(self) -> tuple[int, int]:
        height, width = self._pixels.shape[:2]
        return width, height

    def colour_at(self, x: int, y: int) -> RGB:
        height, width = self._pixels.shape[:2]
        px = min(max(int(x), 0), width - 1)
        py = min(max(int(y), 0), height - 1)
        r, g, b = self._pixels[py, px]
        return int(r), int(g), int(b)
