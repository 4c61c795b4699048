"""Typed geometry and cell models for the text rasterizer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Hashable

RGB = tuple[int, int, int]


class GeometryMismatchError(ValueError):
    """Raised when a run's text cannot fill the boxes reported for it."""


@dataclass(frozen=True)
class CharSize:
    width: float
    height: float


@dataclass(frozen=True)
class ScrollOffset:
    x_scroll: float = 0.0
    y_scroll: float = 0.0


@dataclass(frozen=True)
class FrameSize:
    width: int
    height: int

    @property
    def rows(self) -> int:
        # Two pixel rows of colour per text row.
        return self.height // 2


@dataclass(frozen=True)
class Dimensions:
    char: CharSize
    dom: ScrollOffset
    frame: FrameSize

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> Dimensions:
        try:
            char = raw["char"]
            frame = raw["frame"]
            dom = raw.get("dom") or {}
            dims = cls(
                char=CharSize(width=float(char["width"]), height=float(char["height"])),
                dom=ScrollOffset(
                    x_scroll=float(dom.get("x_scroll", 0)),
                    y_scroll=float(dom.get("y_scroll", 0)),
                ),
                frame=FrameSize(width=int(frame["width"]), height=int(frame["height"])),
            )
        except (KeyError, TypeError, AttributeError) as exc:
            raise ValueError(f"Malformed dimensions: {exc!r}") from exc

        if dims.char.width <= 0 or dims.char.height <= 0:
            raise ValueError("Character cell size must be positive")
        if dims.frame.width < 0 or dims.frame.height < 0:
            raise ValueError("Frame size must be non-negative")
        return dims


@dataclass(frozen=True)
class RenderBox:
    """Viewport-relative pixel rectangle of one contiguous span of drawn text."""

    top: float
    left: float
    width: float


@dataclass(frozen=True)
class GridBox:
    col_start: int
    row: int
    width: int


@dataclass(frozen=True)
class TextRun:
    text: str
    boxes: tuple[RenderBox, ...]
    element_id: Hashable
    colour: RGB | None = None


@dataclass(frozen=True)
class Cell:
    glyph: str
    fg_colour: RGB
    tty_coords: tuple[int, int]
    dom_coords: tuple[int, int]
    # Opaque identifier of the source element, for attribution only.
    owner: Hashable | None = field(default=None, compare=False)
