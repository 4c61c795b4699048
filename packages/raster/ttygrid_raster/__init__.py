"""Rasterize rendered text geometry onto a monospace character grid."""

from .builder import FrameBuilder
from .capture import PageCapture, is_relevant_text, load_capture, parse_capture
from .colours import DEFAULT_FOREGROUND, ColourSource, FixedColour, ScreenshotColours
from .grid import TTYGrid
from .models import (
    Cell,
    CharSize,
    Dimensions,
    FrameSize,
    GeometryMismatchError,
    GridBox,
    RenderBox,
    ScrollOffset,
    TextRun,
)
from .normalizer import ElementTracker, normalise_whitespace
from .overlay import blank_canvas, draw_box_overlay
from .snapper import snap_box, to_absolute
from .tracker import TrackedCharacter, TrackerState, track_box, track_run

__all__ = [
    "Cell",
    "CharSize",
    "ColourSource",
    "DEFAULT_FOREGROUND",
    "Dimensions",
    "ElementTracker",
    "FixedColour",
    "FrameBuilder",
    "FrameSize",
    "GeometryMismatchError",
    "GridBox",
    "PageCapture",
    "RenderBox",
    "ScreenshotColours",
    "ScrollOffset",
    "TTYGrid",
    "TextRun",
    "TrackedCharacter",
    "TrackerState",
    "blank_canvas",
    "draw_box_overlay",
    "is_relevant_text",
    "load_capture",
    "normalise_whitespace",
    "parse_capture",
    "snap_box",
    "to_absolute",
    "track_box",
    "track_run",
]
