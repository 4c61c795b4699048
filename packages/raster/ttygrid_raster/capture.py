"""Load captured page geometry (dimensions, text runs, optional screenshot) from JSON."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from PIL import Image

from .colours import ScreenshotColours
from .models import RGB, Dimensions, RenderBox, TextRun

_BLANK = re.compile(r"^\s*$")


def is_relevant_text(text: str) -> bool:
    """Whitespace-only text never renders, so it is not worth tracking."""
    return not _BLANK.match(text)


@dataclass
class PageCapture:
    frame_id: int
    dimensions: Dimensions
    runs: list[TextRun] = field(default_factory=list)
    screenshot_path: Path | None = None
    skipped_runs: int = 0

    def load_screenshot(self) -> ScreenshotColours:
        if self.screenshot_path is None:
            raise RuntimeError("Capture has no screenshot")
        with Image.open(self.screenshot_path) as image:
            return ScreenshotColours.from_image(image)


def _parse_colour(raw: Any) -> RGB | None:
    if raw is None:
        return None
    if isinstance(raw, str):
        value = raw.lstrip("#")
        if len(value) != 6:
            raise ValueError(f"Bad colour: {raw!r}")
        return tuple(int(value[i : i + 2], 16) for i in (0, 2, 4))  # type: ignore[return-value]
    if len(raw) != 3:
        raise ValueError(f"Bad colour: {raw!r}")
    r, g, b = (max(0, min(255, int(c))) for c in raw)
    return r, g, b


def _parse_box(raw: dict[str, Any]) -> RenderBox:
    box = RenderBox(top=float(raw["top"]), left=float(raw["left"]), width=float(raw["width"]))
    if box.width < 0:
        raise ValueError(f"Negative box width: {raw!r}")
    return box


def _parse_element(index: int, raw: Any) -> str | int | float:
    if raw is None:
        return index
    if not isinstance(raw, (str, int, float)):
        raise ValueError(f"Run #{index} element must be a string or number, got {type(raw).__name__}")
    return raw


def _parse_run(index: int, raw: dict[str, Any]) -> TextRun:
    try:
        boxes = tuple(_parse_box(b) for b in raw.get("boxes", []))
        return TextRun(
            text=str(raw["text"]),
            boxes=boxes,
            element_id=_parse_element(index, raw.get("element")),
            colour=_parse_colour(raw.get("colour")),
        )
    except (KeyError, TypeError) as exc:
        raise ValueError(f"Malformed run #{index}: {exc}") from exc


def parse_capture(data: dict[str, Any], base_dir: Path | None = None) -> PageCapture:
    if "dimensions" not in data:
        raise ValueError("Capture is missing dimensions")
    capture = PageCapture(
        frame_id=int(data.get("id", 0)),
        dimensions=Dimensions.from_dict(data["dimensions"]),
    )

    for index, raw in enumerate(data.get("runs", [])):
        run = _parse_run(index, raw)
        if not is_relevant_text(run.text):
            capture.skipped_runs += 1
            continue
        capture.runs.append(run)

    screenshot = data.get("screenshot")
    if screenshot:
        path = Path(screenshot)
        if not path.is_absolute() and base_dir is not None:
            path = base_dir / path
        capture.screenshot_path = path
    return capture


def load_capture(path: Path) -> PageCapture:
    raw = json.loads(path.read_text(encoding="utf-8"))
    return parse_capture(raw, base_dir=path.parent)
