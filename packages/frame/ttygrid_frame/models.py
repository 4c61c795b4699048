"""Typed wire frame model."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Frame:
    id: int
    width: int
    height: int
    text: list[str] = field(default_factory=list)
    colours: list[int] = field(default_factory=list)

    @property
    def rows(self) -> int:
        return self.height // 2

    @property
    def glyph_count(self) -> int:
        return sum(1 for glyph in self.text if glyph)

    @property
    def is_empty(self) -> bool:
        return self.glyph_count == 0

    def to_payload(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "width": self.width,
            "height": self.height,
            "text": list(self.text),
            "colours": list(self.colours),
        }

    def to_json(self) -> str:
        return json.dumps(self.to_payload(), ensure_ascii=False, separators=(",", ":"))

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> Frame:
        frame = cls(
            id=int(payload["id"]),
            width=int(payload["width"]),
            height=int(payload["height"]),
            text=[str(g) for g in payload.get("text", [])],
            colours=[int(c) for c in payload.get("colours", [])],
        )
        expected = frame.width * frame.rows
        if len(frame.text) != expected or len(frame.colours) != expected * 3:
            raise ValueError(f"Frame payload must hold {expected} cells")
        return frame
