"""Whitespace normalisation for text runs before they are tracked onto the grid."""

from __future__ import annotations

import re
from typing import Hashable

_WHITESPACE_RUN = re.compile(r"[\t\n\r ]+")


def normalise_whitespace(text: str, first_in_element: bool) -> str:
    """Collapse markup whitespace the way layout renders it.

    Source documents keep indentation and line breaks inside text content even
    though layout collapses them. Only the first run of an element loses its
    leading space: text following an inline sibling keeps the separating space.
    """
    text = _WHITESPACE_RUN.sub(" ", text)
    if first_in_element and text.startswith(" "):
        text = text[1:]
    if text.endswith(" "):
        text = text[:-1]
    return text


class ElementTracker:
    """Remembers which elements already had a run parsed during the current frame."""

    def __init__(self) -> None:
        self._started: set[Hashable] = set()

    def is_first_run(self, element_id: Hashable) -> bool:
        if element_id in self._started:
            return False
        self._started.add(element_id)
        return True

    def reset(self) -> None:
        self._started.clear()

    def __len__(self) -> int:
        return len(self._started)
