"""Text frame wire messages and the empty-frame send policy."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Protocol

from .models import Frame

FRAME_TEXT_COMMAND = "/frame_text"

logger = logging.getLogger("ttygrid.frame")


class FrameChannel(Protocol):
    name: str

    def send(self, message: str) -> None: ...


@dataclass
class SendStats:
    sent: bool = False
    bytes_sent: int = 0
    glyphs: int = 0
    reason: str | None = None


def encode_frame_message(frame: Frame) -> str:
    return f"{FRAME_TEXT_COMMAND},{frame.to_json()}"


def decode_frame_message(message: str) -> Frame:
    command, sep, body = message.partition(",")
    if not sep or command != FRAME_TEXT_COMMAND:
        raise ValueError(f"Not a {FRAME_TEXT_COMMAND} message")
    return Frame.from_payload(json.loads(body))


def channel_frame_id(channel: FrameChannel) -> int:
    try:
        return int(channel.name)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Channel name {channel.name!r} is not a frame id") from exc


class FrameSender:
    """Sends text frames over a channel, skipping frames with no text at all."""

    def __init__(self, channel: FrameChannel, skip_empty: bool = True) -> None:
        self.channel = channel
        self.skip_empty = skip_empty

    @property
    def frame_id(self) -> int:
        return channel_frame_id(self.channel)

    def send(self, frame: Frame) -> SendStats:
        glyphs = frame.glyph_count
        if glyphs == 0 and self.skip_empty:
            logger.info("Not sending empty text frame", extra={"event": "frame_skipped"})
            return SendStats(sent=False, glyphs=0, reason="empty")

        message = encode_frame_message(frame)
        self.channel.send(message)
        stats = SendStats(sent=True, bytes_sent=len(message.encode("utf-8")), glyphs=glyphs)
        logger.debug(
            "sent text frame id=%d glyphs=%d bytes=%d",
            frame.id,
            glyphs,
            stats.bytes_sent,
            extra={"event": "frame_sent"},
        )
        return stats
