"""Text frame model, serializer and wire messages for terminal display."""

from .messages import (
    FRAME_TEXT_COMMAND,
    FrameChannel,
    FrameSender,
    SendStats,
    decode_frame_message,
    encode_frame_message,
)
from .models import Frame
from .preview import frame_to_lines, image_data_url, render_frame_image
from .serializer import serialise_frame

__all__ = [
    "FRAME_TEXT_COMMAND",
    "Frame",
    "FrameChannel",
    "FrameSender",
    "SendStats",
    "decode_frame_message",
    "encode_frame_message",
    "frame_to_lines",
    "image_data_url",
    "render_frame_image",
    "serialise_frame",
]
