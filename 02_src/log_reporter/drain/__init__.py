"""Drain framing module."""

from .decoder import (
    LOGPLEX_CONTENT_TYPE,
    FrameDecoder,
    IFrameDecoder,
    encode_frames,
    framing_mode_for,
)

__all__ = [
    "LOGPLEX_CONTENT_TYPE",
    "FrameDecoder",
    "IFrameDecoder",
    "encode_frames",
    "framing_mode_for",
]
