"""Drain framing data models."""

from dataclasses import dataclass
from enum import Enum


class FramingMode(str, Enum):
    """How frames are delimited inside a drain body."""

    OCTET_COUNTING = "octet-counting"
    NEWLINE = "newline"


@dataclass(frozen=True)
class LogFrame:
    """One self-delimited chunk of a drain payload."""

    payload: bytes
    source_token: str
    offset: int  # position of the frame within the body
    declared_length: int | None = None  # only set for octet counting
