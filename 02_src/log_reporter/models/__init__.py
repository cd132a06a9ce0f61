"""Core data models for the log reporter."""

from .destinations import Destination
from .entries import LogKind, LogLine, RouterLogEntry
from .frames import FramingMode, LogFrame
from .reports import ReportEvent, TimeoutEvent

__all__ = [
    # Frames
    "FramingMode",
    "LogFrame",
    # Entries
    "LogKind",
    "LogLine",
    "RouterLogEntry",
    # Reports
    "TimeoutEvent",
    "ReportEvent",
    # Destinations
    "Destination",
]
