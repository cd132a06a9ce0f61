"""Router log extraction module."""

from .extractor import EntryExtractor, IEntryExtractor, is_router_line
from .parsers import parse_key_value_pairs, parse_log_line

__all__ = [
    "EntryExtractor",
    "IEntryExtractor",
    "is_router_line",
    "parse_key_value_pairs",
    "parse_log_line",
]
