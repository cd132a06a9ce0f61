"""Path normalization module."""

from .normalizer import IPathNormalizer, PathNormalizer
from .rules import DEFAULT_RULES, OPAQUE_RULES, PLACEHOLDER, SegmentRule, custom_rule

__all__ = [
    "IPathNormalizer",
    "PathNormalizer",
    "SegmentRule",
    "DEFAULT_RULES",
    "OPAQUE_RULES",
    "PLACEHOLDER",
    "custom_rule",
]
