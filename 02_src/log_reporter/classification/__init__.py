"""Timeout classification module."""

from .classifier import DEFAULT_TIMEOUT_CODES, ITimeoutClassifier, TimeoutClassifier

__all__ = ["DEFAULT_TIMEOUT_CODES", "ITimeoutClassifier", "TimeoutClassifier"]
