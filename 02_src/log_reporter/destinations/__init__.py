"""Destination resolution module."""

from .resolver import DestinationResolver, IDestinationResolver

__all__ = ["DestinationResolver", "IDestinationResolver"]
