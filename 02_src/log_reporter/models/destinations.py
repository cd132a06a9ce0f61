"""Destination data models."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Destination:
    """A Sentry project that receives reports for one drain token."""

    token: str
    environment: str
    dsn: str = field(repr=False)  # credential, kept out of log output
