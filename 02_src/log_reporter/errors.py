"""Error kinds raised along the drain-to-report pipeline."""


class ReporterError(Exception):
    """Base class for all log reporter errors."""


class ConfigError(ReporterError):
    """Settings could not be loaded."""


class FramingError(ReporterError):
    """The drain body could not be split into frames."""

    def __init__(self, message: str, offset: int = 0):
        super().__init__(f"{message} (at byte {offset})")
        self.offset = offset


class ExtractionError(ReporterError):
    """A router log line is missing a required key or has a malformed value."""


class UnknownSourceError(ReporterError):
    """No destination is mapped for a drain token."""

    def __init__(self, token: str):
        super().__init__("no destination mapped for drain token")
        self.token = token


class DispatchError(ReporterError):
    """A report could not be delivered to its destination."""
