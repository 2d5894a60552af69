class PixelMapError(Exception):
    pass


class FormatError(PixelMapError, ValueError):
    """Malformed header or truncated pixel data."""


class InvalidParameter(PixelMapError, ValueError):
    """Bad transform argument, buffer shape or task range."""


class TaskFailure(PixelMapError, RuntimeError):
    """A parallel sub-computation raised; the original error is chained as __cause__."""

    def __init__(self, message, start=None, end=None):
        super().__init__(message)
        self.start = start
        self.end = end
