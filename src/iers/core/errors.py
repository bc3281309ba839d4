class IERSError(Exception):
    """Base error."""

class InvalidDate(IERSError, ValueError):
    """Raised when a calendar date is outside the proleptic Gregorian range or malformed."""

class OutOfRange(IERSError, ValueError):
    """Raised when a Julian Day lies outside the range the calendar conversion supports."""

class NoDataAvailable(IERSError):
    """Raised when the predictive ΔT bulletin is exhausted for the requested date."""

class MalformedDataset(IERSError):
    """Raised when bulletin content breaks an interpolation or layout invariant."""

    def __init__(self, message: str, *, source: str | None = None, line: int | None = None) -> None:
        where = ""
        if source is not None:
            where = f" [{source}" + (f":{line}" if line is not None else "") + "]"
        super().__init__(message + where)
        self.source = source
        self.line = line

class SourceUnavailable(IERSError):
    """Raised when a bulletin file is not present in local storage."""

class RetrievalError(IERSError):
    """Raised when no bulletin mirror could be reached."""
