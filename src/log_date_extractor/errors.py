"""
Custom exceptions for the log date extractor.

Every failure an extraction can surface derives from LogExtractionError so
callers can catch the whole family at once.
"""

from typing import Any, Dict, Optional


class LogExtractionError(Exception):
    """Base exception for all extraction errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        """
        Initialize the exception.

        Args:
            message: Error message
            details: Optional dictionary with additional error details
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class InvalidDateFormatError(LogExtractionError, ValueError):
    """Target date is not a valid YYYY-MM-DD calendar date."""

    def __init__(self, value: str) -> None:
        """Initialize with the rejected value."""
        super().__init__(
            "Invalid date format. Please use YYYY-MM-DD", {"value": value}
        )


class SourceUnavailableError(LogExtractionError):
    """Log file is missing, unreadable, or cannot be stat'ed."""

    pass


class TruncatedLineError(LogExtractionError):
    """No complete line starts at or after the requested offset."""

    def __init__(self, offset: int) -> None:
        """Initialize with the offset that was probed."""
        super().__init__("No complete line at or after offset", {"offset": offset})
        self.offset = offset


class SinkWriteError(LogExtractionError):
    """Writing a matched line to the output destination failed."""

    pass


class ExtractionCancelledError(LogExtractionError):
    """Extraction was stopped through its cancellation signal."""

    pass
