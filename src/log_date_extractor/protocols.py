"""Protocol definitions for dependency inversion."""

from typing import Protocol


class LoggerProtocol(Protocol):
    """Protocol for progress reporting."""

    def info(self, message: str) -> None:
        """Log info message."""
        ...

    def debug(self, message: str) -> None:
        """Log debug message."""
        ...

    def warning(self, message: str) -> None:
        """Log warning message."""
        ...
