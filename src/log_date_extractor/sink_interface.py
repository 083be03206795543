"""Abstract interface for matched-line sinks."""

from abc import ABC, abstractmethod
from pathlib import Path


class LineSink(ABC):
    """Abstract base class for destinations of extracted log lines."""

    @property
    @abstractmethod
    def output_path(self) -> Path:
        """Location the sink writes to."""
        pass

    @abstractmethod
    def open(self) -> None:
        """Create the output destination and prepare for writing.

        The containing directory is created when it does not exist.
        """
        pass

    @abstractmethod
    def write(self, line: bytes) -> None:
        """Write one matched line.

        This method is called once per matched line, in file order. The
        line is passed without its line ending.

        Args:
            line: Raw line content
        """
        pass

    @abstractmethod
    def close(self) -> None:
        """Flush pending output and release resources."""
        pass

    def __enter__(self):
        """Context manager entry."""
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
