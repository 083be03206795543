"""Data models for search results and extraction statistics."""

import re
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

from .errors import InvalidDateFormatError

DATE_PREFIX_LENGTH = 10

_DATE_SHAPE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class DateKey(str):
    """A validated YYYY-MM-DD date token.

    Zero-padded ISO dates sort lexicographically in chronological order, so
    a DateKey compares directly against the raw prefix of a log line.
    """

    @classmethod
    def parse(cls, value: Optional[str]) -> "DateKey":
        """Validate a date string.

        Args:
            value: Candidate date string

        Returns:
            DateKey wrapping the value

        Raises:
            InvalidDateFormatError: If the value is not a real YYYY-MM-DD date
        """
        if not isinstance(value, str) or not _DATE_SHAPE.match(value):
            raise InvalidDateFormatError(str(value))
        try:
            datetime.strptime(value, "%Y-%m-%d")
        except ValueError:
            raise InvalidDateFormatError(value) from None
        return cls(value)


@dataclass(frozen=True)
class Probe:
    """Date read at the start of one complete line."""

    offset: int
    date: str


@dataclass(frozen=True)
class Found:
    """The target date was located; offset is the start of its first line."""

    offset: int
    probes: int = 0


@dataclass(frozen=True)
class NotFound:
    """The target date does not occur in the file."""

    probes: int = 0


SearchResult = Union[Found, NotFound]


@dataclass
class ScanStatistics:
    """Statistics for a sequential range scan."""

    matched_lines: int = 0
    bytes_scanned: int = 0


@dataclass
class ExtractionSummary:
    """Result of one extraction call."""

    target_date: str
    output_path: Path
    matched_lines: int = 0
    total_bytes_scanned: int = 0
    elapsed_time: float = 0.0
    file_size_bytes: int = 0
    start_offset: Optional[int] = None
    probes: int = 0

    @property
    def found(self) -> bool:
        """Whether any line matched the target date."""
        return self.start_offset is not None
