"""Log Date Extractor - Pull one day's lines out of a large date-sorted log file."""

__version__ = "0.1.0"

from .errors import (
    ExtractionCancelledError,
    InvalidDateFormatError,
    LogExtractionError,
    SinkWriteError,
    SourceUnavailableError,
    TruncatedLineError,
)
from .models import DateKey, ExtractionSummary, Found, NotFound, ScanStatistics, SearchResult
from .pipeline import ExtractionPipeline
from .reader import LineDateReader
from .scanner import RangeScanner
from .searcher import DateBinarySearcher
from .sink_interface import LineSink
from .sinks import ParquetLineSink, TextFileSink, create_sink

__all__ = [
    # Models
    "DateKey",
    "Found",
    "NotFound",
    "SearchResult",
    "ScanStatistics",
    "ExtractionSummary",
    # Errors
    "LogExtractionError",
    "InvalidDateFormatError",
    "SourceUnavailableError",
    "TruncatedLineError",
    "SinkWriteError",
    "ExtractionCancelledError",
    # Core
    "LineDateReader",
    "DateBinarySearcher",
    "RangeScanner",
    "ExtractionPipeline",
    # Sinks
    "LineSink",
    "TextFileSink",
    "ParquetLineSink",
    "create_sink",
]
