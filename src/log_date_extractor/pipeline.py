"""Pipeline orchestrating search, scan and output for one date."""

import logging
import os
import threading
import time
from pathlib import Path
from typing import Optional

from .config import AppConfig
from .errors import SourceUnavailableError
from .models import DateKey, ExtractionSummary, NotFound
from .protocols import LoggerProtocol
from .reader import LineDateReader
from .scanner import RangeScanner
from .searcher import DateBinarySearcher
from .sinks import create_sink


class ExtractionPipeline:
    """
    Extracts the lines of one date from a sorted log file.

    The pipeline holds configuration only. Every call to extract() opens its
    own file handle and sink, so independent extractions can run in
    parallel threads against the same file.
    """

    def __init__(
        self,
        log_file_path: Path,
        output_dir: Path = Path("output"),
        output_format: str = "text",
        probe_chunk_size: int = 512,
        scan_chunk_size: int = 64 * 1024,
        parquet_block_size: int = 10000,
        logger: Optional[LoggerProtocol] = None,
    ):
        """
        Initialize pipeline.

        Args:
            log_file_path: Path to the sorted log file
            output_dir: Directory for extraction results
            output_format: Output format (text, parquet)
            probe_chunk_size: Bytes per read during binary search
            scan_chunk_size: Bytes per read during the sequential scan
            parquet_block_size: Lines per row group for Parquet output
            logger: Logger instance
        """
        self.log_file_path = Path(log_file_path)
        self.output_dir = Path(output_dir)
        self.output_format = output_format
        self.probe_chunk_size = probe_chunk_size
        self.scan_chunk_size = scan_chunk_size
        self.parquet_block_size = parquet_block_size
        self._logger = logger or logging.getLogger(__name__)

    @classmethod
    def from_config(
        cls, config: AppConfig, logger: Optional[LoggerProtocol] = None
    ) -> "ExtractionPipeline":
        """Create a pipeline from an AppConfig."""
        return cls(
            log_file_path=config.log_file_path,
            output_dir=config.output_dir,
            output_format=config.output_format,
            probe_chunk_size=config.probe_chunk_size,
            scan_chunk_size=config.scan_chunk_size,
            parquet_block_size=config.parquet_block_size,
            logger=logger,
        )

    def extract(
        self, target_date: str, cancel_event: Optional[threading.Event] = None
    ) -> ExtractionSummary:
        """
        Extract every line of target_date into the output destination.

        Args:
            target_date: Date in YYYY-MM-DD form
            cancel_event: Optional event that aborts the extraction when set

        Returns:
            ExtractionSummary for this call

        Raises:
            InvalidDateFormatError: If target_date is malformed (no I/O done)
            SourceUnavailableError: If the log file cannot be opened or stat'ed
            SinkWriteError: If writing a matched line fails
            ExtractionCancelledError: If cancel_event is set mid-extraction
        """
        start_time = time.time()
        date_key = DateKey.parse(target_date)

        self._logger.info(f"Starting log extraction for date: {date_key}")

        sink = create_sink(
            self.output_format,
            self.output_dir,
            date_key,
            block_size=self.parquet_block_size,
            logger=self._logger,
        )
        summary = ExtractionSummary(target_date=date_key, output_path=sink.output_path)

        with sink:
            handle, file_size = self._open_source()
            with handle:
                summary.file_size_bytes = file_size
                self._logger.info(f"Log file size: {file_size:,} bytes")

                reader = LineDateReader(
                    handle,
                    file_size,
                    chunk_size=self.probe_chunk_size,
                    cancel_event=cancel_event,
                    logger=self._logger,
                )
                result = DateBinarySearcher(reader, self._logger).locate(date_key)
                summary.probes = result.probes

                if isinstance(result, NotFound):
                    summary.elapsed_time = time.time() - start_time
                    return summary

                scanner = RangeScanner(reader, self.scan_chunk_size, self._logger)
                stats = scanner.scan(result.offset, date_key, sink)

        summary.start_offset = result.offset
        summary.matched_lines = stats.matched_lines
        summary.total_bytes_scanned = stats.bytes_scanned
        summary.elapsed_time = time.time() - start_time

        self._logger.info(
            f"Extracted {summary.matched_lines:,} lines for {date_key} "
            f"in {summary.elapsed_time:.2f} seconds"
        )
        return summary

    def _open_source(self):
        """Open the log file and snapshot its size."""
        try:
            handle = open(self.log_file_path, "rb")
        except OSError as e:
            raise SourceUnavailableError(
                f"Cannot open log file {self.log_file_path}: {e.strerror or e}",
                {"path": str(self.log_file_path)},
            ) from e

        try:
            file_size = os.fstat(handle.fileno()).st_size
        except OSError as e:
            handle.close()
            raise SourceUnavailableError(
                f"Cannot stat log file {self.log_file_path}: {e.strerror or e}",
                {"path": str(self.log_file_path)},
            ) from e
        return handle, file_size
