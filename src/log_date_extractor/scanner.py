"""Sequential scan collecting the contiguous run of a date."""

import logging
from typing import Optional

from .errors import SinkWriteError
from .models import DateKey, ScanStatistics
from .protocols import LoggerProtocol
from .reader import LineDateReader, date_prefix, strip_line_ending
from .sink_interface import LineSink


class RangeScanner:
    """
    Streams lines from a start offset to a sink until the date changes.

    Because the file is sorted by date, the first line with a different
    date ends the run and nothing after it is read.
    """

    def __init__(
        self,
        reader: LineDateReader,
        chunk_size: int = 64 * 1024,
        logger: Optional[LoggerProtocol] = None,
    ):
        """
        Initialize scanner.

        Args:
            reader: Reader bound to the open log file
            chunk_size: Bytes per sequential read
            logger: Logger instance
        """
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        self.reader = reader
        self.chunk_size = chunk_size
        self._logger = logger or logging.getLogger(__name__)

    def scan(self, start_offset: int, target_date: DateKey, sink: LineSink) -> ScanStatistics:
        """
        Write every line of target_date starting at start_offset to sink.

        Args:
            start_offset: Offset of the first line of the run
            target_date: Date being extracted
            sink: Destination for matched lines

        Returns:
            ScanStatistics with matched line count and bytes read

        Raises:
            SinkWriteError: If the sink fails; lines already written remain
        """
        stats = ScanStatistics()

        for offset, raw_line in self.reader.iter_lines(start_offset, self.chunk_size):
            stats.bytes_scanned += len(raw_line)
            line = strip_line_ending(raw_line)

            if date_prefix(line) != target_date:
                self._logger.debug(f"Date changed at offset {offset}, stopping scan")
                break

            try:
                sink.write(line)
            except OSError as e:
                raise SinkWriteError(
                    f"Failed to write matched line: {e}",
                    {"offset": offset, "written": stats.matched_lines},
                ) from e
            stats.matched_lines += 1

            if stats.matched_lines % 100000 == 0:
                self._logger.debug(f"Matched {stats.matched_lines:,} lines so far...")
        else:
            self._warn_incomplete_tail(start_offset + stats.bytes_scanned, target_date)

        self._logger.info(
            f"Scan matched {stats.matched_lines:,} lines "
            f"({stats.bytes_scanned:,} bytes read)"
        )
        return stats

    def _warn_incomplete_tail(self, offset: int, target_date: DateKey) -> None:
        """Report a final line without newline that carries the target date."""
        if offset >= self.reader.file_size:
            return
        if self.reader.segment_prefix(offset) == target_date:
            self._logger.warning(
                f"Skipped incomplete final line at offset {offset:,} for {target_date} "
                f"(no trailing newline)"
            )
