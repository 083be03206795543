"""Binary search over byte offsets for the first line of a date."""

import logging
from typing import Optional

from .errors import TruncatedLineError
from .models import DateKey, Found, NotFound, SearchResult
from .protocols import LoggerProtocol
from .reader import LineDateReader


class DateBinarySearcher:
    """
    Locates the first line of a target date with O(log n) probes.

    Each probe evaluates the first complete line at or after the midpoint,
    which makes the probed date a non-decreasing function of the offset.
    Equal dates keep narrowing the lower half, and a linear backtrack then
    walks over any equal lines the search did not rule out.
    """

    def __init__(self, reader: LineDateReader, logger: Optional[LoggerProtocol] = None):
        """
        Initialize searcher.

        Args:
            reader: Reader bound to the open log file
            logger: Logger instance
        """
        self.reader = reader
        self._logger = logger or logging.getLogger(__name__)

    def locate(self, target_date: DateKey) -> SearchResult:
        """
        Find the offset of the first line whose date equals target_date.

        Args:
            target_date: Validated date to search for

        Returns:
            Found with the line offset, or NotFound
        """
        file_size = self.reader.file_size
        if file_size == 0:
            self._logger.debug("Empty log file, nothing to search")
            return NotFound(probes=0)

        left = 0
        right = file_size - 1
        candidate = None
        probes = 0

        while left <= right:
            mid = left + (right - left) // 2
            probes += 1
            try:
                probe = self.reader.date_at(mid)
            except TruncatedLineError:
                # No date past this point; treat it as later than the target.
                right = mid - 1
                continue

            self._logger.debug(
                f"Probe {probes}: offset {mid} -> line {probe.offset} ({probe.date})"
            )
            if probe.date == target_date:
                candidate = probe.offset
                right = mid - 1
            elif probe.date < target_date:
                left = mid + 1
            else:
                right = mid - 1

        if candidate is None:
            self._logger.info(f"No entries found for date {target_date} after {probes} probes")
            return NotFound(probes=probes)

        candidate, steps = self._backtrack(candidate, target_date)
        probes += steps

        self._logger.info(
            f"Located {target_date} at offset {candidate:,} "
            f"({probes} probes, {steps} backtrack steps)"
        )
        return Found(offset=candidate, probes=probes)

    def _backtrack(self, candidate: int, target_date: DateKey):
        """Walk back line by line while the previous line has the same date."""
        steps = 0
        while True:
            previous = self.reader.previous_line_start(candidate)
            if previous is None:
                break
            steps += 1
            if self.reader.date_at(previous).date != target_date:
                break
            self._logger.debug(f"Backtracked to offset {previous}")
            candidate = previous
        return candidate, steps
