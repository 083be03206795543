"""Random-access and sequential line reading over a sorted log file."""

import logging
import threading
from typing import BinaryIO, Iterator, Optional, Tuple

from .errors import ExtractionCancelledError, TruncatedLineError
from .models import DATE_PREFIX_LENGTH, Probe
from .protocols import LoggerProtocol

NEWLINE = b"\n"


def strip_line_ending(raw_line: bytes) -> bytes:
    """Remove a trailing LF or CRLF from a raw line."""
    if raw_line.endswith(NEWLINE):
        raw_line = raw_line[:-1]
    if raw_line.endswith(b"\r"):
        raw_line = raw_line[:-1]
    return raw_line


def date_prefix(line: bytes) -> str:
    """Return the date token at column 0 of a line."""
    return line[:DATE_PREFIX_LENGTH].decode("ascii", errors="replace")


class LineDateReader:
    """
    Reads line dates from arbitrary byte offsets of an open log file.

    All reads are bounded by the file size captured when the extraction
    started, so bytes appended afterwards are never seen. The reader owns no
    state besides the handle it was given; callers open and close the file.
    """

    def __init__(
        self,
        handle: BinaryIO,
        file_size: int,
        chunk_size: int = 512,
        cancel_event: Optional[threading.Event] = None,
        logger: Optional[LoggerProtocol] = None,
    ):
        """
        Initialize the reader.

        Args:
            handle: Log file opened in binary mode
            file_size: Size snapshot of the file in bytes
            chunk_size: Number of bytes fetched per read
            cancel_event: Optional event checked before every read
            logger: Logger instance
        """
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        self._handle = handle
        self.file_size = file_size
        self.chunk_size = chunk_size
        self._cancel_event = cancel_event
        self._logger = logger or logging.getLogger(__name__)

    def _read(self, size: int) -> bytes:
        if self._cancel_event is not None and self._cancel_event.is_set():
            raise ExtractionCancelledError("Extraction cancelled")
        return self._handle.read(size)

    def _next_newline(self, position: int) -> Optional[int]:
        """Offset of the first newline at or after position, if any."""
        self._handle.seek(position)
        while position < self.file_size:
            chunk = self._read(min(self.chunk_size, self.file_size - position))
            if not chunk:
                break
            index = chunk.find(NEWLINE)
            if index != -1:
                return position + index
            position += len(chunk)
        return None

    def line_start_at_or_after(self, offset: int) -> int:
        """
        Find the first line boundary at or after an offset.

        Args:
            offset: Raw byte offset, possibly in the middle of a line

        Returns:
            Offset of the first byte of that line

        Raises:
            TruncatedLineError: If the offset lies in the final segment
        """
        if offset <= 0:
            return 0
        if offset >= self.file_size:
            raise TruncatedLineError(offset)
        # A line starts at offset when the byte before it is a newline.
        newline = self._next_newline(offset - 1)
        if newline is None:
            raise TruncatedLineError(offset)
        return newline + 1

    def date_at(self, offset: int) -> Probe:
        """
        Read the date of the first complete line starting at or after offset.

        The reader only moves forward: a probe in the middle of a line
        evaluates the next line, never the one it landed in.

        Args:
            offset: Raw byte offset

        Returns:
            Probe holding the line start and its date token

        Raises:
            TruncatedLineError: If no newline-terminated line starts there
        """
        start = self.line_start_at_or_after(offset)
        end = self._next_newline(start)
        if end is None:
            raise TruncatedLineError(offset)

        self._handle.seek(start)
        prefix = self._read(min(DATE_PREFIX_LENGTH, end - start))
        return Probe(offset=start, date=date_prefix(prefix))

    def segment_prefix(self, offset: int) -> str:
        """Date token at offset, whether or not the line is complete."""
        self._handle.seek(offset)
        return date_prefix(self._read(min(DATE_PREFIX_LENGTH, self.file_size - offset)))

    def previous_line_start(self, line_start: int) -> Optional[int]:
        """
        Find the start of the line preceding the one at line_start.

        Args:
            line_start: Offset of a line boundary

        Returns:
            Offset of the previous line, or None for the first line
        """
        if line_start <= 0:
            return None

        # line_start - 1 is the newline that terminates the previous line.
        end = line_start - 1
        while end > 0:
            begin = max(0, end - self.chunk_size)
            self._handle.seek(begin)
            chunk = self._read(end - begin)
            index = chunk.rfind(NEWLINE)
            if index != -1:
                return begin + index + 1
            end = begin
        return 0

    def iter_lines(
        self, start_offset: int, chunk_size: Optional[int] = None
    ) -> Iterator[Tuple[int, bytes]]:
        """
        Generator that yields complete lines from start_offset onwards.

        Chunks are accumulated until a newline appears, so at most one chunk
        plus one partial line is held in memory. A trailing segment without
        a newline is treated as a line still being written and is skipped.

        Args:
            start_offset: Line boundary to start reading from
            chunk_size: Bytes per read (defaults to the reader's chunk size)

        Yields:
            Tuples of (line offset, raw line including its newline)
        """
        chunk_size = chunk_size or self.chunk_size
        self._handle.seek(start_offset)
        remaining = self.file_size - start_offset
        position = start_offset
        buffer = b""

        while remaining > 0:
            chunk = self._read(min(chunk_size, remaining))
            if not chunk:
                break
            remaining -= len(chunk)
            buffer += chunk

            lines = buffer.split(NEWLINE)
            buffer = lines.pop()
            for line in lines:
                raw_line = line + NEWLINE
                yield position, raw_line
                position += len(raw_line)

        if buffer:
            self._logger.debug(
                f"Ignoring incomplete trailing segment of {len(buffer)} bytes "
                f"at offset {position}"
            )
