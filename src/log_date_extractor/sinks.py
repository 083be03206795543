"""Text and Parquet sinks for extracted log lines."""

import logging
from pathlib import Path
from typing import BinaryIO, List, Optional

import pandas as pd
import pyarrow as pa
import pyarrow.parquet as pq

from .errors import SinkWriteError
from .protocols import LoggerProtocol
from .reader import date_prefix
from .sink_interface import LineSink

OUTPUT_FORMATS = ("text", "parquet")

_EXTENSIONS = {"text": "txt", "parquet": "parquet"}


def output_path_for(output_dir: Path, target_date: str, output_format: str = "text") -> Path:
    """Build the deterministic output location for a date.

    Args:
        output_dir: Directory holding extraction results
        target_date: Extracted date
        output_format: One of OUTPUT_FORMATS

    Returns:
        Path such as output/output_2024-12-01.txt
    """
    if output_format not in _EXTENSIONS:
        raise ValueError(
            f"Unknown output format: {output_format}. "
            f"Valid options: {', '.join(OUTPUT_FORMATS)}"
        )
    return Path(output_dir) / f"output_{target_date}.{_EXTENSIONS[output_format]}"


class TextFileSink(LineSink):
    """
    Writes matched lines verbatim, one per line.

    No header or trailer is added, so repeated extractions of the same date
    produce byte-identical files.
    """

    def __init__(self, output_path: Path, logger: Optional[LoggerProtocol] = None):
        """
        Initialize text sink.

        Args:
            output_path: Path to output text file
            logger: Logger instance
        """
        self._output_path = Path(output_path)
        self._logger = logger or logging.getLogger(__name__)
        self._file_handle: Optional[BinaryIO] = None
        self.lines_written = 0

    @property
    def output_path(self) -> Path:
        return self._output_path

    def open(self) -> None:
        if self._file_handle is not None:
            raise RuntimeError("Sink already opened. Call close() first.")

        self._output_path.parent.mkdir(parents=True, exist_ok=True)
        self._file_handle = open(self._output_path, "wb")
        self.lines_written = 0
        self._logger.info(f"Writing matched lines to {self._output_path}")

    def write(self, line: bytes) -> None:
        if self._file_handle is None:
            raise RuntimeError("Sink not opened. Call open() first.")
        self._file_handle.write(line + b"\n")
        self.lines_written += 1

    def close(self) -> None:
        if self._file_handle is None:
            return
        try:
            # Buffered writes may only fail once flushed here.
            self._file_handle.close()
        except OSError as e:
            raise SinkWriteError(
                f"Failed to write {self._output_path}: {e}",
                {"path": str(self._output_path), "written": self.lines_written},
            ) from e
        finally:
            self._file_handle = None


class ParquetLineSink(LineSink):
    """
    Writes matched lines to a Parquet file in blocks.

    Lines are buffered and flushed as one row group per block, with a
    `date` column and a `line` column.
    """

    SCHEMA = pa.schema([("date", pa.string()), ("line", pa.string())])

    def __init__(
        self,
        output_path: Path,
        block_size: int = 10000,
        compression: str = "snappy",
        logger: Optional[LoggerProtocol] = None,
    ):
        """
        Initialize Parquet sink.

        Args:
            output_path: Path to output Parquet file
            block_size: Number of lines per row group
            compression: Compression codec
            logger: Logger instance
        """
        if block_size <= 0:
            raise ValueError("block_size must be positive")
        self._output_path = Path(output_path)
        self.block_size = block_size
        self.compression = compression
        self._logger = logger or logging.getLogger(__name__)
        self._writer: Optional[pq.ParquetWriter] = None
        self._dates: List[str] = []
        self._buffer: List[str] = []
        self._num_blocks = 0
        self.lines_written = 0

    @property
    def output_path(self) -> Path:
        return self._output_path

    def open(self) -> None:
        if self._writer is not None:
            raise RuntimeError("Sink already opened. Call close() first.")

        self._output_path.parent.mkdir(parents=True, exist_ok=True)
        self._writer = pq.ParquetWriter(
            str(self._output_path), self.SCHEMA, compression=self.compression
        )
        self._dates = []
        self._buffer = []
        self._num_blocks = 0
        self.lines_written = 0
        self._logger.info(
            f"Writing matched lines to {self._output_path} "
            f"(compression: {self.compression}, block size: {self.block_size:,})"
        )

    def write(self, line: bytes) -> None:
        if self._writer is None:
            raise RuntimeError("Sink not opened. Call open() first.")
        self._dates.append(date_prefix(line))
        self._buffer.append(line.decode("utf-8", errors="replace"))
        self.lines_written += 1
        if len(self._buffer) >= self.block_size:
            self._flush()

    def _flush(self) -> None:
        """Write buffered lines as one row group."""
        if not self._buffer:
            return

        df = pd.DataFrame({"date": self._dates, "line": self._buffer})
        table = pa.Table.from_pandas(df, schema=self.SCHEMA, preserve_index=False)
        try:
            self._writer.write_table(table)
        except (OSError, pa.ArrowException) as e:
            raise SinkWriteError(f"Failed to write Parquet block: {e}") from e

        self._num_blocks += 1
        self._logger.debug(f"Wrote block {self._num_blocks}: {len(df):,} lines")
        self._dates = []
        self._buffer = []

    def close(self) -> None:
        if self._writer is None:
            return
        try:
            try:
                self._flush()
            finally:
                self._writer.close()
        except OSError as e:
            raise SinkWriteError(
                f"Failed to write {self._output_path}: {e}",
                {"path": str(self._output_path), "written": self.lines_written},
            ) from e
        finally:
            self._writer = None
        self._logger.info(
            f"Finished Parquet output: {self.lines_written:,} lines in {self._num_blocks} blocks"
        )


def create_sink(
    output_format: str,
    output_dir: Path,
    target_date: str,
    block_size: int = 10000,
    logger: Optional[LoggerProtocol] = None,
) -> LineSink:
    """Create the sink for an output format.

    Args:
        output_format: One of OUTPUT_FORMATS
        output_dir: Directory holding extraction results
        target_date: Extracted date, used to name the output file
        block_size: Lines per row group for Parquet output
        logger: Logger instance

    Returns:
        An unopened LineSink
    """
    output_path = output_path_for(output_dir, target_date, output_format)
    if output_format == "parquet":
        return ParquetLineSink(output_path, block_size=block_size, logger=logger)
    return TextFileSink(output_path, logger=logger)
