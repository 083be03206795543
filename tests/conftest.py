"""Shared fixtures for log file tests."""

from pathlib import Path
from typing import List

import pytest

from log_date_extractor.sink_interface import LineSink

SCENARIO = b"2024-12-01 A\n2024-12-02 B\n2024-12-02 C\n2024-12-03 D\n"


class ListSink(LineSink):
    """In-memory sink collecting decoded lines."""

    def __init__(self):
        self.lines: List[str] = []
        self.opened = False

    @property
    def output_path(self) -> Path:
        return Path("memory")

    def open(self) -> None:
        self.opened = True

    def write(self, line: bytes) -> None:
        self.lines.append(line.decode("utf-8"))

    def close(self) -> None:
        self.opened = False


def build_log(dates: List[str], content: str = "entry") -> bytes:
    """Build log content with one line per date, varying line lengths."""
    return b"".join(
        f"{date} {content} {i} {'x' * (i % 7)}\n".encode("utf-8")
        for i, date in enumerate(dates)
    )


def linear_matches(data: bytes, date: str) -> List[str]:
    """Independent reference: every complete line starting with date."""
    lines = data.split(b"\n")[:-1]
    return [line.decode("utf-8") for line in lines if line[:10].decode("ascii") == date]


def first_offset(data: bytes, date: str):
    """Offset of the first complete line of date, or None."""
    offset = 0
    for line in data.split(b"\n")[:-1]:
        if line[:10].decode("ascii") == date:
            return offset
        offset += len(line) + 1
    return None


@pytest.fixture
def make_log(tmp_path):
    """Write bytes to a log file and return its path."""

    def _make_log(data: bytes, name: str = "test.log") -> Path:
        path = tmp_path / name
        path.write_bytes(data)
        return path

    return _make_log
