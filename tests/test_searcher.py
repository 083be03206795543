"""Tests for searcher module."""

from datetime import date, timedelta

import pytest

from conftest import SCENARIO, build_log, first_offset
from log_date_extractor.models import DateKey, Found, NotFound
from log_date_extractor.reader import LineDateReader
from log_date_extractor.searcher import DateBinarySearcher


def locate(path, target, chunk_size=512):
    with open(path, "rb") as handle:
        reader = LineDateReader(handle, path.stat().st_size, chunk_size=chunk_size)
        return DateBinarySearcher(reader).locate(DateKey.parse(target))


def day(n: int) -> str:
    return (date(2024, 12, 1) + timedelta(days=n)).isoformat()


def test_locate_scenario(make_log):
    """Test the first line of a duplicated date is found."""
    path = make_log(SCENARIO)

    result = locate(path, "2024-12-01")
    assert result == Found(offset=0, probes=result.probes)
    assert locate(path, "2024-12-02").offset == 13
    assert locate(path, "2024-12-03").offset == 39


def test_locate_empty_file(make_log):
    """Test that an empty file is NotFound without probing."""
    result = locate(make_log(b""), "2024-12-01")

    assert isinstance(result, NotFound)
    assert result.probes == 0


def test_locate_single_line_file(make_log):
    """Test a single-line file reduces to a direct comparison."""
    path = make_log(b"2024-12-05 only line\n")

    assert isinstance(locate(path, "2024-12-05"), Found)
    assert locate(path, "2024-12-05").offset == 0
    assert isinstance(locate(path, "2024-12-04"), NotFound)
    assert isinstance(locate(path, "2024-12-06"), NotFound)


@pytest.mark.parametrize("target", ["2024-11-30", "2024-12-04", "2025-01-01", "1999-01-01"])
def test_locate_absent_outside_range(make_log, target):
    """Test dates before the first and after the last line."""
    result = locate(make_log(SCENARIO), target)
    assert isinstance(result, NotFound)
    assert result.probes > 0


def test_locate_absent_in_gap(make_log):
    """Test a date that falls between two present dates."""
    data = build_log(["2024-12-01"] * 5 + ["2024-12-03"] * 5 + ["2024-12-07"] * 5)
    path = make_log(data)

    for target in ["2024-12-02", "2024-12-04", "2024-12-05", "2024-12-06"]:
        assert isinstance(locate(path, target), NotFound)


@pytest.mark.parametrize("chunk_size", [1, 16, 512])
def test_locate_every_present_date(make_log, chunk_size):
    """Test every present date against a linear reference scan."""
    dates = []
    for n in range(12):
        dates.extend([day(n)] * ((n * 7) % 11 + 1))
    data = build_log(dates)
    path = make_log(data)

    for n in range(12):
        result = locate(path, day(n), chunk_size=chunk_size)
        assert isinstance(result, Found)
        assert result.offset == first_offset(data, day(n))


@pytest.mark.parametrize("run_length", [1, 2, 3, 8, 31, 200])
def test_locate_duplicate_run(make_log, run_length):
    """Test that a run of equal dates resolves to its first line."""
    dates = ["2024-12-01"] * 17 + ["2024-12-02"] * run_length + ["2024-12-03"] * 23
    data = build_log(dates)
    path = make_log(data)

    result = locate(path, "2024-12-02")

    assert isinstance(result, Found)
    assert result.offset == first_offset(data, "2024-12-02")


def test_locate_first_and_last_dates(make_log):
    """Test the boundary dates of a file."""
    dates = ["2024-12-01"] * 3 + [day(n) for n in range(1, 40)] + ["2025-01-09"] * 4
    data = build_log(dates)
    path = make_log(data)

    assert locate(path, "2024-12-01").offset == 0
    assert locate(path, "2025-01-09").offset == first_offset(data, "2025-01-09")


def test_locate_uses_logarithmic_probes(make_log):
    """Test that the number of probes grows with log of the file size."""
    dates = [day(n // 50) for n in range(5000)]
    path = make_log(build_log(dates))
    size = path.stat().st_size

    result = locate(path, day(57))

    assert isinstance(result, Found)
    assert result.probes <= size.bit_length() + 2


def test_locate_ignores_unterminated_final_line(make_log):
    """Test that a line without trailing newline is not a match."""
    path = make_log(b"2024-12-01 A\n2024-12-02 B\n2024-12-03 partial")

    assert isinstance(locate(path, "2024-12-03"), NotFound)
    assert locate(path, "2024-12-02").offset == 13
    assert locate(path, "2024-12-01").offset == 0


def test_locate_with_crlf_line_endings(make_log):
    """Test files written with Windows line endings."""
    data = b"2024-12-01 A\r\n2024-12-02 B\r\n2024-12-02 C\r\n2024-12-03 D\r\n"
    path = make_log(data)

    assert locate(path, "2024-12-02").offset == 14
    assert locate(path, "2024-12-03").offset == 42


def test_backtrack_walks_to_first_line(make_log):
    """Test that the backtrack phase corrects a later candidate."""
    data = build_log(["2024-12-01"] * 2 + ["2024-12-02"] * 6 + ["2024-12-03"])
    path = make_log(data)
    with open(path, "rb") as handle:
        reader = LineDateReader(handle, len(data))
        searcher = DateBinarySearcher(reader)
        last_line = reader.previous_line_start(first_offset(data, "2024-12-03"))

        offset, steps = searcher._backtrack(last_line, DateKey.parse("2024-12-02"))

    assert offset == first_offset(data, "2024-12-02")
    assert steps == 6
