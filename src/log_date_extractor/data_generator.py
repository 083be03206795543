"""Generate sample log files using Faker library."""

import logging
from datetime import datetime, timedelta
from pathlib import Path
from typing import Generator

from faker import Faker

logger = logging.getLogger(__name__)

LOG_LEVELS = ["INFO", "WARN", "ERROR", "DEBUG"]

MESSAGES = [
    "User logged in",
    "Failed to connect to the database",
    "Disk space running low",
    "Cache cleared",
    "Request processed successfully",
]


class SampleLogGenerator:
    """Generate date-sorted log files for testing."""

    def __init__(self, seed: int = 42):
        """Initialize the log generator.

        Args:
            seed: Random seed for reproducibility
        """
        self.faker = Faker()
        self.faker.seed_instance(seed)

    def generate_entry(self, day: datetime) -> str:
        """Generate one log line for a day.

        The time of day is random, so entries are sorted by date only.

        Args:
            day: Calendar day of the entry

        Returns:
            Line shaped `YYYY-MM-DD HH:MM:SS LEVEL message`, without newline
        """
        timestamp = day.replace(
            hour=self.faker.random_int(0, 23),
            minute=self.faker.random_int(0, 59),
            second=self.faker.random_int(0, 59),
        ).strftime("%Y-%m-%d %H:%M:%S")
        level = self.faker.random_element(LOG_LEVELS)
        message = self.faker.random_element(MESSAGES)
        return (
            f"{timestamp} {level} {message} "
            f"user={self.faker.user_name()} ip={self.faker.ipv4()}"
        )

    def generate_lines(
        self, start_date: str, num_days: int, entries_per_day: int
    ) -> Generator[str, None, None]:
        """Generate log lines day by day.

        Args:
            start_date: First day in YYYY-MM-DD form
            num_days: Number of consecutive days
            entries_per_day: Number of entries per day

        Yields:
            Log lines without newline
        """
        first_day = datetime.strptime(start_date, "%Y-%m-%d")
        for day_index in range(num_days):
            day = first_day + timedelta(days=day_index)
            for _ in range(entries_per_day):
                yield self.generate_entry(day)
            logger.debug(f"Generated {entries_per_day:,} entries for {day:%Y-%m-%d}")

    def write_file(
        self,
        output_path: Path,
        start_date: str = "2024-12-01",
        num_days: int = 10,
        entries_per_day: int = 1000,
    ) -> int:
        """Write a sample log file.

        Args:
            output_path: Path of the log file to create
            start_date: First day in YYYY-MM-DD form
            num_days: Number of consecutive days
            entries_per_day: Number of entries per day

        Returns:
            Number of lines written
        """
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        logger.info(
            f"Generating {num_days} days x {entries_per_day:,} entries "
            f"starting {start_date} into {output_path}"
        )

        total = 0
        with open(output_path, "w", encoding="utf-8", newline="\n") as f:
            for line in self.generate_lines(start_date, num_days, entries_per_day):
                f.write(line + "\n")
                total += 1

        logger.info(f"Sample log data generated successfully: {total:,} lines")
        return total
