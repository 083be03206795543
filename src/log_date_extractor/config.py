"""Configuration management for the application."""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from .models import DateKey
from .sinks import OUTPUT_FORMATS

# Load environment variables from .env file
load_dotenv()


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes")


@dataclass
class AppConfig:
    """Application configuration parameters."""

    log_file_path: Path
    output_dir: Path
    output_format: str = "text"
    probe_chunk_size: int = 512
    scan_chunk_size: int = 64 * 1024
    parquet_block_size: int = 10000
    generate_sample_data: bool = True

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Load application configuration from environment variables."""
        return cls(
            log_file_path=Path(os.getenv("LOG_FILE_PATH", "test_logs.log")),
            output_dir=Path(os.getenv("OUTPUT_DIR", "output")),
            output_format=os.getenv("OUTPUT_FORMAT", "text"),  # text, parquet
            probe_chunk_size=int(os.getenv("PROBE_CHUNK_SIZE", "512")),
            scan_chunk_size=int(os.getenv("SCAN_CHUNK_SIZE", "65536")),
            parquet_block_size=int(os.getenv("PARQUET_BLOCK_SIZE", "10000")),
            generate_sample_data=_env_bool("GENERATE_SAMPLE_DATA", "true"),
        )

    def __post_init__(self):
        """Validate configuration after initialization."""
        self.log_file_path = Path(self.log_file_path)
        self.output_dir = Path(self.output_dir)
        if self.output_format not in OUTPUT_FORMATS:
            raise ValueError(
                f"Unknown output format: {self.output_format}. "
                f"Valid options: {', '.join(OUTPUT_FORMATS)}"
            )
        if self.probe_chunk_size <= 0:
            raise ValueError("probe_chunk_size must be positive")
        if self.scan_chunk_size <= 0:
            raise ValueError("scan_chunk_size must be positive")
        if self.parquet_block_size <= 0:
            raise ValueError("parquet_block_size must be positive")


@dataclass
class SampleDataConfig:
    """Sample log generation parameters."""

    start_date: str = "2024-12-01"
    num_days: int = 10
    entries_per_day: int = 1000
    seed: int = 42

    @classmethod
    def from_env(cls) -> "SampleDataConfig":
        """Load sample data configuration from environment variables."""
        return cls(
            start_date=os.getenv("SAMPLE_START_DATE", "2024-12-01"),
            num_days=int(os.getenv("SAMPLE_NUM_DAYS", "10")),
            entries_per_day=int(os.getenv("SAMPLE_ENTRIES_PER_DAY", "1000")),
            seed=int(os.getenv("SAMPLE_SEED", "42")),
        )

    def __post_init__(self):
        """Validate configuration after initialization."""
        DateKey.parse(self.start_date)
        if self.num_days <= 0:
            raise ValueError("num_days must be positive")
        if self.entries_per_day <= 0:
            raise ValueError("entries_per_day must be positive")


def get_app_config() -> AppConfig:
    """Get application configuration."""
    return AppConfig.from_env()


def get_sample_data_config() -> SampleDataConfig:
    """Get sample data configuration."""
    return SampleDataConfig.from_env()
