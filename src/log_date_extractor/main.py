"""Main entry point for the log date extractor."""

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

from .config import AppConfig, get_app_config, get_sample_data_config
from .data_generator import SampleLogGenerator
from .errors import LogExtractionError
from .models import DateKey, ExtractionSummary
from .pipeline import ExtractionPipeline
from .sinks import OUTPUT_FORMATS

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False):
    """Configure logging level.

    Args:
        verbose: Enable verbose logging
    """
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)
    else:
        logging.getLogger().setLevel(logging.INFO)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments.

    The date is optional at the parser level so that a missing date is
    reported with exit code 1 rather than argparse's usage error.
    """
    parser = argparse.ArgumentParser(
        prog="log-date-extractor",
        description="Extract all lines of one date from a date-sorted log file.",
    )
    parser.add_argument("date", nargs="?", help="Target date in YYYY-MM-DD format")
    parser.add_argument("--log-file", type=Path, help="Sorted log file to search")
    parser.add_argument("--output-dir", type=Path, help="Directory for output files")
    parser.add_argument("--format", choices=OUTPUT_FORMATS, help="Output file format")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def apply_overrides(config: AppConfig, args: argparse.Namespace) -> AppConfig:
    """Override environment configuration with command line flags."""
    overrides = {}
    if args.log_file is not None:
        overrides["log_file_path"] = args.log_file
    if args.output_dir is not None:
        overrides["output_dir"] = args.output_dir
    if args.format is not None:
        overrides["output_format"] = args.format
    return replace(config, **overrides)


def ensure_sample_data(config: AppConfig) -> None:
    """Generate a sample log file when the configured one does not exist."""
    if config.log_file_path.exists() or not config.generate_sample_data:
        return

    sample_config = get_sample_data_config()
    logger.info("Generating sample log data...")
    generator = SampleLogGenerator(seed=sample_config.seed)
    generator.write_file(
        config.log_file_path,
        start_date=sample_config.start_date,
        num_days=sample_config.num_days,
        entries_per_day=sample_config.entries_per_day,
    )


def print_summary(summary: ExtractionSummary):
    """Print summary statistics.

    Args:
        summary: Result of the extraction
    """
    print("\n" + "=" * 80)
    print("EXTRACTION SUMMARY")
    print("=" * 80)

    print(f"\n  Target date: {summary.target_date}")
    print(f"  Matching lines found: {summary.matched_lines:,}")
    print(f"  Log file size: {summary.file_size_bytes:,} bytes")
    print(f"  Bytes scanned: {summary.total_bytes_scanned:,}")
    print(f"  Search probes: {summary.probes}")
    if summary.start_offset is not None:
        print(f"  First match at offset: {summary.start_offset:,}")
    print(f"  Execution time: {summary.elapsed_time:.2f} seconds")
    print(f"  Output saved to: {summary.output_path}")

    print("\n" + "=" * 80)


def main(argv: Optional[List[str]] = None) -> int:
    """Main execution function."""
    args = parse_args(argv)
    setup_logging(args.verbose)

    if not args.date:
        logger.error("Please provide a date in YYYY-MM-DD format")
        return 1

    try:
        DateKey.parse(args.date)
        config = apply_overrides(get_app_config(), args)

        ensure_sample_data(config)

        pipeline = ExtractionPipeline.from_config(config)
        summary = pipeline.extract(args.date)

        print_summary(summary)
        logger.info("Extraction completed successfully!")
        return 0

    except KeyboardInterrupt:
        logger.warning("Extraction interrupted by user")
        return 130
    except (LogExtractionError, ValueError, OSError) as e:
        logger.error(f"Error during log extraction: {e}", exc_info=args.verbose)
        return 1


if __name__ == "__main__":
    sys.exit(main())
