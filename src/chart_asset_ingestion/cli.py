"""Command-line interface for the chart asset bundler.

This module provides the CLI entry point for building chart bundles
from a metadata spreadsheet and an SVG archive.
"""

import argparse
import logging
import sys

from .config import DEFAULT_OUTPUT_DIR, BundleConfig
from .pipeline import BundlePipeline, BundleReport

logger = logging.getLogger("chart_asset_ingestion")

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"


def configure_logging(verbosity: int) -> None:
    """Send log records to stderr.

    Args:
        verbosity: -1 for warnings only, 0 for info, 1 or more for debug
    """
    if verbosity < 0:
        level = logging.WARNING
    elif verbosity == 0:
        level = logging.INFO
    else:
        level = logging.DEBUG
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="chart-asset-ingest",
        description="Bundle chart SVG variants with their spreadsheet metadata",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Basic usage, writes to ./output
  chart-asset-ingest --excel charts.xlsx --zip charts.zip

  # Custom output directory with debug logging
  chart-asset-ingest -e charts.xlsx -z charts.zip -o dist/charts -v
        """,
    )

    parser.add_argument("--excel", "-e", required=True, help="Spreadsheet with one chart per row")

    parser.add_argument("--zip", "-z", required=True, help="ZIP archive containing the SVG files")

    parser.add_argument(
        "--output",
        "-o",
        default=DEFAULT_OUTPUT_DIR,
        help=f"Output directory (default: {DEFAULT_OUTPUT_DIR})",
    )

    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        "--verbose", "-v", action="count", default=0, help="Increase logging verbosity"
    )
    verbosity.add_argument(
        "--quiet", "-q", action="store_true", help="Only log warnings and errors"
    )

    return parser


def run(
    excel_path: str,
    zip_path: str,
    output_dir: str | None = None,
    log: logging.Logger | None = None,
) -> BundleReport:
    """Build chart bundles from the given inputs.

    Args:
        excel_path: Spreadsheet path
        zip_path: ZIP archive path
        output_dir: Output directory (defaults to "output")
        log: Logger for the run

    Returns:
        Summary of the processed records

    Raises:
        FileNotFoundError: If an input file is missing
    """
    config = BundleConfig.from_args(excel_path, zip_path, output_dir)
    return BundlePipeline(config, log=log).run()


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the bundling script."""
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(-1 if args.quiet else args.verbose)

    try:
        report = run(args.excel, args.zip, args.output, log=logger)
    except Exception as e:
        logger.error("Error: Failed to build chart bundles: %s", e, exc_info=args.verbose > 0)
        sys.exit(1)

    print(
        f"Bundled {len(report.bundled)} of {report.records_read} charts into {report.metas_json}",
        file=sys.stderr,
    )


if __name__ == "__main__":
    main()
