"""Bundling pipeline for chart assets.

This module provides the main interface for turning a metadata spreadsheet
and an SVG archive into chart bundles. Each record is handled on its own:
a record that fails or has no usable files is logged and skipped without
affecting the others.
"""

import logging
import shutil
from dataclasses import dataclass, field
from pathlib import Path

from jsonschema import ValidationError

from .archive import extract_archive
from .config import BundleConfig
from .core.types import MetadataRecord
from .generator import FileGenerator
from .scanner import copy_all_matches, find_all_matches, validate_path_safety
from .spreadsheet import read_records

logger = logging.getLogger(__name__)

# Outcomes of process_record
BUNDLED = "bundled"
SKIPPED = "skipped"
NO_MATCHES = "no_matches"
NO_NUMBERED_FILES = "no_numbered_files"
FAILED = "failed"


@dataclass
class BundleReport:
    """Summary of one pipeline run.

    Attributes:
        records_read: Number of records read from the spreadsheet
        bundled: Chart ids that received a bundle
        no_matches: Chart ids without any matching SVG
        no_numbered_files: Chart ids whose SVGs all lacked a numeric suffix
        failed: Chart ids skipped because of an I/O or validation error
        skipped: Number of records without an id
        metas_json: Path of the aggregate description document
    """

    records_read: int = 0
    bundled: list[str] = field(default_factory=list)
    no_matches: list[str] = field(default_factory=list)
    no_numbered_files: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)
    skipped: int = 0
    metas_json: Path | None = None

    def record(self, chart_id: str, outcome: str) -> None:
        """Count one processed record."""
        if outcome == BUNDLED:
            self.bundled.append(chart_id)
        elif outcome == NO_MATCHES:
            self.no_matches.append(chart_id)
        elif outcome == NO_NUMBERED_FILES:
            self.no_numbered_files.append(chart_id)
        elif outcome == FAILED:
            self.failed.append(chart_id)
        else:
            self.skipped += 1


class BundlePipeline:
    """Main interface for chart bundle generation.

    Example:
        >>> config = BundleConfig.from_args("charts.xlsx", "charts.zip", "output")
        >>> report = BundlePipeline(config).run()
        >>> print(report.bundled)
    """

    def __init__(
        self,
        config: BundleConfig,
        log: logging.Logger | None = None,
        generator: FileGenerator | None = None,
    ):
        """Initialize the pipeline.

        Args:
            config: Input files and output location
            log: Logger used by every stage of the run
            generator: File generator (defaults to one sharing the logger)
        """
        self.config = config
        self.log = log or logger
        self.generator = generator or FileGenerator(self.log)

    def prepare_output(self) -> None:
        """Create the output, assets and metas directories.

        Existing content is left in place.
        """
        self.config.output_dir.mkdir(parents=True, exist_ok=True)
        self.config.assets_dir.mkdir(exist_ok=True)
        self.config.metas_dir.mkdir(exist_ok=True)
        self.log.info("Output directory: %s", self.config.output_dir)

    def run(self) -> BundleReport:
        """Run the whole pipeline.

        Returns:
            Summary of the processed records

        Raises:
            FileNotFoundError: If the spreadsheet or archive is missing
            zipfile.BadZipFile: If the archive is corrupt
        """
        self.prepare_output()

        records = read_records(self.config.excel_path, self.log)
        extracted_dir = extract_archive(self.config.zip_path, self.config.output_dir, self.log)

        report = BundleReport(records_read=len(records))
        for record in records:
            outcome = self.process_record(record, extracted_dir)
            report.record(record.chart_id, outcome)

        report.metas_json = self.config.metas_json_path
        self.generator.merge_descriptions(self.config.metas_dir, report.metas_json)

        self.log.info(
            "Done: %d bundled, %d without matches, %d without numbered files, %d failed",
            len(report.bundled),
            len(report.no_matches),
            len(report.no_numbered_files),
            len(report.failed),
        )
        return report

    def process_record(self, record: MetadataRecord, extracted_dir: Path) -> str:
        """Build the bundle of a single record.

        Args:
            record: Spreadsheet record
            extracted_dir: Root of the extracted archive

        Returns:
            One of BUNDLED, SKIPPED, NO_MATCHES, NO_NUMBERED_FILES, FAILED
        """
        chart_id = record.chart_id
        if not chart_id:
            self.log.info("Skipping record without id: %s", record)
            return SKIPPED

        self.log.info("Processing chart %s (%s)", chart_id, record.name_zh or record.name or "unnamed")
        chart_dir = self.config.chart_dir(chart_id)
        try:
            validate_chart_dir(chart_dir, self.config.assets_dir)
        except ValueError as e:
            self.log.error("Refusing to bundle %s: %s", chart_id, e)
            return FAILED

        try:
            matches = find_all_matches(extracted_dir, chart_id, self.log)
            if not matches:
                self.log.info("No SVG files contain id %s, skipping", chart_id)
                return NO_MATCHES

            version_dir = self.config.version_dir(chart_id)
            reset_directory(version_dir)

            file_numbers = copy_all_matches(matches, version_dir, chart_id, self.log)
            if not file_numbers:
                self.log.info("No SVG files copied for %s, skipping", chart_id)
                shutil.rmtree(chart_dir, ignore_errors=True)
                return NO_NUMBERED_FILES

            self.generator.create_meta_json(version_dir, record, file_numbers)
            self.generator.create_description(self.config.metas_dir, record)

        except (OSError, ValueError, ValidationError) as e:
            self.log.error("Failed to bundle %s: %s", chart_id, e)
            shutil.rmtree(chart_dir, ignore_errors=True)
            return FAILED

        return BUNDLED


def validate_chart_dir(chart_dir: Path, assets_dir: Path) -> None:
    """Check that a chart directory is a direct child of the assets directory.

    Identifiers such as "..", "." or "a/b" would otherwise point at the
    output directory, the assets directory itself or another chart.

    Raises:
        ValueError: If the directory resolves anywhere else
    """
    validate_path_safety(chart_dir, assets_dir)
    if chart_dir.resolve().parent != assets_dir.resolve():
        raise ValueError(f"Path {chart_dir} is not a chart directory under {assets_dir}")


def reset_directory(path: Path) -> None:
    """Create a directory, removing anything it already contains."""
    if path.exists():
        shutil.rmtree(path)
    path.mkdir(parents=True)
