"""Chart Asset Ingestion.

This package reads a spreadsheet of chart metadata and a ZIP archive of
SVG variants, and writes one bundle per chart (renumbered SVGs plus a
meta.json manifest) together with Markdown descriptions merged into a
single metas.json document.
"""

# Core library interface
from .pipeline import BundlePipeline, BundleReport
from .config import BundleConfig

# Pipeline stages
from .archive import extract_archive
from .generator import FileGenerator, build_meta, parse_range, render_description, resolve_range
from .scanner import copy_all_matches, copy_numbered_match, extract_file_number, find_all_matches
from .spreadsheet import read_records

# Core utilities
from .core import ChartMeta, DescriptionIndex, MetadataRecord, parse_svg_types, validate_meta

# CLI interface
from .cli import main, run

__version__ = "0.1.0"

__all__ = [
    # Primary library interface
    "BundlePipeline",
    "BundleReport",
    "BundleConfig",
    # Pipeline stages
    "read_records",
    "extract_archive",
    "find_all_matches",
    "copy_all_matches",
    "copy_numbered_match",
    "extract_file_number",
    "FileGenerator",
    "build_meta",
    "parse_range",
    "resolve_range",
    "render_description",
    # Core utilities
    "ChartMeta",
    "DescriptionIndex",
    "MetadataRecord",
    "parse_svg_types",
    "validate_meta",
    # CLI
    "main",
    "run",
]
