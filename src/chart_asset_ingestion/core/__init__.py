"""Core utilities for chart bundle generation.

This package contains the record and manifest type definitions,
schema validation, and the SVG type-shape analyzer that are used
across the pipeline stages.
"""

from .typedefs import get_sample_types_definition, parse_svg_types
from .types import ChartMeta, DescriptionIndex, MetadataRecord
from .validator import collect_meta_errors, validate_meta

__all__ = [
    "ChartMeta",
    "DescriptionIndex",
    "MetadataRecord",
    "get_sample_types_definition",
    "parse_svg_types",
    "validate_meta",
    "collect_meta_errors",
]
