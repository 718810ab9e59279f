"""Type-shape descriptions for chart SVG variants.

This module turns SVG file contents into a TypeScript-style type definition
describing the chart's options. Only a fixed sample definition is produced
for now; ``parse_svg_types`` is the entry point a content-driven analyzer
should replace.
"""

SAMPLE_TYPES_DEFINITION = """type StairsGearsOptions = {
  title: string;
  data: {
    value: string;
  }[];
  remark?: string;
};"""


def get_sample_types_definition() -> str:
    """Return the sample type definition embedded in description documents."""
    return SAMPLE_TYPES_DEFINITION


def parse_svg_types(svg_contents: list[str]) -> str:
    """Generate a type definition from the SVG variants of one chart.

    Args:
        svg_contents: Raw text of each SVG variant

    Returns:
        Type definition string for the chart's options
    """
    # Future: derive fields from text and group elements in the SVG markup
    return SAMPLE_TYPES_DEFINITION
