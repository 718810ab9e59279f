"""Manifest and description generation.

This module converts a metadata record and its copied SVG variants into
the files of a chart bundle: ``meta.json`` in the version directory, a
Markdown description in the shared metas directory, and finally the
``metas.json`` aggregate of all descriptions.
"""

import json
import logging
import re
from pathlib import Path
from typing import Any

from .config import DEFAULT_RANGE, META_JSON_NAME, RANGE_FIELD, VERSION_TAG
from .core.typedefs import get_sample_types_definition, parse_svg_types
from .core.types import ChartMeta, DescriptionIndex, MetadataRecord
from .core.validator import validate_meta

logger = logging.getLogger(__name__)

# Bracketed pair of integers, e.g. "[1,10]" or "[3, 9]"
RANGE_PATTERN = re.compile(r"\[\s*(\d+)\s*,\s*(\d+)\s*\]")

DESCRIPTION_TEMPLATE = """# {title}
- 别名：{alias}，英文名 {name}

## 使用场景：
{description}

## 信息图属性:
{types}

## 备注
{remark}
"""


def parse_range(text: str | None) -> list[int] | None:
    """Parse a bracketed numeric range.

    Args:
        text: Free-form cell text, e.g. "[1,10]"

    Returns:
        Ascending [low, high] pair, or None if no range is present
    """
    if not text:
        return None
    match = RANGE_PATTERN.search(text)
    if match is None:
        return None
    return sorted([int(match.group(1)), int(match.group(2))])


def resolve_range(
    record: MetadataRecord,
    file_numbers: list[int],
    log: logging.Logger | None = None,
) -> list[int]:
    """Determine the numeric range of a chart.

    The bracketed range in the record wins, then the span of the copied
    file numbers, then DEFAULT_RANGE.

    Args:
        record: Spreadsheet record
        file_numbers: Numbers of the copied SVG variants
        log: Logger noting which source the range came from

    Returns:
        Ascending [low, high] pair
    """
    log = log or logger
    chart_id = record.chart_id
    range_text = getattr(record, RANGE_FIELD)

    parsed = parse_range(range_text)
    if parsed is not None:
        log.debug("Range for %s from %s: %s", chart_id, RANGE_FIELD, parsed)
        return parsed

    if file_numbers:
        derived = [min(file_numbers), max(file_numbers)]
        log.debug("Range for %s from files: %s", chart_id, derived)
        return derived

    log.debug("No range for %s, using default %s", chart_id, list(DEFAULT_RANGE))
    return list(DEFAULT_RANGE)


def read_svg_contents(version_dir: Path, file_numbers: list[int]) -> list[str]:
    """Read the text of each numbered SVG that exists in the version directory.

    Bytes that are not valid UTF-8 are replaced, never rejected.
    """
    contents = []
    for number in file_numbers:
        svg_path = version_dir / f"{number}.svg"
        if svg_path.exists():
            contents.append(svg_path.read_text(encoding="utf-8", errors="replace"))
    return contents


def build_meta(
    record: MetadataRecord,
    file_numbers: list[int],
    version_dir: Path,
    log: logging.Logger | None = None,
) -> ChartMeta:
    """Build the manifest of one chart.

    Args:
        record: Spreadsheet record with a non-empty id
        file_numbers: Numbers of the SVG variants copied into version_dir
        version_dir: Directory holding the ``<number>.svg`` files
        log: Logger passed to range resolution

    Returns:
        Manifest dictionary conforming to the meta schema
    """
    raw_id = record.id or ""
    chart_id = record.chart_id

    types_content = parse_svg_types(read_svg_contents(version_dir, file_numbers))

    return ChartMeta(
        id=chart_id,
        name=record.name or raw_id,
        nameZh=record.name_zh or record.name or raw_id,
        version=VERSION_TAG,
        description=record.description or "",
        author=record.author or "",
        range=resolve_range(record, file_numbers, log),
        remark=record.remark or "",
        types=types_content,
    )


def render_description(record: MetadataRecord) -> str:
    """Render the Markdown description document of one chart."""
    chart_id = record.chart_id
    return DESCRIPTION_TEMPLATE.format(
        title=record.display_name,
        alias=record.category or "",
        name=record.name or chart_id,
        description=record.description or "",
        types=get_sample_types_definition(),
        remark=record.remark or "",
    )


def write_json(path: Path, data: Any) -> None:
    """Write data as 2-space indented UTF-8 JSON with a trailing newline."""
    with path.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)
        f.write("\n")


class FileGenerator:
    """Writes the per-chart and aggregate files of a bundle.

    Example:
        >>> generator = FileGenerator()
        >>> generator.create_meta_json(version_dir, record, [1, 2, 3])
        >>> generator.create_description(metas_dir, record)
        >>> generator.merge_descriptions(metas_dir, output_dir / "metas.json")
    """

    def __init__(self, log: logging.Logger | None = None):
        """Initialize the generator.

        Args:
            log: Logger for written files and skipped records
        """
        self.log = log or logger

    def create_meta_json(
        self,
        version_dir: Path,
        record: MetadataRecord,
        file_numbers: list[int],
    ) -> Path | None:
        """Build, validate and write ``meta.json`` for one chart.

        Args:
            version_dir: Version directory of the chart
            record: Spreadsheet record
            file_numbers: Numbers of the copied SVG variants

        Returns:
            Path of the written file, or None if the record has no id

        Raises:
            jsonschema.ValidationError: If the manifest fails validation
        """
        if not record.chart_id:
            self.log.warning("Record without id, skipping meta.json: %s", record)
            return None

        meta = build_meta(record, file_numbers, version_dir, self.log)
        validate_meta(meta)

        meta_path = version_dir / META_JSON_NAME
        write_json(meta_path, meta)
        self.log.info("Wrote %s", meta_path)
        return meta_path

    def create_description(self, metas_dir: Path, record: MetadataRecord) -> Path | None:
        """Write the Markdown description of one chart.

        Args:
            metas_dir: Shared directory of description documents
            record: Spreadsheet record

        Returns:
            Path of the written file, or None if the record has no id
        """
        if not record.chart_id:
            self.log.warning("Record without id, skipping description: %s", record)
            return None

        metas_dir.mkdir(parents=True, exist_ok=True)
        md_path = metas_dir / f"{record.chart_id}.md"
        md_path.write_text(render_description(record), encoding="utf-8")
        self.log.info("Wrote %s", md_path)
        return md_path

    def merge_descriptions(self, metas_dir: Path, output_path: Path) -> DescriptionIndex:
        """Merge all description documents into one JSON mapping.

        Only ``*.md`` files directly inside metas_dir are read; each is
        keyed by its file name without extension.

        Args:
            metas_dir: Directory of description documents
            output_path: Destination of the aggregate JSON

        Returns:
            The aggregate mapping that was written
        """
        index: DescriptionIndex = {}
        for md_path in sorted(metas_dir.iterdir()):
            if not md_path.is_file() or not md_path.name.endswith(".md"):
                continue
            index[md_path.stem] = md_path.read_text(encoding="utf-8")

        write_json(output_path, index)
        self.log.info("Merged %d descriptions into %s", len(index), output_path)
        return index
