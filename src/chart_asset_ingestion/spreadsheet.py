"""Spreadsheet reading for chart metadata.

The first worksheet holds one chart per row. A header row is located among
the first few rows by its identifier column; its cells are mapped to record
fields through ``COLUMN_RULES``. Sheets without a recognizable header use
``DEFAULT_HEADER`` and every row is treated as data.
"""

import logging
from pathlib import Path
from typing import Any, NamedTuple

from openpyxl import load_workbook
from openpyxl.utils import get_column_letter

from .config import HEADER_SCAN_ROWS
from .core.types import MetadataRecord

logger = logging.getLogger(__name__)

# Column whose header cell reads "id" on the header row
ID_COLUMN = "C"
HEADER_ID_TOKEN = "id"


class ColumnRule(NamedTuple):
    """Maps a column to a record field by letter or header keyword."""

    column: str
    keywords: tuple[str, ...]
    field: str


# Keyword rules are tried in this order, so more specific keywords
# ("分类中文名") come before the ones they contain ("中文名").
COLUMN_RULES: tuple[ColumnRule, ...] = (
    ColumnRule("E", ("分类中文名",), "name_zh"),
    ColumnRule("A", ("中文名",), "category"),
    ColumnRule("B", ("示意图",), "image"),
    ColumnRule("C", ("id",), "id"),
    ColumnRule("D", ("分类英文名",), "name"),
    ColumnRule("F", ("设计负责人",), "author"),
    ColumnRule("G", ("变种",), "k1"),
    ColumnRule("H", ("使用场景",), "k2"),
    ColumnRule("I", ("数据项范围",), "k3"),
    ColumnRule("J", ("优先级",), "k4"),
    ColumnRule("K", ("效果图",), "k5"),
    ColumnRule("L", ("建议数量",), "k6"),
    ColumnRule("M", ("状态",), "k7"),
    ColumnRule("N", ("交付日期",), "k8"),
    ColumnRule("O", ("技术验收人",), "k9"),
    ColumnRule("P", ("中文描述",), "description"),
    ColumnRule("Q", ("备注",), "remark"),
)

DEFAULT_HEADER: dict[str, str] = {
    "A": "中文名",
    "B": "示意图",
    "C": "id标识",
    "D": "分类英文名",
    "E": "分类中文名",
    "F": "设计负责人",
    "G": "变种",
    "H": "使用场景",
    "I": "数据项范围",
    "J": "优先级",
    "K": "效果图",
    "L": "建议数量",
    "M": "状态",
    "N": "交付日期",
    "O": "技术验收人",
    "P": "中文描述",
    "Q": "备注",
}


def clean_cell(value: Any) -> str | None:
    """Normalize a cell value to text.

    Args:
        value: Raw cell value from openpyxl

    Returns:
        The text, or None for empty and whitespace-only cells
    """
    if value is None:
        return None
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    text = value if isinstance(value, str) else str(value)
    return text if text.strip() else None


def load_rows(path: Path) -> list[dict[str, str]]:
    """Load the first worksheet as rows keyed by column letter.

    Empty cells are omitted and rows without any value are dropped.

    Args:
        path: Path to the .xlsx workbook

    Returns:
        List of {column letter: cell text} dictionaries in sheet order
    """
    workbook = load_workbook(path, read_only=True, data_only=True)
    try:
        worksheet = workbook.worksheets[0]
        rows: list[dict[str, str]] = []
        for values in worksheet.iter_rows(values_only=True):
            row = {}
            for index, value in enumerate(values, start=1):
                text = clean_cell(value)
                if text is not None:
                    row[get_column_letter(index)] = text
            if row:
                rows.append(row)
        return rows
    finally:
        workbook.close()


def find_header_row(rows: list[dict[str, str]]) -> int | None:
    """Locate the header row among the first rows of the sheet.

    Args:
        rows: Rows as returned by load_rows

    Returns:
        Index of the first row whose identifier column reads "id", or None
    """
    for index, row in enumerate(rows[:HEADER_SCAN_ROWS]):
        if row.get(ID_COLUMN, "").strip().lower() == HEADER_ID_TOKEN:
            return index
    return None


def match_column(column: str, header: str) -> str | None:
    """Find the record field for one header cell.

    An exact column-letter match wins; otherwise the first rule whose
    keyword occurs in the lower-cased header text is used.

    Args:
        column: Column letter, e.g. "C"
        header: Header cell text

    Returns:
        Record field name, or None if no rule applies
    """
    for rule in COLUMN_RULES:
        if rule.column == column:
            return rule.field

    header_text = header.lower()
    for rule in COLUMN_RULES:
        if any(keyword in header_text for keyword in rule.keywords):
            return rule.field

    return None


def build_field_mapping(header_row: dict[str, str]) -> dict[str, str]:
    """Map the columns of a header row to record fields.

    Args:
        header_row: {column letter: header text}

    Returns:
        {column letter: record field} for every recognized column
    """
    mapping: dict[str, str] = {}
    for column, header in header_row.items():
        field = match_column(column, header)
        if field is not None:
            mapping[column] = field
    return mapping


def read_records(path: Path, log: logging.Logger | None = None) -> list[MetadataRecord]:
    """Read chart metadata records from a spreadsheet.

    Args:
        path: Path to the .xlsx workbook
        log: Logger for header detection and skipped rows

    Returns:
        One record per data row with a non-empty identifier, in sheet order

    Raises:
        FileNotFoundError: If the workbook doesn't exist
    """
    log = log or logger

    if not path.exists():
        raise FileNotFoundError(f"Excel file does not exist: {path}")

    rows = load_rows(path)
    log.debug("Loaded %d raw rows from %s", len(rows), path)

    header_index = find_header_row(rows)
    if header_index is None:
        log.info("No header row found in the first %d rows, using default columns", HEADER_SCAN_ROWS)
        header_row = DEFAULT_HEADER
        data_rows = rows
    else:
        log.debug("Header row found at row %d: %s", header_index + 1, rows[header_index])
        header_row = rows[header_index]
        data_rows = rows[header_index + 1 :]

    mapping = build_field_mapping(header_row)
    for column, field in mapping.items():
        log.debug("Column %s (%s) maps to %s", column, header_row[column], field)

    records: list[MetadataRecord] = []
    for raw_row in data_rows:
        values = {field: raw_row[column] for column, field in mapping.items() if column in raw_row}

        if not (values.get("id") or "").strip():
            log.debug("Skipping row without id: %s", raw_row)
            continue

        records.append(MetadataRecord(**values))

    log.info("Read %d records from %s", len(records), path)
    return records
