"""Tests for spreadsheet reading."""

from pathlib import Path

import pytest
from openpyxl.utils.exceptions import InvalidFileException

from conftest import HEADER, make_row

from chart_asset_ingestion.core.types import MetadataRecord
from chart_asset_ingestion.spreadsheet import (
    DEFAULT_HEADER,
    build_field_mapping,
    clean_cell,
    find_header_row,
    match_column,
    read_records,
)


class TestCleanCell:
    """Test cell normalization."""

    def test_empty_values_become_none(self) -> None:
        assert clean_cell(None) is None
        assert clean_cell("") is None
        assert clean_cell("   ") is None

    def test_integral_floats_lose_fraction(self) -> None:
        assert clean_cell(5.0) == "5"
        assert clean_cell(2.5) == "2.5"
        assert clean_cell(7) == "7"

    def test_strings_pass_through(self) -> None:
        assert clean_cell(" Bar ") == " Bar "


class TestFindHeaderRow:
    """Test header row detection."""

    def test_finds_header_within_first_rows(self) -> None:
        rows = [{"A": "Chart catalogue"}, {"A": "中文名", "C": "id"}, {"C": "bar"}]
        assert find_header_row(rows) == 1

    def test_header_token_is_trimmed_and_case_insensitive(self) -> None:
        assert find_header_row([{"C": " ID "}]) == 0

    def test_ignores_header_after_scan_window(self) -> None:
        rows = [{"A": f"note {i}"} for i in range(5)] + [{"C": "id"}]
        assert find_header_row(rows) is None

    def test_requires_identifier_column(self) -> None:
        assert find_header_row([{"B": "id"}]) is None


class TestFieldMapping:
    """Test the declarative column rules."""

    def test_default_header_maps_all_columns(self) -> None:
        mapping = build_field_mapping(DEFAULT_HEADER)

        assert mapping["A"] == "category"
        assert mapping["C"] == "id"
        assert mapping["D"] == "name"
        assert mapping["E"] == "name_zh"
        assert mapping["I"] == "k3"
        assert mapping["P"] == "description"
        assert mapping["Q"] == "remark"
        assert len(mapping) == 17

    def test_column_letter_takes_priority(self) -> None:
        """Test that a known letter ignores the header text."""
        assert match_column("B", "备注") == "image"

    def test_keyword_match_for_extra_columns(self) -> None:
        """Test that columns beyond Q are mapped by header keywords."""
        assert match_column("R", "补充备注") == "remark"
        assert match_column("S", "分类中文名(新)") == "name_zh"
        assert match_column("T", "其他中文名") == "category"

    def test_unknown_columns_are_ignored(self) -> None:
        assert build_field_mapping({"R": "Notes", "S": "Owner"}) == {}

    def test_every_field_is_a_record_field(self) -> None:
        fields = set(MetadataRecord.field_names())
        assert set(build_field_mapping(DEFAULT_HEADER).values()) <= fields


class TestReadRecords:
    """Test reading records from a workbook."""

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError, match="Excel file does not exist"):
            read_records(tmp_path / "missing.xlsx")

    def test_csv_files_are_not_supported(self, tmp_path: Path) -> None:
        """Test that only xlsx workbooks are accepted."""
        path = tmp_path / "charts.csv"
        path.write_text("中文名,示意图,id\n柱状图,,bar\n", encoding="utf-8")

        with pytest.raises(InvalidFileException):
            read_records(path)

    def test_reads_rows_after_header(self, write_workbook) -> None:
        path = write_workbook(
            [
                ["Chart catalogue v2"],
                HEADER,
                make_row("Bar", name="Bar Chart", name_zh="柱状图", data_range="[1,4]"),
                make_row("pie", name="Pie Chart"),
            ]
        )

        records = read_records(path)

        assert [r.id for r in records] == ["Bar", "pie"]
        first = records[0]
        assert first.name == "Bar Chart"
        assert first.name_zh == "柱状图"
        assert first.k3 == "[1,4]"
        assert first.author == "Alice"
        assert first.chart_id == "bar"

    def test_skips_rows_without_id(self, write_workbook) -> None:
        path = write_workbook(
            [
                HEADER,
                make_row("bar"),
                make_row(None, name="Orphan"),
                make_row("   ", name="Blank id"),
                make_row("line"),
            ]
        )

        assert [r.id for r in read_records(path)] == ["bar", "line"]

    def test_falls_back_to_default_header(self, write_workbook) -> None:
        """Test that every row is data when no header row exists."""
        path = write_workbook(
            [
                make_row("bar", name="Bar Chart", remark="first"),
                make_row("pie", name="Pie Chart"),
            ]
        )

        records = read_records(path)

        assert [r.id for r in records] == ["bar", "pie"]
        assert records[0].remark == "first"

    def test_numeric_cells_become_text(self, write_workbook) -> None:
        row = make_row(1024, name="Numbered")
        path = write_workbook([HEADER, row])

        records = read_records(path)

        assert records[0].id == "1024"
        assert records[0].chart_id == "1024"

    def test_preserves_row_order(self, write_workbook) -> None:
        ids = ["gamma", "alpha", "beta"]
        path = write_workbook([HEADER] + [make_row(i) for i in ids])

        assert [r.id for r in read_records(path)] == ids
