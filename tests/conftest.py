"""Shared fixtures for building spreadsheets and SVG archives."""

import zipfile
from pathlib import Path
from typing import Callable

import pytest
from openpyxl import Workbook

SVG_BODY = '<svg xmlns="http://www.w3.org/2000/svg"><text>{name}</text></svg>'

HEADER = [
    "中文名", "示意图", "id", "分类英文名", "分类中文名", "设计负责人",
    "变种", "使用场景", "数据项范围", "优先级", "效果图", "建议数量",
    "状态", "交付日期", "技术验收人", "中文描述", "备注",
]


def make_row(
    chart_id: str | None,
    name: str | None = None,
    name_zh: str | None = None,
    data_range: str | None = None,
    description: str | None = None,
    remark: str | None = None,
    category: str | None = None,
) -> list:
    """Build a 17-column sheet row in the default A-Q layout."""
    row: list = [None] * 17
    row[0] = category
    row[2] = chart_id
    row[3] = name
    row[4] = name_zh
    row[5] = "Alice"
    row[8] = data_range
    row[15] = description
    row[16] = remark
    return row


@pytest.fixture
def write_workbook(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing rows to the first sheet of a new workbook."""

    def _write(rows: list[list], name: str = "charts.xlsx") -> Path:
        workbook = Workbook()
        sheet = workbook.active
        for row in rows:
            sheet.append(row)
        path = tmp_path / name
        workbook.save(path)
        return path

    return _write


@pytest.fixture
def write_zip(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing SVG entries (archive name -> content) to a ZIP file."""

    def _write(entries: dict[str, str | bytes] | list[str], name: str = "charts.zip") -> Path:
        if isinstance(entries, list):
            entries = {entry: SVG_BODY.format(name=entry) for entry in entries}
        path = tmp_path / name
        with zipfile.ZipFile(path, "w") as archive:
            for entry_name, content in entries.items():
                archive.writestr(entry_name, content)
        return path

    return _write


@pytest.fixture
def svg_tree(tmp_path: Path) -> Callable[[list[str]], Path]:
    """Factory creating SVG files (relative paths) under tmp_path/tree."""

    def _create(relative_paths: list[str]) -> Path:
        root = tmp_path / "tree"
        root.mkdir(exist_ok=True)
        for relative_path in relative_paths:
            file_path = root / relative_path
            file_path.parent.mkdir(parents=True, exist_ok=True)
            file_path.write_text(SVG_BODY.format(name=relative_path), encoding="utf-8")
        return root

    return _create
