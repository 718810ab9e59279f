"""Type definitions for chart asset bundles.

This module defines the spreadsheet record dataclass and the TypedDict
classes that mirror the JSON structures written to disk (meta.json and
metas.json). The manifest shape is formalized in schemas/meta.schema.json.
"""

from dataclasses import dataclass, fields
from typing import TypedDict


@dataclass(frozen=True)
class MetadataRecord:
    """One spreadsheet row describing a chart.

    Only ``id`` is required; rows without it never become records.
    Column letters refer to the default sheet layout.
    """

    category: str | None = None  # A - Chinese display name / alias
    image: str | None = None  # B - preview image reference
    id: str | None = None  # C - chart identifier
    name: str | None = None  # D - English name
    name_zh: str | None = None  # E - localized name
    author: str | None = None  # F - design owner
    k1: str | None = None  # G - variant
    k2: str | None = None  # H - usage scenario
    k3: str | None = None  # I - data range, e.g. "[1,10]"
    k4: str | None = None  # J - priority
    k5: str | None = None  # K - rendering
    k6: str | None = None  # L - suggested count
    k7: str | None = None  # M - status
    k8: str | None = None  # N - delivery date
    k9: str | None = None  # O - technical reviewer
    description: str | None = None  # P - description
    remark: str | None = None  # Q - remark

    @property
    def chart_id(self) -> str:
        """Canonical identifier: trimmed and lower-cased."""
        return (self.id or "").strip().lower()

    @property
    def display_name(self) -> str:
        """Localized name, falling back to English name then identifier."""
        return self.name_zh or self.name or self.chart_id

    @classmethod
    def field_names(cls) -> list[str]:
        """Names of all record fields, in column order."""
        return [f.name for f in fields(cls)]


class ChartMeta(TypedDict):
    """Contents of ``assets/<id>/v1/meta.json``."""

    id: str  # Lower-cased, trimmed identifier
    name: str  # English name, falls back to identifier
    nameZh: str  # Localized name -> English name -> identifier
    version: str  # Version tag, currently always "v1"
    description: str
    author: str
    range: list[int]  # Ascending [low, high] pair
    remark: str
    types: str  # Type-shape description of the chart's options


# Aggregate of description documents keyed by chart id (metas.json)
DescriptionIndex = dict[str, str]
