"""Run configuration and output layout constants."""

from dataclasses import dataclass
from pathlib import Path

# Version directory created under each chart and written to meta.json
VERSION_TAG = "v1"

# Output layout
ASSETS_DIR_NAME = "assets"
METAS_DIR_NAME = "metas"
METAS_JSON_NAME = "metas.json"
META_JSON_NAME = "meta.json"
EXTRACT_DIR_NAME = "extracted_svgs"
DEFAULT_OUTPUT_DIR = "output"

# Range used when neither the spreadsheet nor the files provide one
DEFAULT_RANGE = (1, 10)

# Record field holding the bracketed range text, e.g. "[1,10]"
RANGE_FIELD = "k3"

# Number of leading rows searched for the header row
HEADER_SCAN_ROWS = 5


@dataclass(frozen=True)
class BundleConfig:
    """Inputs and output location for one bundling run.

    Attributes:
        excel_path: Spreadsheet with one chart per row
        zip_path: ZIP archive containing the SVG variants
        output_dir: Directory receiving assets, metas and metas.json
    """

    excel_path: Path
    zip_path: Path
    output_dir: Path

    @classmethod
    def from_args(
        cls,
        excel_path: str | Path,
        zip_path: str | Path,
        output_dir: str | Path | None = None,
    ) -> "BundleConfig":
        """Build a config from CLI-style arguments.

        The output directory is resolved to an absolute path; an empty
        value falls back to ``DEFAULT_OUTPUT_DIR``.
        """
        return cls(
            excel_path=Path(excel_path),
            zip_path=Path(zip_path),
            output_dir=Path(output_dir or DEFAULT_OUTPUT_DIR).resolve(),
        )

    @property
    def assets_dir(self) -> Path:
        return self.output_dir / ASSETS_DIR_NAME

    @property
    def metas_dir(self) -> Path:
        return self.output_dir / METAS_DIR_NAME

    @property
    def metas_json_path(self) -> Path:
        return self.output_dir / METAS_JSON_NAME

    def chart_dir(self, chart_id: str) -> Path:
        """Directory owning all versions of one chart."""
        return self.assets_dir / chart_id

    def version_dir(self, chart_id: str) -> Path:
        """Directory receiving the renumbered SVGs and meta.json."""
        return self.chart_dir(chart_id) / VERSION_TAG
