"""ZIP archive extraction.

The SVG variants arrive as one ZIP archive which is unpacked into a working
directory inside the output directory before any matching happens.
"""

import logging
import zipfile
from pathlib import Path

from .config import EXTRACT_DIR_NAME
from .scanner import validate_path_safety

logger = logging.getLogger(__name__)


def extract_archive(
    zip_path: Path,
    output_dir: Path,
    log: logging.Logger | None = None,
) -> Path:
    """Extract every entry of a ZIP archive into ``output_dir/extracted_svgs``.

    Existing files with the same names are overwritten. Absolute and
    ".."-prefixed entry names are written inside the extraction directory,
    the way ``ZipFile.extract`` sanitizes them.

    Args:
        zip_path: Path to the ZIP archive
        output_dir: Directory that will contain the extraction directory
        log: Logger for progress and failures

    Returns:
        Path to the extraction directory

    Raises:
        FileNotFoundError: If the archive doesn't exist
        zipfile.BadZipFile: If the archive is corrupt
        ValueError: If an entry ends up outside the extraction directory
    """
    log = log or logger

    if not zip_path.exists():
        raise FileNotFoundError(f"ZIP file does not exist: {zip_path}")

    extract_dir = output_dir / EXTRACT_DIR_NAME
    extract_dir.mkdir(parents=True, exist_ok=True)

    try:
        with zipfile.ZipFile(zip_path) as archive:
            for member in archive.infolist():
                # zipfile drops leading slashes and ".." parts from entry names
                written = Path(archive.extract(member, extract_dir))
                validate_path_safety(written, extract_dir)
    except (zipfile.BadZipFile, OSError, ValueError) as e:
        log.error("Failed to extract %s: %s", zip_path, e)
        raise

    log.info("Extracted %s to %s", zip_path, extract_dir)
    return extract_dir
