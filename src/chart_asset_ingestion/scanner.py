"""SVG discovery and renumbering.

This module handles filesystem traversal of the extracted archive, matching
SVG files to a chart identifier and copying them into a chart's version
directory under canonical ``<number>.svg`` names.

Matching is a case-insensitive substring test on the file name, so an
identifier that is contained in another (``bar`` in ``barchart-1.svg``)
matches both charts' files.
"""

import logging
import os
import re
import shutil
from pathlib import Path

logger = logging.getLogger(__name__)

SVG_EXTENSION = ".svg"

# Trailing "-<digits>" right before the extension, e.g. "roadmap-road-v1-7.svg" -> 7
FILE_NUMBER_PATTERN = re.compile(r"-(\d+)\.svg$", re.IGNORECASE)


def validate_path_safety(path: Path, base_dir: Path) -> None:
    """Validate that a path stays within the base directory.

    This prevents path traversal attacks.

    Args:
        path: Path to validate
        base_dir: Base directory that path must be within

    Raises:
        ValueError: If path escapes the base directory
    """
    resolved_path = path.resolve()
    resolved_base = base_dir.resolve()

    if not resolved_path.is_relative_to(resolved_base):
        raise ValueError(f"Path {path} escapes base directory {base_dir}")


def is_svg_match(filename: str, identifier: str) -> bool:
    """Check whether a file name is an SVG variant of the identifier.

    Args:
        filename: Base name of the file
        identifier: Chart identifier (any case)

    Returns:
        True if the name ends in .svg and contains the identifier,
        both compared case-insensitively
    """
    lowered = filename.lower()
    return lowered.endswith(SVG_EXTENSION) and identifier.lower() in lowered


def extract_file_number(filename: str) -> int | None:
    """Extract the variant number from an SVG file name.

    Example:
        "roadmap-road-v1-7.svg" -> 7

    Args:
        filename: Base name of the file

    Returns:
        The number, or None if the name has no "-<digits>.svg" suffix
    """
    match = FILE_NUMBER_PATTERN.search(filename)
    if match is None:
        return None
    return int(match.group(1))


def find_all_matches(
    root: Path,
    identifier: str,
    log: logging.Logger | None = None,
) -> list[Path]:
    """Recursively collect SVG files whose name contains the identifier.

    Directories and files are visited in sorted order, so the result is
    stable for a given tree.

    Args:
        root: Directory to search (usually the extraction directory)
        identifier: Chart identifier, matched case-insensitively
        log: Logger receiving warnings about unreadable directories

    Returns:
        Full paths of matching files
    """
    log = log or logger
    matches: list[Path] = []

    def _on_error(error: OSError) -> None:
        # Unreadable subtree: report and keep walking the rest
        log.warning("Failed to read directory %s: %s", error.filename, error)

    for dirpath, dirnames, filenames in os.walk(root, onerror=_on_error):
        dirnames.sort()
        for filename in sorted(filenames):
            file_path = Path(dirpath) / filename
            if not file_path.is_file():
                continue
            if is_svg_match(filename, identifier):
                matches.append(file_path)

    log.debug("Found %d SVG files for %s under %s", len(matches), identifier, root)
    return matches


def copy_all_matches(
    matches: list[Path],
    target_dir: Path,
    identifier: str,
    log: logging.Logger | None = None,
) -> list[int]:
    """Copy matched SVG files into a version directory as ``<number>.svg``.

    Files without a numeric suffix are skipped. When two sources carry the
    same number the later one overwrites the earlier copy.

    Args:
        matches: Paths returned by find_all_matches
        target_dir: Version directory (created if missing)
        identifier: Chart identifier, used for log messages
        log: Logger for copy progress and skipped files

    Returns:
        Numbers of the copied files, in match order

    Raises:
        OSError: If a file cannot be copied
    """
    log = log or logger
    target_dir.mkdir(parents=True, exist_ok=True)
    copied_numbers: list[int] = []

    for file_path in matches:
        number = extract_file_number(file_path.name)
        if number is None:
            log.warning(
                "Cannot extract a number from %s (%s), skipping", file_path.name, identifier
            )
            continue

        target_file = target_dir / f"{number}{SVG_EXTENSION}"
        shutil.copyfile(file_path, target_file)
        log.debug("Copied %s to %s", file_path.name, target_file)
        copied_numbers.append(number)

    return copied_numbers


def copy_numbered_match(
    root: Path,
    target_dir: Path,
    identifier: str,
    number: int,
    log: logging.Logger | None = None,
) -> bool:
    """Copy the first SVG variant of the identifier carrying a given number.

    Standalone helper for fetching one known variant; the bundling pipeline
    copies every variant through copy_all_matches instead.

    A file qualifies if its name contains the identifier and either has the
    number as a standalone token (optionally preceded by "-" or "_") or
    starts with ``<number>.``.

    Args:
        root: Directory to search
        target_dir: Version directory (created if missing)
        identifier: Chart identifier, matched case-insensitively
        number: Variant number to look for
        log: Logger for copy progress

    Returns:
        True if a file was found and copied
    """
    log = log or logger
    number_pattern = re.compile(rf"[-_]?{number}\b", re.IGNORECASE)

    for file_path in find_all_matches(root, identifier, log):
        name = file_path.name
        if number_pattern.search(name) or name.startswith(f"{number}."):
            target_dir.mkdir(parents=True, exist_ok=True)
            target_file = target_dir / f"{number}{SVG_EXTENSION}"
            shutil.copyfile(file_path, target_file)
            log.debug("Copied %s to %s", name, target_file)
            return True

    return False
