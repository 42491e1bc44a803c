"""
Fragment file grouping

Groups program fragment files written by CAM software, e.g. ``PART-0.nc``,
``PART-1.nc``, by the program name before the numeric suffix.
"""

import logging
import os
import re
from pathlib import Path

from gcode_processor import config
from gcode_processor.utils.errors import FragmentGroupError

logger = logging.getLogger(__name__)


def split_fragment_name(stem: str, separator: str | None = None) -> tuple[str, int] | None:
    """
    Split a file stem into program name and fragment index

    Returns:
        (program name, fragment index), or None if the stem has no numeric suffix
    """
    separator = config.FRAGMENT_SEPARATOR if separator is None else separator
    match = re.fullmatch(rf"(?P<name>.+?){re.escape(separator)}(?P<index>[0-9]+)", stem)
    if match is None:
        return None
    return match.group("name"), int(match.group("index"))


def group_fragment_files(
    directory: str | os.PathLike,
    extension: str | None = None,
    separator: str | None = None,
) -> dict[str, list[Path]]:
    """
    Group fragment files in a directory by program name

    Args:
        directory: Directory to scan (not recursive)
        extension: Fragment file extension, defaults to config.FRAGMENT_EXTENSION
        separator: Separator before the numeric suffix, defaults to config.FRAGMENT_SEPARATOR

    Returns:
        Program name -> fragment paths ordered by numeric suffix

    Raises:
        FileNotFoundError: If the directory does not exist
        FragmentGroupError: If two files share a program name and suffix
    """
    extension = config.FRAGMENT_EXTENSION if extension is None else extension
    root = Path(directory)
    if not root.is_dir():
        raise FileNotFoundError(f"Fragment directory not found: {root}")

    indexed: dict[str, dict[int, Path]] = {}
    for path in sorted(root.iterdir()):
        if not path.is_file() or path.suffix.lower() != extension.lower():
            continue

        parts = split_fragment_name(path.stem, separator)
        if parts is None:
            logger.debug(f"Skipping {path.name}: no fragment suffix")
            continue

        name, index = parts
        group = indexed.setdefault(name, {})
        if index in group:
            raise FragmentGroupError(
                f"{path.name} and {group[index].name} are both fragment {index} of {name}"
            )
        group[index] = path

    groups = {name: [group[i] for i in sorted(group)] for name, group in indexed.items()}
    logger.info(f"Found {len(groups)} fragmented programs in {root}")
    return groups
