"""
Output path helpers.
"""

import os
from pathlib import Path


def append_to_file_name(path: str | os.PathLike, suffix: str) -> Path:
    """Append text to the file name, keeping directory and extension: a/b.nc -> a/b<suffix>.nc"""
    p = Path(path)
    return p.with_name(f"{p.stem}{suffix}{p.suffix}")


def make_unique(path: str | os.PathLike) -> Path:
    """Return path, or the first of "name 1.ext", "name 2.ext", ... that does not exist."""
    p = Path(path)
    candidate = p
    i = 1
    while candidate.exists():
        candidate = p.with_name(f"{p.stem} {i}{p.suffix}")
        i += 1
    return candidate
