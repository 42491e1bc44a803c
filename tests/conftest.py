"""
Pytest configuration and shared fixtures for gcode-processor tests.

Provides sample programs and program fragments, and a helper that writes
fragment groups to a temporary directory.
"""

import os
import sys
import logging
from pathlib import Path
from typing import Callable

import pytest

# Add the parent directory to Python path so we can import the package
sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

logger = logging.getLogger(__name__)


# ============================================================================
# SAMPLE PROGRAMS
# ============================================================================

FRAGMENT_0 = """\
%
O1001 (PART)
(T1 D=10. CR=0. - ZMIN=-5. - FLAT END MILL)
N10 G90 G94 G17
N20 G20

(2D CONTOUR1)
N30 T1 M6
N40 S5000 M3
N50 G54
N60 G0 E1 X1. Y2.
N70 Z0.6 H1
N80 G1 Z-0.1 F20.
N90 X3.

N100 M5
N110 G28 G91 Z0.
N120 M30
%
"""

FRAGMENT_1 = """\
%
O1001 (PART)
(T2 D=6. CR=0. - ZMIN=-3. - DRILL)
N10 G90 G94 G17
N20 G20

(DRILL1)
N30 T2 M6
N40 S3000 M3
N50 G0 E1 X4. Y5.
N60 Z0.5 H2
N70 G1 Z-0.2 F10.

N80 M5
N90 G28 G91 Z0.
N100 M30
%
"""

MERGED_PROGRAM = [
    "%",
    "O1001 (PART)",
    "N10 G90 G94 G17",
    "N20 G20",
    "",
    "(2D CONTOUR1)",
    "(T1 D=10. CR=0. - ZMIN=-5. - FLAT END MILL)",
    "N30 T1 M6",
    "N40 S5000 M3",
    "N50 G54",
    "N60 G0 E1 X1. Y2. Z0.6 H1",
    "N70 G1 Z-0.1 F20.",
    "N80 X3.",
    "",
    "(DRILL1)",
    "(T2 D=6. CR=0. - ZMIN=-3. - DRILL)",
    "N90 T2 M6",
    "N100 S3000 M3",
    "N110 G0 E1 X4. Y5. Z0.5 H2",
    "N120 G1 Z-0.2 F10.",
    "",
    "N130 M5",
    "N140 G28 G91 Z0.",
    "N150 M30",
    "%",
]


@pytest.fixture
def fragment_texts() -> list[str]:
    return [FRAGMENT_0, FRAGMENT_1]


@pytest.fixture
def merged_program() -> list[str]:
    return list(MERGED_PROGRAM)


@pytest.fixture
def write_fragments(tmp_path: Path) -> Callable[..., list[Path]]:
    """
    Write fragment texts as NAME-0.nc, NAME-1.nc, ... into a directory.

    Returns the written paths in suffix order.
    """

    def _write(texts: list[str], name: str = "PART", directory: Path | None = None) -> list[Path]:
        directory = directory or tmp_path
        directory.mkdir(parents=True, exist_ok=True)
        paths = []
        for i, text in enumerate(texts):
            path = directory / f"{name}-{i}.nc"
            path.write_text(text, encoding="utf-8")
            paths.append(path)
        logger.debug(f"Wrote {len(paths)} fragments for {name} in {directory}")
        return paths

    return _write


# ============================================================================
# PYTEST CONFIGURATION HOOKS
# ============================================================================

def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests that test individual components in isolation"
    )
    config.addinivalue_line(
        "markers", "integration: Tests that read and write program files on disk"
    )
