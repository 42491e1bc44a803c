"""
Central configuration for gcode-processor tunables and shared constants.
"""

import logging
import os

TRACE: int = 5
logging.addLevelName(TRACE, "TRACE")

logger = logging.getLogger(__name__)


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError:
        logger.warning(f"Ignoring non-integer value {raw!r} for {name}")
        return default


def _env_choice(name: str, default: str, choices: tuple[str, ...]) -> str:
    raw = os.getenv(name)
    if raw is None:
        return default
    s = raw.strip().lower()
    if s in choices:
        return s
    logger.warning(f"Ignoring {name}={raw!r}; expected one of {', '.join(choices)}")
    return default


# Sequence renumbering applied to merged programs
LINE_NUMBER_START: int = _env_int("GCODE_PROCESSOR_LINE_NUMBER_START", 10)
LINE_NUMBER_STEP: int = _env_int("GCODE_PROCESSOR_LINE_NUMBER_STEP", 10)

# Appended descriptions are written either as " (TEXT)" or " ; TEXT"
COMMENT_STYLES: tuple[str, ...] = ("paren", "semicolon")
COMMENT_STYLE: str = _env_choice("GCODE_PROCESSOR_COMMENT_STYLE", "paren", COMMENT_STYLES)

# Separator between word descriptions in a line description
DESCRIPTION_DELIMITER: str = os.getenv("GCODE_PROCESSOR_DESCRIPTION_DELIMITER", " | ")

# Full-line comments starting with this prefix describe the tool used by a fragment
TOOL_COMMENT_PREFIX: str = os.getenv("GCODE_PROCESSOR_TOOL_COMMENT_PREFIX", "(T")

# Fragment file naming: PROGRAM-0.nc, PROGRAM-1.nc, ...
FRAGMENT_EXTENSION: str = os.getenv("GCODE_PROCESSOR_FRAGMENT_EXTENSION", ".nc")
FRAGMENT_SEPARATOR: str = os.getenv("GCODE_PROCESSOR_FRAGMENT_SEPARATOR", "-")

# Annotated copies are written next to the source as "<name> Commented<ext>"
COMMENTED_SUFFIX: str = os.getenv("GCODE_PROCESSOR_COMMENTED_SUFFIX", " Commented")

LOG_LEVEL_DEFAULT: str = os.getenv("GCODE_PROCESSOR_LOG_LEVEL", "WARNING").upper()
