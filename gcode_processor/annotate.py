"""
Line annotation

Appends a human-readable description of every instruction line as a
comment, aligned in one column after the longest line.
"""

import logging
import os
from pathlib import Path

from gcode_processor import config
from gcode_processor.gcode import GcodeDocument
from gcode_processor.utils.paths import append_to_file_name, make_unique

logger = logging.getLogger(__name__)


def annotate_document(doc: GcodeDocument, style: str | None = None) -> GcodeDocument:
    doc.append_comments(style=style)
    return doc


def default_output_path(path: str | os.PathLike) -> Path:
    """PART.nc -> PART Commented.nc, numbered if that file already exists."""
    return make_unique(append_to_file_name(path, config.COMMENTED_SUFFIX))


def annotate_file(
    path: str | os.PathLike,
    output_path: str | os.PathLike | None = None,
    style: str | None = None,
) -> Path:
    """
    Parse a program, annotate it and write the result

    Args:
        path: Program to annotate
        output_path: Destination, defaults to default_output_path(path)
        style: "paren" or "semicolon" comments, defaults to config.COMMENT_STYLE

    Returns:
        Path of the written file

    Raises:
        FileNotFoundError: If path does not exist
    """
    doc = GcodeDocument.from_file(path)
    annotate_document(doc, style=style)

    out = Path(output_path) if output_path is not None else default_output_path(path)
    doc.write(out)
    logger.info(f"Annotated {path} -> {out}")
    return out
