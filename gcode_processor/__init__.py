"""
gcode-processor

Annotates G-code programs with human-readable descriptions and merges
program fragments that CAM software splits at tool changes into one
renumbered program.

Key components:
- gcode: the document model (words, lines, documents, fragments)
- annotate_file: parse a file, append line descriptions, write a copy
- merge_group / merge_batch: merge fragment files into one program
- group_fragment_files: find fragment groups in a directory
"""

__version__ = "0.1.0"

from .annotate import annotate_file
from .gcode import FragmentDocument, GcodeDocument, GcodeLine, GcodeWord
from .grouping import group_fragment_files
from .merge import merge_batch, merge_fragments, merge_group

__all__ = [
    "__version__",
    "GcodeWord",
    "GcodeLine",
    "GcodeDocument",
    "FragmentDocument",
    "annotate_file",
    "merge_fragments",
    "merge_group",
    "merge_batch",
    "group_fragment_files",
]
