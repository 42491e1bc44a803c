"""
G-code document model

Main components:
- word.py: word parsing, governing-command dependencies and descriptions
- line.py: comment extraction, tokenization and text reconstruction
- document.py: ordered lines with structural edits and annotation
- fragment.py: header/body/footer classification of CAM program fragments
- codes.py: G/M description tables
- cache.py: lazily recomputed derived values
"""

from .document import GcodeDocument
from .fragment import FragmentDocument
from .line import GcodeLine, parse_line
from .word import GcodeWord, parse_word

__all__ = [
    "GcodeWord",
    "GcodeLine",
    "GcodeDocument",
    "FragmentDocument",
    "parse_word",
    "parse_line",
]
