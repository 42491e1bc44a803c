"""
G-code documents

An ordered sequence of lines with the structural edits the merge needs.
Every edit re-threads governing commands over the whole sequence so the
dependency graph always matches a fresh parse of the edited text.
"""

import logging
import os
from pathlib import Path
from typing import Iterable, Iterator

from .line import GcodeLine, format_comment
from .word import GcodeWord

logger = logging.getLogger(__name__)


class GcodeDocument:
    """A parsed G-code program"""

    def __init__(self, lines: list[GcodeLine] | None = None, path: str | None = None):
        """
        Wrap already parsed lines. Use from_lines/from_text/from_file to parse.
        """
        self.lines: list[GcodeLine] = list(lines or [])
        self.path = path
        self._restructure()

    @classmethod
    def from_lines(cls, raw_lines: Iterable[str], path: str | None = None):
        """
        Parse raw lines, threading one governing command through all of them

        Args:
            raw_lines: Line texts without line terminators
            path: Source path, kept for messages
        """
        lines: list[GcodeLine] = []
        governing: GcodeWord | None = None
        for raw in raw_lines:
            line = GcodeLine(raw, governing)
            governing = line.trailing_command
            lines.append(line)

        return cls(lines, path=path)

    @classmethod
    def from_text(cls, text: str, path: str | None = None):
        return cls.from_lines(text.splitlines(), path=path)

    @classmethod
    def from_file(cls, path: str | os.PathLike):
        """
        Read and parse a program file

        Raises:
            FileNotFoundError: If the path does not name an existing file
        """
        file_path = Path(path)
        if not file_path.is_file():
            raise FileNotFoundError(f"G-code file not found: {file_path}")

        logger.debug(f"Parsing {file_path}")
        text = file_path.read_text(encoding="utf-8", errors="replace")
        return cls.from_text(text, path=str(file_path))

    def __len__(self) -> int:
        return len(self.lines)

    def __iter__(self) -> Iterator[GcodeLine]:
        return iter(self.lines)

    def __getitem__(self, index: int) -> GcodeLine:
        return self.lines[index]

    def reparse(self) -> None:
        """Re-derive words and dependencies of every line from its text, in order."""
        governing: GcodeWord | None = None
        for line in self.lines:
            governing = line.reparse(governing)
        self._restructure()

    def _restructure(self) -> None:
        """Hook for subclasses that derive structure from the line sequence."""

    def index_of(self, line: GcodeLine) -> int:
        """
        Return the index of this exact line object

        Raises:
            ValueError: If the line is not part of the document
        """
        for i, candidate in enumerate(self.lines):
            if candidate is line:
                return i
        raise ValueError(f"{line!r} is not part of this document")

    def replace_line(self, index: int, new_line: GcodeLine) -> None:
        self._check_index(index)
        self.lines[index] = new_line
        self.reparse()

    def remove_line(self, index: int) -> None:
        self._check_index(index)
        del self.lines[index]
        self.reparse()

    def reorder_line(self, from_index: int, to_index: int) -> None:
        """
        Move the line at from_index to come before the line at to_index.

        Indices refer to positions before the move. ``to_index == len(self)``
        moves the line to the end. Moving before itself or before its own
        successor leaves the document unchanged.

        Raises:
            IndexError: If either index is out of range
        """
        self._check_index(from_index)
        if not 0 <= to_index <= len(self.lines):
            raise IndexError(f"to_index {to_index} out of range for {len(self.lines)} lines")

        if to_index in (from_index, from_index + 1):
            return

        line = self.lines.pop(from_index)
        if to_index > from_index:
            to_index -= 1
        self.lines.insert(to_index, line)
        self.reparse()

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self.lines):
            raise IndexError(f"line index {index} out of range for {len(self.lines)} lines")

    def max_line_length(self) -> int:
        return max((len(line.reconstructed_text()) for line in self.lines), default=0)

    def append_comments(self, style: str | None = None) -> int:
        """
        Append each line's description as a comment, aligned in one column

        Lines without a description, and lines that already end with the
        same description comment, are left untouched.

        Returns:
            Number of lines that received a comment
        """
        pad_to = self.max_line_length() + 1
        annotated = 0

        for line in self.lines:
            description = line.description
            if not description:
                continue
            if line.comments and line.comments[-1].rstrip().endswith(format_comment(description, style)):
                continue
            line.append_comment(description, pad_to, style=style)
            annotated += 1

        logger.debug(f"Annotated {annotated} of {len(self.lines)} lines")
        return annotated

    def to_lines(self) -> list[str]:
        return [line.text for line in self.lines]

    def to_text(self) -> str:
        return "\n".join(self.to_lines()) + "\n"

    def write(self, path: str | os.PathLike) -> Path:
        out = Path(path)
        out.write_text(self.to_text(), encoding="utf-8")
        logger.info(f"Wrote {len(self.lines)} lines to {out}")
        return out
