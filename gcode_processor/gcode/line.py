"""
G-code lines

Splits one raw line into comment segments and instruction words, derives a
description of the whole line and rebuilds its text after edits.
"""

import logging

from gcode_processor import config

from .cache import CachedValue
from .codes import (
    BLOCK_DELETE_CHAR,
    META_COMMAND_MARKERS,
    PROGRAM_BOUNDARY_CHAR,
    SEQUENCE_NUMBER_LETTER,
)
from .word import GcodeWord, parse_word

logger = logging.getLogger(__name__)


def split_comments(text: str) -> tuple[str, list[str]]:
    """
    Separate comments from instructions in one left-to-right scan.

    ``(`` opens a comment that the next ``)`` closes; parentheses do not nest.
    ``;`` opens a comment that runs to the end of the line, even inside a
    parenthesized one. Delimiters stay part of the comment text.

    Args:
        text: Raw line text

    Returns:
        (instruction text, list of comment segments)
    """
    comments: list[str] = []
    instruction: list[str] = []
    current: list[str] = []
    in_comment = False
    to_end_of_line = False

    for c in text:
        if c == "(":
            in_comment = True
        if c == ";":
            in_comment = True
            to_end_of_line = True

        if in_comment:
            current.append(c)
        else:
            instruction.append(c)

        if c == ")" and in_comment and not to_end_of_line:
            in_comment = False
            comments.append("".join(current))
            current = []

    # unterminated or semicolon comment
    if current:
        comments.append("".join(current))

    return "".join(instruction), comments


def has_meta_command(instruction_text: str) -> bool:
    upper = instruction_text.upper()
    return any(marker in upper for marker in META_COMMAND_MARKERS)


def tokenize(instruction_text: str) -> tuple[list[str], list[str]]:
    """
    Split comment-free instruction text into word tokens.

    G1M17M20 G30 -> G1, M17, M20, G30

    Args:
        instruction_text: Line text with comments removed

    Returns:
        (tokens, formatting anomalies found while splitting)
    """
    tokens: list[str] = []
    anomalies: list[str] = []
    current: list[str] = []

    for c in instruction_text:
        # letters and whitespace start a new word
        if (c.isalpha() or c.isspace()) and current:
            if len(current) == 1:
                anomalies.append(f"single character word {current[0]!r}")
            tokens.append("".join(current))
            current = []

        if not c.isspace():
            current.append(c)

    if current:
        if len(current) == 1:
            anomalies.append(f"single character word {current[0]!r} at end of line")
        tokens.append("".join(current))

    return tokens, anomalies


def format_comment(comment: str, style: str | None = None) -> str:
    """Format description text as a comment segment in the configured style."""
    style = style or config.COMMENT_STYLE
    if style == "semicolon":
        return f"; {comment}"
    return f"({comment})"


class GcodeLine:
    """One line of a G-code program"""

    def __init__(self, text: str, governing: GcodeWord | None = None):
        """
        Parse a raw line

        Args:
            text: Raw line text, without the line terminator
            governing: Governing command in effect before this line
        """
        self.text = text
        self.words: list[GcodeWord] = []
        self.comments: list[str] = []
        self.line_number_word: GcodeWord | None = None
        self.warnings: list[str] = []
        self.trailing_command: GcodeWord | None = governing
        self._instruction_text = ""
        self._description = CachedValue(self._compute_description)
        self.reparse(governing)

    def __repr__(self):
        return f"GcodeLine({self.text!r})"

    @classmethod
    def parse(cls, text: str, governing: GcodeWord | None = None) -> "GcodeLine":
        return cls(text, governing)

    def reparse(self, governing: GcodeWord | None = None) -> GcodeWord | None:
        """
        Rebuild comments and words from the current text

        Args:
            governing: Governing command in effect before this line

        Returns:
            Governing command in effect after this line
        """
        self.words = []
        self.line_number_word = None
        self.warnings = []
        self._instruction_text, self.comments = split_comments(self.text)

        for token, opaque in self._word_tokens():
            word, governing = parse_word(token, governing, opaque=opaque)
            self.words.append(word)
            if (
                self.line_number_word is None
                and not opaque
                and word.letter == SEQUENCE_NUMBER_LETTER
            ):
                self.line_number_word = word

        self.trailing_command = governing
        self._description.invalidate()
        return governing

    def _word_tokens(self) -> list[tuple[str, bool]]:
        stripped = self._instruction_text.strip()

        if stripped.startswith((BLOCK_DELETE_CHAR, PROGRAM_BOUNDARY_CHAR)):
            return []

        if has_meta_command(stripped):
            return [(stripped, True)]

        tokens, anomalies = tokenize(self._instruction_text)
        for anomaly in anomalies:
            logger.debug(f"Formatting anomaly in {self.text!r}: {anomaly}")
            self.warnings.append(anomaly)
        return [(token, False) for token in tokens]

    @property
    def instruction_text(self) -> str:
        return self._instruction_text

    @property
    def description(self) -> str:
        return self._description.get()

    def invalidate_description(self) -> None:
        for word in self.words:
            word.invalidate_description()
        self._description.invalidate()

    def _compute_description(self) -> str:
        descriptions = [word.description for word in self.words]
        return config.DESCRIPTION_DELIMITER.join(d for d in descriptions if d.strip())

    def reconstructed_text(self) -> str:
        """
        Rebuild the line from its current words and comments.

        Word values changed after parsing show up here but not in ``text``.
        """
        if self.words:
            out = "".join(f"{word.text} " for word in self.words)
        else:
            out = self._instruction_text
        out += "".join(self.comments)
        return out.strip()

    @property
    def is_blank(self) -> bool:
        return self.reconstructed_text() == ""

    @property
    def is_full_line_comment(self) -> bool:
        return not self.words and bool(self.comments)

    def append_comment(self, comment: str, pad_to_column: int = 0, style: str | None = None) -> None:
        """
        Append a comment to the end of this line

        Args:
            comment: Comment text without delimiters
            pad_to_column: Pad the line to this width before the comment, 0 to skip
            style: "paren" or "semicolon", defaults to the configured style
        """
        formatted = format_comment(comment, style)
        base = self.reconstructed_text()
        if pad_to_column > 0:
            base = base.ljust(pad_to_column)

        self.text = f"{base} {formatted}"
        # a trailing ";" comment absorbs whatever follows it
        self._instruction_text, self.comments = split_comments(self.text)

    def get_first_word(self, letter: str) -> GcodeWord | None:
        """Return the first word with the given letter, or None."""
        if len(letter) != 1 or not letter.isalpha():
            raise ValueError(f"letter must be a single letter, got {letter!r}")

        letter = letter.upper()
        for word in self.words:
            if word.letter == letter:
                return word
        return None


def parse_line(
    text: str, governing: GcodeWord | None = None
) -> tuple[GcodeLine, GcodeWord | None]:
    """
    Parse one raw line, threading the governing command

    Returns:
        (line, governing command in effect after the line)
    """
    line = GcodeLine(text, governing)
    return line, line.trailing_command
