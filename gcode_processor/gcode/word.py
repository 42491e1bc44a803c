"""
G-code words

A word is one letter-prefixed token of an instruction line, e.g. ``G1`` or
``X12.5``. Words also carry the dependency on the nearest preceding command
word (G or M), which is what lets ``E3`` qualify the meaning of ``G0`` in
``G0 E3``.
"""

import re

from .cache import CachedValue
from .codes import (
    COMMAND_LETTERS,
    FIXTURE_OFFSET_LETTER,
    G_CODE_DESCRIPTIONS,
    LETTER_DESCRIPTIONS,
    M_CODE_DESCRIPTIONS,
)

INT_PATTERN = re.compile(r"[+-]?[0-9]+")
REAL_PATTERN = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)")


def _parse_int(text: str) -> int | None:
    text = text.strip()
    if INT_PATTERN.fullmatch(text):
        return int(text)
    return None


def _parse_real(text: str) -> float | None:
    text = text.strip()
    if REAL_PATTERN.fullmatch(text):
        return float(text)
    return None


class GcodeWord:
    """Represents one parsed G-code word"""

    def __init__(self, text: str, governing: "GcodeWord | None" = None, opaque: bool = False):
        """
        Create a word and register it as a dependent of its governing command

        Args:
            text: Raw token text, letter first
            governing: Nearest preceding command word, if any
            opaque: True for meta-command lines kept as a single unparsed word
        """
        if not text:
            raise ValueError("G-code word text must not be empty")

        self.opaque = opaque
        self.governing: GcodeWord | None = governing
        self.dependents: list[GcodeWord] = []
        self._description = CachedValue(self._compute_description)

        self._text = text
        self._parse_text()

        if governing is not None:
            governing.dependents.append(self)

    def __repr__(self):
        return f"GcodeWord({self._text!r})"

    def __str__(self):
        return self._text

    @property
    def text(self) -> str:
        return self._text

    @text.setter
    def text(self, value: str) -> None:
        if not value:
            raise ValueError("G-code word text must not be empty")
        self._text = value
        self._parse_text()
        self._description.invalidate()

    @property
    def int_value(self) -> int:
        return self._int_value if self.has_int else 0

    @int_value.setter
    def int_value(self, value: int) -> None:
        self.text = f"{self.letter}{int(value)}"

    @property
    def real_value(self) -> float:
        return self._real_value if self.has_real else 0.0

    def _parse_text(self) -> None:
        self.letter = self._text[0].upper()
        remainder = self._text[1:]

        int_value = _parse_int(remainder)
        real_value = _parse_real(remainder)

        self.has_int = int_value is not None
        self.has_real = real_value is not None
        self._int_value = int_value if int_value is not None else 0
        self._real_value = real_value if real_value is not None else 0.0

    @property
    def is_command(self) -> bool:
        """True for G and M words"""
        return self.letter in COMMAND_LETTERS

    @property
    def is_rapid(self) -> bool:
        return self.letter == "G" and self.has_int and self._int_value == 0

    def get_dependent(self, letter: str) -> "GcodeWord | None":
        """
        Return the first dependent word with the given letter

        Args:
            letter: Word letter to look for

        Returns:
            The first matching dependent in registration order, or None
        """
        letter = letter.upper()
        for word in self.dependents:
            if word.letter == letter:
                return word
        return None

    def _int_dependent(self, letter: str) -> "GcodeWord | None":
        word = self.get_dependent(letter)
        if word is not None and word.has_int:
            return word
        return None

    @property
    def description(self) -> str:
        return self._description.get()

    def invalidate_description(self) -> None:
        self._description.invalidate()

    def _compute_description(self) -> str:
        if self.opaque:
            return ""
        if self.letter in LETTER_DESCRIPTIONS:
            return LETTER_DESCRIPTIONS[self.letter]
        if self.letter == "G":
            return self._g_code_description() if self.has_int else ""
        if self.letter == "M":
            return self._m_code_description() if self.has_int else ""
        return ""

    def _g_code_description(self) -> str:
        code = self._int_value

        if code == 0:
            fixture_offset = self._int_dependent(FIXTURE_OFFSET_LETTER)
            if fixture_offset is not None:
                return f"RAPID WITH FIXTURE OFFSET {fixture_offset.int_value}"

        if code in G_CODE_DESCRIPTIONS:
            return G_CODE_DESCRIPTIONS[code]
        return f"UNKNOWN G{code} COMMAND"

    def _m_code_description(self) -> str:
        code = self._int_value

        if code == 98:
            program = self._int_dependent("P")
            count = self._int_dependent("L")
            if program is not None and count is not None:
                return f"CALL SUBPROGRAM {program.int_value} {count.int_value} TIMES"
            if program is not None:
                return f"CALL SUBPROGRAM {program.int_value}"
            if count is not None:
                return f"CALL SUBPROGRAM ?? {count.int_value} TIMES"

        elif code == 99:
            target = self._int_dependent("P")
            if target is not None:
                return f"LINE JUMP TO {target.int_value}"

        if code in M_CODE_DESCRIPTIONS:
            return M_CODE_DESCRIPTIONS[code]
        return f"UNKNOWN M{code} COMMAND"


def parse_word(
    text: str, governing: GcodeWord | None = None, opaque: bool = False
) -> tuple[GcodeWord, GcodeWord | None]:
    """
    Parse one token, threading the governing command

    Args:
        text: Raw token text
        governing: Governing command in effect before this token
        opaque: Keep the token as an unparsed meta-command word

    Returns:
        (word, governing command in effect after this token)
    """
    word = GcodeWord(text, governing, opaque=opaque)
    if word.is_command and not opaque:
        return word, word
    return word, governing
