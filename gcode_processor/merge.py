"""
Fragment merge for CAM programs split at tool changes

If the CAM software writes five programs because of five tool changes, the
merged program is made of header 1, body 1, body 2, body 3, body 4, body 5
and footer 5, with sequence numbers rewritten to run through the whole
program.

Before merging, each fragment is normalized:
- the tool description comment is moved right after the first operation comment
- the first fixture offset (E) line and the tool length (H) line that follows
  it are combined into one line, since applying the two offsets in separate
  motions is unsafe on the target control
"""

import logging
import os
from pathlib import Path
from typing import Callable, Iterable, Mapping, Sequence

from gcode_processor import config
from gcode_processor.gcode import FragmentDocument, GcodeLine, GcodeWord
from gcode_processor.gcode.codes import (
    FIXTURE_OFFSET_LETTER,
    SEQUENCE_NUMBER_LETTER,
    TOOL_LENGTH_LETTER,
)
from gcode_processor.utils.errors import FragmentFormatError, FragmentGroupError

logger = logging.getLogger(__name__)

WordCheck = Callable[[GcodeWord], bool]

# Words permitted on the line carrying the first fixture offset
OFFSET_LINE_WORDS: dict[str, WordCheck] = {
    SEQUENCE_NUMBER_LETTER: lambda w: w.has_int,
    "G": lambda w: w.has_int and w.int_value in (0, 1),
    FIXTURE_OFFSET_LETTER: lambda w: w.has_int,
    "X": lambda w: w.has_real,
    "Y": lambda w: w.has_real,
    "F": lambda w: w.has_real,
}

# Words permitted on the tool length line that follows it
TOOL_LENGTH_LINE_WORDS: dict[str, WordCheck] = {
    SEQUENCE_NUMBER_LETTER: lambda w: w.has_int,
    TOOL_LENGTH_LETTER: lambda w: w.has_int,
    "Z": lambda w: w.has_real,
}


def relocate_tool_comment(fragment: FragmentDocument) -> None:
    """
    Move the tool description comment right after the first operation comment

    Raises:
        FragmentFormatError: If there is not exactly one tool description
            comment or there is no other full-line comment
    """
    tool_comments = fragment.tool_description_comments
    if len(tool_comments) != 1:
        raise FragmentFormatError(
            f"expected exactly one tool description comment, found {len(tool_comments)}",
            source=fragment.name,
        )
    if not fragment.other_full_line_comments:
        raise FragmentFormatError(
            "no operation comment to place the tool description after", source=fragment.name
        )

    tool_index = fragment.index_of(tool_comments[0])
    operation_index = fragment.index_of(fragment.other_full_line_comments[0])
    fragment.reorder_line(tool_index, operation_index + 1)
    logger.debug(f"{fragment.name}: moved tool comment from line {tool_index} to follow line {operation_index}")


def _check_words(
    fragment: FragmentDocument, line: GcodeLine, allowed: Mapping[str, WordCheck], role: str
) -> None:
    seen: set[str] = set()
    for word in line.words:
        check = allowed.get(word.letter)
        if check is None or not check(word):
            raise FragmentFormatError(
                f"unexpected word {word.text!r} on {role} line {line.reconstructed_text()!r}",
                source=fragment.name,
            )
        if word.letter in seen:
            raise FragmentFormatError(
                f"repeated {word.letter} word {word.text!r} on {role} line {line.reconstructed_text()!r}",
                source=fragment.name,
            )
        seen.add(word.letter)


def _find_first_word_lines(
    fragment: FragmentDocument,
) -> tuple[GcodeLine | None, GcodeLine | None]:
    offset_line: GcodeLine | None = None
    tool_length_line: GcodeLine | None = None

    for line in fragment.body:
        for word in line.words:
            if offset_line is None and word.letter == FIXTURE_OFFSET_LETTER:
                offset_line = line
            elif tool_length_line is None and word.letter == TOOL_LENGTH_LETTER:
                tool_length_line = line
        if offset_line is not None and tool_length_line is not None:
            break

    return offset_line, tool_length_line


def merge_offset_lines(fragment: FragmentDocument) -> GcodeLine:
    """
    Combine the first fixture offset line with the tool length line after it

    Returns:
        The synthesized line now in place of the fixture offset line

    Raises:
        FragmentFormatError: If either line is missing, they are not adjacent,
            or either carries a word outside its whitelist
    """
    offset_line, tool_length_line = _find_first_word_lines(fragment)
    if offset_line is None or tool_length_line is None:
        raise FragmentFormatError(
            "fragment body must contain a fixture offset (E) word and a tool length (H) word",
            source=fragment.name,
        )

    offset_index = fragment.index_of(offset_line)
    tool_length_index = fragment.index_of(tool_length_line)
    if tool_length_index != offset_index + 1:
        raise FragmentFormatError(
            f"tool length line {tool_length_index} must directly follow fixture offset line {offset_index}",
            source=fragment.name,
        )

    _check_words(fragment, offset_line, OFFSET_LINE_WORDS, "fixture offset")
    _check_words(fragment, tool_length_line, TOOL_LENGTH_LINE_WORDS, "tool length")

    if offset_line.get_first_word("G") is None:
        raise FragmentFormatError(
            f"fixture offset line {offset_line.reconstructed_text()!r} has no G0 or G1 word",
            source=fragment.name,
        )

    fields = [
        offset_line.get_first_word(SEQUENCE_NUMBER_LETTER),
        offset_line.get_first_word("G"),
        offset_line.get_first_word(FIXTURE_OFFSET_LETTER),
        offset_line.get_first_word("X"),
        offset_line.get_first_word("Y"),
        tool_length_line.get_first_word("Z"),
        tool_length_line.get_first_word(TOOL_LENGTH_LETTER),
        offset_line.get_first_word("F"),
    ]
    merged = GcodeLine(" ".join(word.text for word in fields if word is not None))

    fragment.replace_line(offset_index, merged)
    fragment.remove_line(fragment.index_of(tool_length_line))
    logger.debug(f"{fragment.name}: merged offset lines into {merged.text!r}")
    return merged


def merge_fragments(
    fragments: Sequence[FragmentDocument],
    start: int | None = None,
    step: int | None = None,
) -> list[str]:
    """
    Normalize and merge the fragments of one program

    Args:
        fragments: Fragments ordered by their numeric suffix
        start: First sequence number, defaults to config.LINE_NUMBER_START
        step: Sequence number increment, defaults to config.LINE_NUMBER_STEP

    Returns:
        Lines of the merged program

    Raises:
        FragmentFormatError: If any fragment does not have the expected layout
    """
    number = config.LINE_NUMBER_START if start is None else start
    step = config.LINE_NUMBER_STEP if step is None else step

    for fragment in fragments:
        relocate_tool_comment(fragment)
        merge_offset_lines(fragment)

    output: list[str] = []
    last = len(fragments) - 1

    for i, fragment in enumerate(fragments):
        sections = []
        if i == 0:
            sections.append(fragment.header)
        sections.append(fragment.body)
        if i == last:
            sections.append(fragment.footer)

        for section in sections:
            for line in section:
                if line.line_number_word is not None:
                    logger.log(config.TRACE, f"renumber {line.line_number_word.text} -> N{number}")
                    line.line_number_word.int_value = number
                    number += step
                output.append(line.reconstructed_text())

    return output


def merge_group(paths: Iterable[str | os.PathLike], output_path: str | os.PathLike) -> Path:
    """
    Merge fragment files into one program file

    Nothing is written unless every fragment merges cleanly.

    Raises:
        FileNotFoundError: If a fragment file is missing
        FragmentFormatError: If a fragment does not have the expected layout
    """
    fragments = [FragmentDocument.from_file(path) for path in paths]
    lines = merge_fragments(fragments)

    out = Path(output_path)
    out.write_text("\n".join(lines) + "\n", encoding="utf-8")
    logger.info(f"Merged {len(fragments)} fragments into {out}")
    return out


def merge_batch(
    groups: Mapping[str, Sequence[str | os.PathLike]],
    output_dir: str | os.PathLike,
    extension: str | None = None,
) -> list[Path]:
    """
    Merge every group of fragments into ``<output_dir>/<program name><extension>``

    Args:
        groups: Program name -> fragment paths ordered by suffix
        output_dir: Directory receiving the merged programs
        extension: Output file extension, defaults to config.FRAGMENT_EXTENSION

    Returns:
        Source fragment paths that are now safe to delete. An exception
        means the batch did not complete and no source should be deleted.

    Raises:
        FragmentGroupError: If a merged program would overwrite any fragment
            of the batch. Checked before anything is written.
    """
    extension = config.FRAGMENT_EXTENSION if extension is None else extension
    out_dir = Path(output_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    outputs = {name: out_dir / f"{name}{extension}" for name in groups}
    sources = {Path(p).resolve(): name for name, paths in groups.items() for p in paths}
    for name, out in outputs.items():
        owner = sources.get(out.resolve())
        if owner is not None:
            raise FragmentGroupError(f"merged program {out.name} for {name} would overwrite a fragment of {owner}")

    merged_sources: list[Path] = []
    for name, paths in groups.items():
        merge_group(paths, outputs[name])
        merged_sources.extend(Path(p) for p in paths)

    return merged_sources


def delete_sources(paths: Iterable[str | os.PathLike]) -> int:
    """Delete merged fragment files. Returns the number of files removed."""
    removed = 0
    for path in paths:
        Path(path).unlink()
        removed += 1
    logger.info(f"Deleted {removed} fragment files")
    return removed
