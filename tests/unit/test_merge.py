import pytest

from gcode_processor import config
from gcode_processor.gcode import FragmentDocument
from gcode_processor.merge import (
    delete_sources,
    merge_batch,
    merge_fragments,
    merge_group,
    merge_offset_lines,
    relocate_tool_comment,
)
from gcode_processor.utils.errors import FragmentFormatError, FragmentGroupError


def _fragment(lines, path="PART-0.nc"):
    return FragmentDocument.from_lines(lines, path=path)


def _texts(lines):
    return [line.text for line in lines]


# ============================================================================
# TOOL COMMENT RELOCATION
# ============================================================================

def test_relocation_leaves_comment_already_in_place():
    doc = _fragment(["%", "", "(OP1)", "(T1 MILL)", "G0 X1", ""])
    relocate_tool_comment(doc)
    assert _texts(doc) == ["%", "", "(OP1)", "(T1 MILL)", "G0 X1", ""]


def test_relocation_moves_tool_comment_after_first_operation_comment():
    doc = _fragment(["%", "(T1 MILL)", "N10 G20", "", "(OP1)", "G0 X1", "(OP2)", ""])
    before = len(doc)
    relocate_tool_comment(doc)

    assert len(doc) == before
    assert _texts(doc) == ["%", "N10 G20", "", "(OP1)", "(T1 MILL)", "G0 X1", "(OP2)", ""]
    assert _texts(doc.body) == ["(OP1)", "(T1 MILL)", "G0 X1", "(OP2)", ""]


def test_relocation_moves_tool_comment_backwards():
    doc = _fragment(["(OP1)", "G0 X1", "(T1 MILL)"])
    relocate_tool_comment(doc)
    assert _texts(doc) == ["(OP1)", "(T1 MILL)", "G0 X1"]


@pytest.mark.parametrize(
    "lines",
    [
        ["%", "", "(OP1)", "G0 X1", ""],
        ["(T1)", "(T2)", "", "(OP1)", ""],
        ["(T1)", "", "G0 X1", ""],
    ],
)
def test_relocation_rejects_malformed_fragments(lines):
    with pytest.raises(FragmentFormatError) as exc:
        relocate_tool_comment(_fragment(lines))
    assert "PART-0.nc" in str(exc.value)


# ============================================================================
# OFFSET LINE MERGE
# ============================================================================

def test_offset_and_tool_length_lines_are_combined():
    doc = _fragment(
        ["%", "", "(OP1)", "N10 G54", "N20 G0 E1 X1. Y2. F200", "N30 Z0.6 H1", "N40 G1 Z-1.", "", "M30"]
    )
    merged = merge_offset_lines(doc)

    assert merged.text == "N20 G0 E1 X1. Y2. Z0.6 H1 F200"
    assert _texts(doc) == ["%", "", "(OP1)", "N10 G54", "N20 G0 E1 X1. Y2. Z0.6 H1 F200", "N40 G1 Z-1.", "", "M30"]
    assert doc[4] is merged
    assert merged in doc.body
    assert merged.description == "RAPID WITH FIXTURE OFFSET 1"


def test_offset_merge_with_only_required_fields():
    doc = _fragment(["%", "", "G1 E2", "H3", ""])
    merge_offset_lines(doc)
    assert _texts(doc.body) == ["G1 E2 H3", ""]


def test_offset_merge_uses_first_pair_only():
    doc = _fragment(["%", "", "N10 G0 E1", "N20 H1", "N30 G0 E2", "N40 H2", ""])
    merge_offset_lines(doc)
    assert _texts(doc.body) == ["N10 G0 E1 H1", "N30 G0 E2", "N40 H2", ""]


def test_offset_merge_only_searches_the_body():
    doc = _fragment(["N5 G0 E9", "N6 H9", "", "N10 G0 E1", "N20 H1", ""])
    merge_offset_lines(doc)
    assert _texts(doc.header) == ["N5 G0 E9", "N6 H9", ""]
    assert _texts(doc.body) == ["N10 G0 E1 H1", ""]


@pytest.mark.parametrize(
    "body",
    [
        ["N10 G0 X1"],
        ["N10 G0 E1 X1"],
        ["N10 Z1 H1"],
        ["N10 G0 E1", "N15 X1", "N20 H1"],
        ["N10 H1", "N20 G0 E1"],
        ["N10 G0 E1 H1"],
        ["N10 G0 E1 M8", "N20 H1"],
        ["N10 G2 E1", "N20 H1"],
        ["N10 G0 E1.5", "N20 H1"],
        ["N10 G0 E1", "N20 H1 X1"],
        ["N10 E1 X1", "N20 H1"],
        ["N10 G0 G1 E1", "N20 H1"],
        ["N10 G0 E1 X1. X2.", "N20 H1"],
        ["N10 G0 E1 E2", "N20 H1"],
        ["N10 N11 G0 E1", "N20 H1"],
        ["N10 G0 E1 F10 F20", "N20 H1"],
        ["N10 G0 E1", "N20 Z1. Z2. H1"],
        ["N10 G0 E1", "N20 H1 H2"],
    ],
)
def test_offset_merge_rejects_malformed_lines(body):
    doc = _fragment(["%", ""] + body + [""])
    with pytest.raises(FragmentFormatError):
        merge_offset_lines(doc)


def test_offset_merge_leaves_fragment_untouched_on_repeated_words():
    lines = ["%", "", "N10 G0 G1 E1 X1. X2. Y3.", "N20 Z1. Z2. H1", ""]
    doc = _fragment(lines)
    with pytest.raises(FragmentFormatError) as exc:
        merge_offset_lines(doc)
    assert "repeated" in str(exc.value)
    assert _texts(doc) == lines


# ============================================================================
# FRAGMENT MERGE
# ============================================================================

def test_two_fragment_merge_renumbers_sequentially():
    first = _fragment(["%", "(T1 MILL)", "", "(OP1)", "N10 G0 E3", "N20 H5", "", "N30 M30", "%"], "P-0.nc")
    second = _fragment(
        ["%", "(T2 DRILL)", "", "(OP2)", "N10 G1 X1 Y1", "N20 G0 E4 X2. Y3.", "N30 Z1. H6", "", "N40 M30", "%"],
        "P-1.nc",
    )

    assert merge_fragments([first, second]) == [
        "%",
        "",
        "(OP1)",
        "(T1 MILL)",
        "N10 G0 E3 H5",
        "",
        "(OP2)",
        "(T2 DRILL)",
        "N20 G1 X1 Y1",
        "N30 G0 E4 X2. Y3. Z1. H6",
        "",
        "N40 M30",
        "%",
    ]


def test_merge_of_cam_fragments(fragment_texts, merged_program):
    fragments = [
        FragmentDocument.from_text(text, path=f"PART-{i}.nc") for i, text in enumerate(fragment_texts)
    ]
    assert merge_fragments(fragments) == merged_program


def test_merge_with_custom_numbering(fragment_texts):
    fragment = FragmentDocument.from_text(fragment_texts[0])
    lines = merge_fragments([fragment], start=100, step=5)
    numbered = [line.split()[0] for line in lines if line.startswith("N")]
    assert numbered == [f"N{100 + 5 * i}" for i in range(len(numbered))]
    # a single fragment keeps its own header and footer
    assert lines[0] == "%"
    assert lines[-1] == "%"


def test_merge_fails_on_any_malformed_fragment(fragment_texts):
    good = FragmentDocument.from_text(fragment_texts[0], path="PART-0.nc")
    bad = FragmentDocument.from_text(fragment_texts[1].replace(" H2", ""), path="PART-1.nc")
    with pytest.raises(FragmentFormatError) as exc:
        merge_fragments([good, bad])
    assert "PART-1.nc" in str(exc.value)


def test_merge_of_no_fragments():
    assert merge_fragments([]) == []


def test_renumbering_is_logged_at_trace_level(fragment_texts, caplog):
    fragment = FragmentDocument.from_text(fragment_texts[0])
    with caplog.at_level(config.TRACE, logger="gcode_processor.merge"):
        merge_fragments([fragment])

    records = [r for r in caplog.records if r.levelno == config.TRACE]
    assert records
    assert records[0].levelname == "TRACE"
    assert records[0].getMessage() == "renumber N10 -> N10"


# ============================================================================
# FILE LEVEL MERGE
# ============================================================================

def test_merge_group_writes_output(write_fragments, fragment_texts, merged_program, tmp_path):
    paths = write_fragments(fragment_texts)
    out = merge_group(paths, tmp_path / "PART.nc")
    assert out.read_text(encoding="utf-8").splitlines() == merged_program


def test_merge_group_writes_nothing_on_error(write_fragments, fragment_texts, tmp_path):
    paths = write_fragments([fragment_texts[0], fragment_texts[1].replace("(DRILL1)\n", "")])
    with pytest.raises(FragmentFormatError):
        merge_group(paths, tmp_path / "PART.nc")
    assert not (tmp_path / "PART.nc").exists()


def test_merge_group_missing_fragment(tmp_path):
    with pytest.raises(FileNotFoundError):
        merge_group([tmp_path / "PART-0.nc"], tmp_path / "PART.nc")


def test_merge_batch_returns_sources_safe_to_delete(write_fragments, fragment_texts, tmp_path):
    part = write_fragments(fragment_texts, name="PART", directory=tmp_path / "in")
    other = write_fragments(fragment_texts[:1], name="OTHER", directory=tmp_path / "in")
    out_dir = tmp_path / "out"

    sources = merge_batch({"PART": part, "OTHER": other}, out_dir)

    assert sources == part + other
    assert (out_dir / "PART.nc").exists()
    assert (out_dir / "OTHER.nc").exists()
    assert all(p.exists() for p in sources)

    assert delete_sources(sources) == 3
    assert not any(p.exists() for p in sources)


def test_merge_batch_failure_keeps_sources(write_fragments, fragment_texts, tmp_path):
    good = write_fragments(fragment_texts, name="GOOD")
    bad = write_fragments([fragment_texts[0].replace("(T1", "(X1")], name="BAD")

    with pytest.raises(FragmentFormatError):
        merge_batch({"GOOD": good, "BAD": bad}, tmp_path / "out")

    assert all(p.exists() for p in good + bad)
    assert not (tmp_path / "out" / "BAD.nc").exists()


def test_merge_batch_refuses_to_overwrite_a_fragment(write_fragments, fragment_texts, tmp_path):
    # PART-0-0.nc groups as "PART-0", whose output PART-0.nc is fragment 0 of "PART"
    nested = write_fragments(fragment_texts[:1], name="PART-0")
    part = write_fragments(fragment_texts, name="PART")
    before = {p: p.read_text(encoding="utf-8") for p in nested + part}

    with pytest.raises(FragmentGroupError) as exc:
        merge_batch({"PART-0": nested, "PART": part}, tmp_path)

    assert "PART-0.nc" in str(exc.value)
    assert {p: p.read_text(encoding="utf-8") for p in nested + part} == before
    assert not (tmp_path / "PART.nc").exists()
