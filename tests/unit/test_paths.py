from pathlib import Path

from gcode_processor.annotate import default_output_path
from gcode_processor.utils.paths import append_to_file_name, make_unique


def test_append_to_file_name_keeps_directory_and_extension():
    assert append_to_file_name(Path("a") / "b.nc", "_x") == Path("a") / "b_x.nc"
    assert append_to_file_name("prog", " Commented") == Path("prog Commented")


def test_make_unique_returns_free_path(tmp_path):
    target = tmp_path / "prog.nc"
    assert make_unique(target) == target


def test_make_unique_numbers_taken_paths(tmp_path):
    target = tmp_path / "prog.nc"
    target.write_text("")
    assert make_unique(target) == tmp_path / "prog 1.nc"

    (tmp_path / "prog 1.nc").write_text("")
    assert make_unique(target) == tmp_path / "prog 2.nc"


def test_default_annotation_path(tmp_path):
    source = tmp_path / "PART.nc"
    assert default_output_path(source) == tmp_path / "PART Commented.nc"

    (tmp_path / "PART Commented.nc").write_text("")
    assert default_output_path(source) == tmp_path / "PART Commented 1.nc"
