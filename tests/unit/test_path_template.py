import pytest
from pathlib import Path
from ffpool.domain.exceptions import MissingPathComponent
from ffpool.pipeline.path_template import decompose, expand, placeholders

def test_expand_dir_name_ext():
    assert expand("{dir}/{name}_out.{ext}", "a/b/c.mp4") == "a/b/c_out.mp4"

def test_expand_parent():
    assert expand("{parent}/{name}.{ext}", "a/b/c.mp4") == "b/c.mp4"

def test_expand_accepts_path_objects():
    assert expand("/dest/{dir}/{name}_transcoded.{ext}", Path("media/clips/x.mov")) == "/dest/media/clips/x_transcoded.mov"

def test_template_without_placeholders_is_unchanged():
    assert expand("/tmp/out.mkv", "a/b/c.mp4") == "/tmp/out.mkv"

def test_repeated_placeholders_all_expanded():
    assert expand("{name}-{name}.{ext}.{ext}", "x/clip.avi") == "clip-clip.avi.avi"

def test_substituted_text_is_not_expanded_again():
    # A directory literally named '{name}' must survive expansion
    assert expand("{dir}/{ext}", "{name}/c.mp4") == "{name}/mp4"

def test_unknown_braces_are_literal():
    assert expand("{other}/{name}.{ext}", "c.mp4") == "{other}/c.mp4"

def test_decompose_parts():
    parts = decompose("a/b/c.mp4")
    assert parts.ext == "mp4"
    assert parts.name == "c"
    assert parts.dir == "a/b"
    assert parts.parent == "b"

def test_decompose_multiple_dots_uses_last_extension():
    parts = decompose("shows/ep.01.final.mkv")
    assert parts.ext == "mkv"
    assert parts.name == "ep.01.final"

def test_decompose_no_directory():
    parts = decompose("c.mp4")
    assert parts.dir == ""
    assert parts.parent == ""

def test_decompose_root_directory():
    parts = decompose("/c.mp4")
    assert parts.dir == "/"
    assert parts.parent == ""

def test_decompose_parent_dotdot_is_empty():
    parts = decompose("../c.mp4")
    assert parts.dir == ".."
    assert parts.parent == ""

def test_missing_extension_fails():
    with pytest.raises(MissingPathComponent) as exc_info:
        expand("{dir}/{name}.{ext}", "a/b/c")
    assert exc_info.value.component == "extension"

def test_missing_extension_fails_even_without_ext_placeholder():
    with pytest.raises(MissingPathComponent):
        expand("{name}.mkv", "a/b/c")

def test_dotfile_has_no_extension():
    with pytest.raises(MissingPathComponent):
        decompose("a/.hidden")

@pytest.mark.parametrize("path", ["", ".", "/", ".."])
def test_path_without_file_name_fails(path):
    with pytest.raises(MissingPathComponent) as exc_info:
        decompose(path)
    assert exc_info.value.component == "file name"

def test_placeholders_in_order_of_first_use():
    assert placeholders("{name}/{dir}/{name}.{ext}") == ["name", "dir", "ext"]
    assert placeholders("/fixed/path.mp4") == []

def test_trailing_dot_counts_as_missing_extension():
    with pytest.raises(MissingPathComponent) as exc_info:
        expand("{dir}/{name}.{ext}", "a/b/clip.")
    assert exc_info.value.component == "extension"
