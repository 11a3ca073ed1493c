import pytest
from pathlib import Path
from ffpool.domain.exceptions import InvalidPatternError
from ffpool.infrastructure.path_discovery import discover, validate_pattern

def test_discover_recursive(tmp_path, input_tree):
    (tmp_path / "in" / "notes.txt").write_text("ignore me")

    paths = discover(str(tmp_path / "in" / "**" / "*.mp4"))

    assert {p.name for p in paths} == {"one.mp4", "two.mp4", "three.mp4"}
    assert all(isinstance(p, Path) for p in paths)

def test_discover_single_level(tmp_path, input_tree):
    paths = discover(str(tmp_path / "in" / "a" / "*.mp4"))
    assert [p.name for p in paths] == ["one.mp4", "two.mp4"]

def test_discover_no_matches_is_empty(tmp_path):
    assert discover(str(tmp_path / "nothing" / "*.mkv")) == []

def test_discover_character_class(tmp_path, input_tree):
    paths = discover(str(tmp_path / "in" / "*" / "[ot]*.mp4"))
    assert {p.name for p in paths} == {"one.mp4", "two.mp4", "three.mp4"}

@pytest.mark.parametrize("pattern", ["", "videos/***/x.mp4", "videos/a**/*.mp4", "clips/[abc.mp4", "[]"])
def test_invalid_patterns(pattern):
    with pytest.raises(InvalidPatternError):
        validate_pattern(pattern)

@pytest.mark.parametrize("pattern", ["*.mp4", "videos/**/*.mov", "**", "clips/[!x]*.mp4", "a/[]]b.mp4", "/abs/path/*.mkv"])
def test_valid_patterns(pattern):
    validate_pattern(pattern)

def test_discover_validates_first(tmp_path):
    with pytest.raises(InvalidPatternError) as exc_info:
        discover(str(tmp_path / "[unclosed"))
    assert "unclosed" in str(exc_info.value)
