"""Unit tests for name pattern matching."""

import pytest

from dirstruct.exceptions import InvalidPatternError
from dirstruct.pattern_matcher import CASE_INSENSITIVE_FS, PatternMatcher, has_wildcards, matches, split_patterns


@pytest.mark.parametrize(
    "name,pattern",
    [
        ("MyGUI.py", "gui"),
        ("gui", "GUI"),
        ("readme.md", "README"),
        ("archive.tar.gz", ".tar."),
        ("exact", "exact"),
    ],
)
def test_plain_text_is_case_insensitive_substring(name, pattern):
    assert matches(name, pattern)


@pytest.mark.parametrize(
    "name,pattern",
    [
        ("main.py", "gui"),
        ("ab", "abc"),
        ("src", "src_"),
    ],
)
def test_plain_text_no_substring_no_match(name, pattern):
    assert not matches(name, pattern)


@pytest.mark.parametrize(
    "name,pattern,expected",
    [
        ("main.py", "*.py", True),
        ("main.pyc", "*.py", False),
        ("gui_main.py", "gui*", True),
        ("my_gui.py", "gui*", False),
        ("a.txt", "?.txt", True),
        ("ab.txt", "?.txt", False),
        ("Makefile", "*", True),
        ("log.2024", "log.????", True),
    ],
)
def test_glob_matches_whole_name(name, pattern, expected):
    assert matches(name, pattern) is expected


def test_glob_is_not_a_substring_match():
    # "*.py" is contained in "x*.pyz" textually but must not match as a glob
    assert not matches("file.pyz", "*.py")
    assert not matches("prefix_main.py_suffix", "main.py*")


def test_glob_treats_brackets_literally():
    assert matches("[draft].txt", "[draft]*")
    assert not matches("d.txt", "[draft]*")


@pytest.mark.parametrize("pattern", ["!*.py", "#*"])
def test_glob_leading_special_characters_are_literal(pattern):
    assert matches(pattern.replace("*", "x"), pattern)


@pytest.mark.skipif(CASE_INSENSITIVE_FS, reason="host filesystem is case-insensitive")
def test_glob_case_sensitive_on_case_sensitive_hosts():
    assert matches("main.py", "*.py")
    assert not matches("MAIN.PY", "*.py")


@pytest.mark.skipif(not CASE_INSENSITIVE_FS, reason="host filesystem is case-sensitive")
def test_glob_case_insensitive_on_case_insensitive_hosts():
    assert matches("MAIN.PY", "*.py")


def test_comma_separated_list_matches_any_member():
    matcher = PatternMatcher("*.wav, *.mp3,Linux")
    assert matcher.matches("song.mp3")
    assert matcher.matches("take1.wav")
    assert matcher.matches("linux-6.1")
    assert not matcher.matches("song.ogg")
    assert matcher.is_glob


def test_exact_mode_requires_equal_names():
    matcher = PatternMatcher("build", exact=True)
    assert matcher.matches("build")
    assert not matcher.matches("buildscripts")
    assert not matcher.matches("Build")


def test_exact_mode_globs_still_match_whole_name():
    matcher = PatternMatcher("*.egg-info", exact=True)
    assert matcher.matches("pkg.egg-info")
    assert not matcher.matches("pkg.egg-info.bak")


@pytest.mark.parametrize("pattern", ["", " ", ",", " , "])
def test_empty_pattern_matches_nothing(pattern):
    matcher = PatternMatcher(pattern)
    assert matcher.is_empty
    assert not matcher.matches("anything")
    assert not matcher.matches("")


def test_has_wildcards():
    assert has_wildcards("*.py")
    assert has_wildcards("file?.txt")
    assert not has_wildcards("main.py")
    assert not has_wildcards("[abc]")


def test_split_patterns():
    assert split_patterns("win, Linux,,") == ["win", "Linux"]
    assert split_patterns("") == []
    assert split_patterns("single") == ["single"]


def test_invalid_pattern_error_carries_pattern():
    error = InvalidPatternError("***/", "bad glob")
    assert error.pattern == "***/"
    assert "***/" in str(error)
