"""Unit tests for directory summary rendering."""

import importlib
import warnings
from collections import Counter

from dirstruct.file_system_tree.directory_summary import DirectorySummary, summarize_directory
from dirstruct.renderers import base_renderer, render_summary, summary_renderer


def test_render_summary(python_project):
    lines = list(render_summary(summarize_directory(python_project)))
    assert lines[0] == str(python_project.resolve())
    assert lines[1] == "  directories  2 visible, 5 total"
    assert lines[2] == "  files        5 visible, 8 total (3 hidden)"
    assert lines[3] == "  size         34 bytes visible, 97 bytes total"
    assert "extensions" in lines
    assert "  .py          3" in lines
    assert "  .md          2" in lines
    assert lines[-2:] == ["ignored", "  .venv        1 file"]


def test_render_summary_of_empty_directory(tmp_path):
    lines = list(render_summary(summarize_directory(tmp_path)))
    assert lines[2] == "  files        0 visible, 0 total"
    assert "extensions" not in lines
    assert "ignored" not in lines


def test_render_summary_truncates_extensions():
    summary = DirectorySummary(path="/p", extensions=Counter({f".e{i}": i + 1 for i in range(12)}))
    lines = list(render_summary(summary, top_extensions=3))
    assert lines[lines.index("extensions") + 1].startswith("  .e11")
    assert lines[-1] == "  ... and 9 more"


def test_render_summary_unreadable():
    lines = list(render_summary(DirectorySummary(path="/p", unreadable=2)))
    assert "  unreadable   2 directories" in lines


def test_renderers_import_without_deprecation_warnings():
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        importlib.reload(base_renderer)
        importlib.reload(summary_renderer)
    assert not [warning for warning in caught if issubclass(warning.category, DeprecationWarning)]
