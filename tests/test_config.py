"""Unit tests for the persisted ignore configuration."""

from pathlib import Path

import pytest

from dirstruct.config import ConfigStore, default_config_path


def test_default_path_uses_environment(config_path):
    assert default_config_path() == config_path
    assert ConfigStore().path == config_path


def test_default_path_without_environment(monkeypatch):
    monkeypatch.delenv("DIRSTRUCT_CONFIG", raising=False)
    assert default_config_path() == Path.home() / ".config" / "dirstruct" / "ignores.txt"


def test_missing_file_is_empty(config_path):
    assert ConfigStore().load() == []
    assert not config_path.exists()


def test_load_skips_blanks_and_comments(config_path):
    config_path.parent.mkdir(parents=True)
    config_path.write_text("# my ignores\nvenv_old\n\n  *.bak  \n#disabled\n")
    assert ConfigStore().load() == ["venv_old", "*.bak"]


def test_add_creates_file_and_rejects_duplicates(config_path):
    store = ConfigStore()
    assert store.add("venv_old")
    assert store.add("*.bak")
    assert not store.add("venv_old")
    assert store.load() == ["venv_old", "*.bak"]
    assert config_path.read_text() == "venv_old\n*.bak\n"


@pytest.mark.parametrize("pattern", ["", "   ", "# comment"])
def test_add_rejects_unstorable_patterns(config_path, pattern):
    with pytest.raises(ValueError):
        ConfigStore().add(pattern)


def test_remove(config_path):
    store = ConfigStore()
    store.add("a")
    store.add("b")
    assert store.remove("a")
    assert not store.remove("a")
    assert store.load() == ["b"]


def test_clear(config_path):
    store = ConfigStore()
    assert not store.clear()
    store.add("a")
    assert store.clear()
    assert not config_path.exists()
    assert store.load() == []


def test_explicit_path(tmp_path):
    store = ConfigStore(tmp_path / "custom.txt")
    store.add("x")
    assert (tmp_path / "custom.txt").read_text() == "x\n"
