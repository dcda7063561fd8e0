"""Test configuration and shared fixtures for dirstruct."""

from pathlib import Path
from typing import Dict, Optional

import pytest

from dirstruct.vcs.classifier import StatusClassifier
from dirstruct.vcs.status import VcsStatus


class FakeStatusClassifier(StatusClassifier):
    """Classifier serving fixed statuses, keyed by path relative to a root."""

    def __init__(self, root: Path, statuses: Optional[Dict[str, VcsStatus]] = None) -> None:
        self.root = Path(root).resolve()
        self.statuses = {self.root / rel: status for rel, status in (statuses or {}).items()}
        self.classified = []

    def classify(self, path):
        self.classified.append(Path(path))
        return self.statuses.get(Path(path), VcsStatus.UNVERSIONED)


@pytest.fixture
def fake_classifier():
    """Factory for classifiers with synthetic statuses."""
    return FakeStatusClassifier


@pytest.fixture
def cargo_project(tmp_path):
    """A project with sources and a default-ignored build directory.

    project/
    ├── src/main.rs           (8 bytes)
    └── target/debug/out.bin  (100 bytes)
    """
    root = tmp_path / "project"
    (root / "src").mkdir(parents=True)
    (root / "src" / "main.rs").write_bytes(b"fn main(")
    (root / "target" / "debug").mkdir(parents=True)
    (root / "target" / "debug" / "out.bin").write_bytes(b"x" * 100)
    return root


@pytest.fixture
def python_project(tmp_path):
    """A project mixing visible sources, caches and a virtual environment.

    app/
    ├── .venv/lib/site.py     (40 bytes)
    ├── docs/guide.md         (5 bytes)
    ├── pkg/__init__.py       (0 bytes)
    ├── pkg/__pycache__/core.cpython-312.pyc (20 bytes)
    ├── pkg/core.py           (12 bytes)
    ├── pkg/core.pyc          (3 bytes)
    ├── README.md             (10 bytes)
    └── setup.py              (7 bytes)
    """
    root = tmp_path / "app"
    (root / ".venv" / "lib").mkdir(parents=True)
    (root / ".venv" / "lib" / "site.py").write_bytes(b"s" * 40)
    (root / "docs").mkdir()
    (root / "docs" / "guide.md").write_bytes(b"guide")
    (root / "pkg" / "__pycache__").mkdir(parents=True)
    (root / "pkg" / "__init__.py").write_bytes(b"")
    (root / "pkg" / "__pycache__" / "core.cpython-312.pyc").write_bytes(b"c" * 20)
    (root / "pkg" / "core.py").write_bytes(b"def core(): ")
    (root / "pkg" / "core.pyc").write_bytes(b"pyc")
    (root / "README.md").write_bytes(b"r" * 10)
    (root / "setup.py").write_bytes(b"setup()")
    return root


@pytest.fixture
def config_path(tmp_path, monkeypatch):
    """Point the persisted configuration at a temporary file."""
    path = tmp_path / "config" / "ignores.txt"
    monkeypatch.setenv("DIRSTRUCT_CONFIG", str(path))
    return path
