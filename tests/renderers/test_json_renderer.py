"""Unit tests for JSON rendering."""

import json

from dirstruct.file_system_tree.entry import Entry
from dirstruct.file_system_tree.tree_walker import walk
from dirstruct.renderers import JSONRenderer, entry_to_dict
from dirstruct.search_engine import SearchSpec, search
from dirstruct.types import EntryKind
from dirstruct.vcs.status import CommitInfo, VcsStatus


def test_tree_document(cargo_project):
    document = json.loads(JSONRenderer().render_text(walk(cargo_project)))
    assert document["name"] == "project"
    assert document["path"] == "."
    assert document["type"] == "directory"

    src, target = document["children"]
    assert src["path"] == "src"
    assert src["children"] == [{"name": "main.rs", "path": "src/main.rs", "type": "file", "size": 8}]
    assert target["ignored"] == {"count": 1, "total_size": 100}
    assert "children" not in target


def test_entry_metadata(tmp_path):
    entry = Entry("link", tmp_path / "link", EntryKind.SYMLINK, symlink_target="src")
    entry.vcs_status = VcsStatus.TRACKED | VcsStatus.CHANGED
    entry.last_commit = CommitInfo("abc1234", "Fix", "Dev", "today")
    data = entry_to_dict(entry, tmp_path)
    assert data["target"] == "src"
    assert data["vcs_status"] == ["tracked", "changed"]
    assert data["last_commit"] == {"id": "abc1234", "summary": "Fix", "author": "Dev", "date": "today"}


def test_unreadable_flag(tmp_path):
    entry = Entry("locked", tmp_path / "locked", EntryKind.DIRECTORY)
    entry.unreadable = True
    assert entry_to_dict(entry, tmp_path)["unreadable"] is True


def test_matches_document(python_project):
    root = python_project.resolve()
    lines = list(JSONRenderer(indent=None).render_matches(search(root, SearchSpec("*.md")), root, "*.md"))
    assert len(lines) == 1
    document = json.loads(lines[0])
    assert document["pattern"] == "*.md"
    assert document["count"] == 2
    assert [match["path"] for match in document["matches"]] == ["docs/guide.md", "README.md"]
