"""JSON rendering of entry trees and search results."""

import json
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List

from dirstruct.file_system_tree.entry import Entry

from .base_renderer import Renderer


def entry_to_dict(entry: Entry, root_path: Path) -> Dict[str, Any]:
    """Describe one entry (without its children) as a JSON-serializable mapping.

    Keys that do not apply to the entry are left out, so a plain file is just its
    name, path, type and size.

    Example:
        >>> from dirstruct.types import EntryKind
        >>> entry = Entry("a.txt", "/p/a.txt", EntryKind.FILE, size_bytes=3)
        >>> entry_to_dict(entry, Path("/p"))
        {'name': 'a.txt', 'path': 'a.txt', 'type': 'file', 'size': 3}
    """
    data: Dict[str, Any] = {
        "name": entry.name,
        "path": entry.absolute_path.relative_to(root_path).as_posix() if entry.absolute_path != root_path else ".",
        "type": entry.kind.value,
    }
    if entry.size_bytes is not None:
        data["size"] = entry.size_bytes
    if entry.symlink_target is not None:
        data["target"] = entry.symlink_target
    if entry.ignored_summary is not None:
        data["ignored"] = {"count": entry.ignored_summary.count, "total_size": entry.ignored_summary.total_size}
    if entry.unreadable:
        data["unreadable"] = True
    if entry.vcs_status is not None:
        data["vcs_status"] = entry.vcs_status.labels
    if entry.last_commit is not None:
        commit = entry.last_commit
        data["last_commit"] = {
            "id": commit.commit_id,
            "summary": commit.summary,
            "author": commit.author,
            "date": commit.date,
        }
    return data


class JSONRenderer(Renderer):
    """Render a tree as one nested JSON document.

    Expanded directories carry a ``children`` list; summarized directories carry an
    ``ignored`` object instead.

    Attributes:
        indent (Optional[int]): Indentation passed to the JSON encoder.

    Example:
        >>> print(JSONRenderer(indent=None).render_text(walk("project")))  # doctest: +SKIP
        {"name": "project", "path": ".", "type": "directory", "children": [...]}
    """

    def __init__(self, show_sizes: bool = False, indent: int = 2) -> None:
        super().__init__(show_sizes)
        self.indent = indent

    def to_dict(self, entry: Entry, root_path: Path) -> Dict[str, Any]:
        data = entry_to_dict(entry, root_path)
        if entry.is_dir and not entry.is_summarized:
            data["children"] = [self.to_dict(child, root_path) for child in entry.children]
        return data

    def render(self, root: Entry) -> Iterator[str]:
        yield json.dumps(self.to_dict(root, root.absolute_path), indent=self.indent, ensure_ascii=False)

    def render_matches(self, matches: Iterable[Entry], root_path: Path, pattern: str) -> Iterator[str]:
        """Render search results as a JSON document listing every match."""
        results: List[Dict[str, Any]] = [entry_to_dict(entry, root_path) for entry in matches]
        document = {"pattern": pattern, "root": str(root_path), "count": len(results), "matches": results}
        yield json.dumps(document, indent=self.indent, ensure_ascii=False)
