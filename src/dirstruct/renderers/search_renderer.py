"""Rendering of search results, tree-shaped or flat."""

from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional

from dirstruct.file_system_tree.entry import Entry
from dirstruct.types import EntryKind

from .base_renderer import describe_ignored, describe_size
from .tree_renderer import TreeRenderer


def search_header(count: int, pattern: str) -> str:
    """First line of a search report.

    Example:
        >>> search_header(3, "*.py")
        "found 3 item(s) matching '*.py'"
        >>> search_header(0, "gui")
        "no files or directories matching 'gui' found"
    """
    if count == 0:
        return f"no files or directories matching '{pattern}' found"
    return f"found {count} item(s) matching '{pattern}'"


def build_search_tree(matches: Iterable[Entry], root_path: Path) -> Entry:
    """Rebuild a tree holding the matches and the directories leading to them.

    Matches must arrive in traversal (pre-order) order, which keeps every directory
    ahead of its descendants and the siblings in walker order. Intermediate
    directories that did not match themselves are added as plain directory entries.
    """
    root = Entry(root_path.name or str(root_path), root_path, EntryKind.DIRECTORY)
    nodes: Dict[Path, Entry] = {root_path: root}

    def parent_of(path: Path) -> Entry:
        parent_path = path.parent
        if parent_path not in nodes:
            nodes[parent_path] = Entry(parent_path.name, parent_path, EntryKind.DIRECTORY, parent=parent_of(parent_path))
        return nodes[parent_path]

    for match in matches:
        match.parent = parent_of(match.absolute_path)
        nodes[match.absolute_path] = match
    return root


def render_search_tree(
    matches: Iterable[Entry], root_path: Path, root_label: Optional[str] = None, show_sizes: bool = True
) -> Iterator[str]:
    """Render search results as a tree of matches and their ancestor directories.

    Example:
        >>> for line in render_search_tree(search(".", SearchSpec("*.py")), Path(".")):  # doctest: +SKIP
        ...     print(line)
        ./
        └── src/
            └── main.py (120 bytes)
    """
    root = build_search_tree(matches, root_path)
    yield from TreeRenderer(show_sizes=show_sizes, root_label=root_label).render(root)


def render_search_flat(
    matches: Iterable[Entry], root_path: Path, base: Optional[str] = None, show_sizes: bool = True
) -> Iterator[str]:
    """Render search results one path per line, in traversal order."""
    for match in matches:
        path = match.absolute_path.relative_to(root_path).as_posix()
        if base:
            path = f"{base.rstrip('/')}/{path}"
        if match.is_dir:
            path += "/"
        elif match.is_symlink and match.symlink_target:
            path += f" -> {match.symlink_target}"
        parts: List[str] = [path]
        if match.is_summarized:
            parts.append(describe_ignored(match.ignored_summary))
        elif show_sizes and match.size_bytes is not None:
            parts.append(describe_size(match.size_bytes))
        yield " ".join(parts)
