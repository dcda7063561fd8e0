"""Flat rendering: one relative path per line."""

from typing import Iterator, Optional

from dirstruct.file_system_tree.entry import Entry

from .base_renderer import Renderer, annotations


class FlatRenderer(Renderer):
    """Render every entry below the root as its path, in traversal order.

    Directories carry a trailing ``/`` and the same annotations as in the tree view.

    Attributes:
        show_sizes (bool): Append sizes where known.
        base (Optional[str]): Prefix joined in front of every path (e.g. the path the
            user typed); paths are relative to the root if None.

    Example:
        >>> print(FlatRenderer().render_text(walk("project")))  # doctest: +SKIP
        src/
        src/main.rs
        target/ [1 file, 100 bytes ignored]
        Cargo.toml
    """

    def __init__(self, show_sizes: bool = False, base: Optional[str] = None) -> None:
        super().__init__(show_sizes)
        self.base = base

    def format_path(self, entry: Entry, root: Entry) -> str:
        path = entry.absolute_path.relative_to(root.absolute_path).as_posix()
        if self.base:
            path = f"{self.base.rstrip('/')}/{path}"
        if entry.is_dir:
            return f"{path}/"
        if entry.is_symlink and entry.symlink_target:
            return f"{path} -> {entry.symlink_target}"
        return path

    def render(self, root: Entry) -> Iterator[str]:
        for entry in root.descendants:
            yield f"{self.format_path(entry, root)}{annotations(entry, self.show_sizes)}"
