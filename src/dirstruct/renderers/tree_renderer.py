"""Tree-shaped text rendering with box-drawing connectors."""

from typing import Iterator, Optional

from dirstruct.file_system_tree.entry import Entry

from .base_renderer import Renderer, annotations, entry_label


class TreeRenderer(Renderer):
    """Render an entry tree similar to the Unix ``tree`` command.

    Summarized directories are shown with their ignored file count and size, so the
    reader knows what was suppressed. Children are rendered in the order the walker
    attached them.

    Attributes:
        show_sizes (bool): Append sizes to files and directories.
        root_label (Optional[str]): Text of the first line; ``<root name>/`` if None.

    Example:
        >>> renderer = TreeRenderer()  # doctest: +SKIP
        >>> print(renderer.render_text(walk("project")))  # doctest: +SKIP
        project/
        ├── src/
        │   └── main.rs
        ├── target/ [1 file, 100 bytes ignored]
        └── Cargo.toml
    """

    def __init__(self, show_sizes: bool = False, root_label: Optional[str] = None) -> None:
        super().__init__(show_sizes)
        self.root_label = root_label

    def render(self, root: Entry) -> Iterator[str]:
        label = self.root_label if self.root_label is not None else f"{root.name}/"
        yield f"{label}{annotations(root, self.show_sizes)}"
        yield from self._render_children(root, "")

    def _render_children(self, node: Entry, prefix: str) -> Iterator[str]:
        children = node.children
        for i, child in enumerate(children):
            is_last = i == len(children) - 1
            connector = "└── " if is_last else "├── "
            yield f"{prefix}{connector}{entry_label(child)}{annotations(child, self.show_sizes)}"
            if child.children:
                yield from self._render_children(child, prefix + ("    " if is_last else "│   "))
