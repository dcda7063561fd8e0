"""Renderer base class defining how curated trees are turned into output lines.

This module provides the abstract base class every renderer implements, together
with the annotation helpers the text renderers share.
"""

from abc import ABC, abstractmethod
from typing import Iterator, Optional

from humanfriendly import format_size
from humanfriendly.text import pluralize

from dirstruct.file_system_tree.entry import Entry, IgnoredSummary


class Renderer(ABC):
    """Abstract base class for rendering an entry tree.

    Renderers stream their output one line (or, for structured formats, one document)
    at a time so the caller can write it as it is produced and stop early when the
    output pipe closes.

    Attributes:
        show_sizes (bool): Include file and directory sizes where they are known.

    Example:
        >>> class NamesOnly(Renderer):
        ...     def render(self, root):
        ...         for node in root.iter_visible():
        ...             yield node.name
    """

    def __init__(self, show_sizes: bool = False) -> None:
        self.show_sizes = show_sizes

    @abstractmethod
    def render(self, root: Entry) -> Iterator[str]:
        """Render the tree below ``root``.

        Args:
            root: Root entry as produced by the tree walker.

        Yields:
            Output lines without trailing newlines.
        """
        pass

    def render_text(self, root: Entry) -> str:
        """Render the whole tree into one string."""
        return "\n".join(self.render(root))


def describe_ignored(summary: IgnoredSummary) -> str:
    """Format the summary of a suppressed directory.

    Example:
        >>> describe_ignored(IgnoredSummary(1, 100))
        '[1 file, 100 bytes ignored]'
        >>> describe_ignored(IgnoredSummary(12, 3500000))
        '[12 files, 3.5 MB ignored]'
    """
    return f"[{pluralize(summary.count, 'file')}, {format_size(summary.total_size)} ignored]"


def describe_size(size_bytes: Optional[int]) -> str:
    """Parenthesized human-readable size, or an empty string when unknown.

    Example:
        >>> describe_size(15)
        '(15 bytes)'
        >>> describe_size(None)
        ''
    """
    if size_bytes is None:
        return ""
    return f"({format_size(size_bytes)})"


def entry_label(entry: Entry) -> str:
    """Name of an entry with its kind marker: ``/`` for directories, ``-> target`` for links.

    Example:
        >>> from dirstruct.types import EntryKind
        >>> entry_label(Entry("src", "/p/src", EntryKind.DIRECTORY))
        'src/'
        >>> entry_label(Entry("latest", "/p/latest", EntryKind.SYMLINK, symlink_target="v2"))
        'latest -> v2'
    """
    if entry.is_dir:
        return f"{entry.name}/"
    if entry.is_symlink:
        return f"{entry.name} -> {entry.symlink_target}" if entry.symlink_target else f"{entry.name} [symlink]"
    return entry.name


def annotations(entry: Entry, show_sizes: bool) -> str:
    """Trailing markers for one entry, separated from the label by a space.

    Summarized directories get their ignored summary, unreadable directories an
    ``[unreadable]`` marker, and entries from history views their last commit.
    """
    parts = []
    if entry.is_summarized:
        parts.append(describe_ignored(entry.ignored_summary))
    elif show_sizes and not entry.unreadable:
        size = describe_size(entry.size_bytes)
        if size:
            parts.append(size)
    if entry.unreadable:
        parts.append("[unreadable]")
    if entry.last_commit is not None:
        parts.append(f"[{entry.last_commit}]")
    return " " + " ".join(parts) if parts else ""
