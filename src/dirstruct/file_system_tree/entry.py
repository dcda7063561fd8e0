"""Entry nodes of a curated directory tree."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterator, Optional

from anytree import Node, PreOrderIter

from dirstruct.types import EntryKind, PathType
from dirstruct.vcs.status import CommitInfo, VcsStatus


@dataclass(frozen=True)
class IgnoredSummary:
    """Aggregate of a summarized directory: regular-file count and total size in bytes.

    Example:
        >>> IgnoredSummary(1, 100) + IgnoredSummary(2, 50)
        IgnoredSummary(count=3, total_size=150)
    """

    count: int = 0
    total_size: int = 0

    def __add__(self, other: "IgnoredSummary") -> "IgnoredSummary":
        return IgnoredSummary(self.count + other.count, self.total_size + other.total_size)


class Entry(Node):  # type: ignore
    """Node representing one filesystem entry in a curated tree.

    Extends anytree.Node with the entry kind, its absolute path and size, and the
    summary of suppressed content. A directory is either expanded (it may have
    children) or summarized (it has an ``ignored_summary``), never both: attaching a
    child to a summarized entry, or summarizing an entry that has children, raises
    ValueError.

    Attributes:
        name (str): Base name of the entry.
        absolute_path (Path): Absolute path of the entry.
        kind (EntryKind): File, directory or symlink.
        size_bytes (Optional[int]): File size; for directories only set when sizes were
            requested, as the total of the visible files below it.
        ignored_summary (Optional[IgnoredSummary]): Set on summarized directories.
        unreadable (bool): True if the directory could not be listed.
        symlink_target (Optional[str]): Link target for symlinks.
        vcs_status (Optional[VcsStatus]): Status flags when a VCS filter is active.
        last_commit (Optional[CommitInfo]): Last commit touching the entry (history mode).

    Example:
        >>> root = Entry("root", "/tmp/root", EntryKind.DIRECTORY)
        >>> _ = Entry("a.txt", "/tmp/root/a.txt", EntryKind.FILE, parent=root, size_bytes=3)
        >>> cache = Entry("node_modules", "/tmp/root/node_modules", EntryKind.DIRECTORY, parent=root)
        >>> cache.summarize(IgnoredSummary(10, 2048))
        >>> root.visible_size, root.hidden_size
        (3, 2048)
    """

    def __init__(
        self,
        name: str,
        absolute_path: PathType,
        kind: EntryKind = EntryKind.FILE,
        parent: Optional["Entry"] = None,
        size_bytes: Optional[int] = None,
        symlink_target: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(name, parent, **kwargs)
        self.absolute_path = Path(absolute_path)
        self.kind = kind
        self.size_bytes = size_bytes
        self.symlink_target = symlink_target
        self.ignored_summary: Optional[IgnoredSummary] = None
        self.unreadable = False
        self.vcs_status: Optional[VcsStatus] = None
        self.last_commit: Optional[CommitInfo] = None

    def _pre_attach(self, parent: "Entry") -> None:
        if getattr(parent, "ignored_summary", None) is not None:
            raise ValueError(f"Cannot attach '{self.name}' to summarized directory '{parent.name}'")

    def summarize(self, summary: IgnoredSummary) -> None:
        """Mark this directory as summarized instead of expanded."""
        if self.kind is not EntryKind.DIRECTORY:
            raise ValueError(f"Only directories can be summarized, '{self.name}' is a {self.kind.value}")
        if self.children:
            raise ValueError(f"Cannot summarize '{self.name}': it already has children")
        self.ignored_summary = summary

    @property
    def is_dir(self) -> bool:
        return self.kind is EntryKind.DIRECTORY

    @property
    def is_symlink(self) -> bool:
        return self.kind is EntryKind.SYMLINK

    @property
    def is_summarized(self) -> bool:
        return self.ignored_summary is not None

    def iter_visible(self) -> Iterator["Entry"]:
        """Pre-order iteration over this entry and its visible descendants."""
        return PreOrderIter(self)

    @property
    def file_count(self) -> int:
        """Visible non-directory entries below (and including) this one."""
        return sum(1 for node in self.iter_visible() if not node.is_dir)

    @property
    def directory_count(self) -> int:
        """Visible directories below this one, excluding itself and summarized ones."""
        return sum(1 for node in self.descendants if node.is_dir and not node.is_summarized)

    @property
    def hidden_count(self) -> int:
        """Files inside summarized directories below this one."""
        return sum(node.ignored_summary.count for node in self.iter_visible() if node.is_summarized)

    @property
    def visible_size(self) -> int:
        """Total size of visible files, ignoring everything inside summarized directories."""
        return sum(node.size_bytes or 0 for node in self.iter_visible() if not node.is_dir)

    @property
    def hidden_size(self) -> int:
        return sum(node.ignored_summary.total_size for node in self.iter_visible() if node.is_summarized)

    def relative_path(self, root: Optional["Entry"] = None) -> str:
        """Path relative to ``root`` (the tree root by default), using forward slashes."""
        base = root if root is not None else self.root
        if self is base:
            return ""
        return self.absolute_path.relative_to(base.absolute_path).as_posix()
