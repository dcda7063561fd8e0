"""Depth-0 overview of a directory: totals, extension breakdown and ignored entries."""

import os
from collections import Counter
from dataclasses import dataclass, field
from pathlib import PurePath
from typing import List, Optional

from dirstruct.ignore_rules.resolver import IgnoreResolver
from dirstruct.ignore_rules.rule_set import IgnoreConfig
from dirstruct.types import EntryKind, PathType

from .aggregator import Aggregator
from .entry import Entry
from .tree_walker import TreeWalker, check_root

NO_EXTENSION = "(none)"


@dataclass
class DirectorySummary:
    """Totals for one directory, split into what a normal view shows and what it hides.

    Attributes:
        path (str): The summarized directory.
        visible_dirs / visible_files / visible_size: What the curated tree would show.
        total_dirs / total_files / total_size: Everything on disk, hidden content included.
        extensions (Counter): Visible files per extension (``(none)`` when there is none).
        ignored (Counter): Hidden top-level entries mapped to the number of files they hold.
        unreadable (int): Directories that could not be listed.
    """

    path: str
    visible_dirs: int = 0
    visible_files: int = 0
    visible_size: int = 0
    total_dirs: int = 0
    total_files: int = 0
    total_size: int = 0
    extensions: Counter = field(default_factory=Counter)
    ignored: Counter = field(default_factory=Counter)
    unreadable: int = 0

    @property
    def hidden_files(self) -> int:
        return self.total_files - self.visible_files

    @property
    def hidden_size(self) -> int:
        return self.total_size - self.visible_size


def file_extension(name: str) -> str:
    """Lower-cased extension of a file name, or ``(none)``.

    Example:
        >>> file_extension("Main.PY")
        '.py'
        >>> file_extension("Makefile")
        '(none)'
        >>> file_extension(".bashrc")
        '(none)'
    """
    suffix = PurePath(name).suffix
    return suffix.lower() if suffix else NO_EXTENSION


def summarize_directory(
    root_path: PathType,
    ignore_config: Optional[IgnoreConfig] = None,
    aggregator: Optional[Aggregator] = None,
) -> DirectorySummary:
    """Summarize a directory without rendering its tree.

    Immediate children hidden by the ignore rules are measured with the Aggregator
    and listed in ``ignored``; the visible content is walked with the same rules, so
    hidden directories further down count towards the totals but not the visible
    figures.

    Raises:
        PathNotFoundError: If the root does not exist.
        NotADirectoryError: If the root is not a directory.
    """
    aggregator = aggregator or Aggregator()
    resolver = IgnoreResolver.from_config(ignore_config)
    root = TreeWalker(check_root(root_path), resolver, aggregator=aggregator).walk()

    totals = aggregator.scan(root.absolute_path)
    summary = DirectorySummary(
        path=str(root.absolute_path),
        total_dirs=totals.directories,
        total_files=totals.files,
        total_size=totals.total_size,
    )

    for node in root.descendants:
        if node.unreadable:
            summary.unreadable += 1
        if node.is_summarized:
            if node.parent is root:
                summary.ignored[node.name] += node.ignored_summary.count
        elif node.is_dir:
            summary.visible_dirs += 1
        elif node.kind is EntryKind.FILE:
            summary.visible_files += 1
            summary.visible_size += node.size_bytes or 0
            summary.extensions[file_extension(node.name)] += 1

    for name in _excluded_top_level_files(root, resolver):
        summary.ignored[name] += 1
    return summary


def _excluded_top_level_files(root: Entry, resolver: IgnoreResolver) -> List[str]:
    """Names of files directly under the root that the rules leave out (e.g. ``*.pyc``)."""
    names: List[str] = []
    try:
        with os.scandir(root.absolute_path) as it:
            for dir_entry in it:
                if dir_entry.is_dir(follow_symlinks=False):
                    continue
                kind = EntryKind.SYMLINK if dir_entry.is_symlink() else EntryKind.FILE
                if not resolver.resolve(dir_entry.name, 1, kind).is_visible:
                    names.append(dir_entry.name)
    except OSError:
        return []
    return sorted(names)
