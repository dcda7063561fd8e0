"""Curated directory traversal.

This module provides the TreeWalker class, which visits a directory tree depth-first
and decides for every entry whether it is expanded, summarized or left out, and the
``walk`` convenience function that wires it to ignore and version-control
configuration.
"""

import logging
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Dict, Iterator, List, Optional

from dirstruct.exceptions import PathNotFoundError, VcsUnavailableError
from dirstruct.ignore_rules.resolver import IgnoreResolver
from dirstruct.ignore_rules.rule_set import IgnoreConfig
from dirstruct.ignore_rules.size_rules import SizeThreshold
from dirstruct.types import EntryKind, PathType
from dirstruct.vcs.classifier import StatusClassifier
from dirstruct.vcs.git_classifier import build_status_classifier, find_repository_root
from dirstruct.vcs.status import StatusFilter, VcsFilter

from .aggregator import Aggregator, SubtreeTotals
from .entry import Entry

logger = logging.getLogger(__name__)


class PermissionAction(str, Enum):
    """Action to take when a directory cannot be listed during traversal.

    Values:
        IGNORE: Mark the directory as unreadable and continue with its siblings (default)
        RAISE: Raise a PermissionError immediately when access is denied
    """

    IGNORE = "ignore"
    RAISE = "raise"


@dataclass(frozen=True)
class ChildInfo:
    """A directory listing item, described without following symlinks."""

    name: str
    path: Path
    kind: EntryKind
    size_bytes: Optional[int]


def _sort_key(child: ChildInfo) -> tuple:
    # Directories first, then case-insensitive name; the exact name breaks ties.
    return (child.kind is not EntryKind.DIRECTORY, child.name.lower(), child.name)


def check_root(root_path: PathType) -> Path:
    """Validate a traversal root and return it as an absolute, resolved path.

    Raises:
        PathNotFoundError: If the root does not exist.
        NotADirectoryError: If the root is not a directory.
    """
    path = Path(root_path)
    if not path.exists():
        raise PathNotFoundError(str(root_path))
    if not path.is_dir():
        raise NotADirectoryError(f"Root path is not a directory: {root_path}")
    return path.resolve()


class TreeWalker:
    """Build a curated tree of a directory, summarizing what the rules hide.

    The walk is depth-first and pre-order; children are ordered directories first,
    then by case-insensitive name. For every child the resolver decides:

    - hidden directories are not entered; an Aggregator summary is attached instead
    - hidden files and symlinks are left out entirely
    - entries failing an active version-control filter are left out, except
      directories containing matching descendants
    - visible directories over the size threshold are summarized like hidden ones
    - other directories are expanded while the depth budget lasts

    Symbolic links are recorded but never followed, so link loops cannot recurse.
    Directories that cannot be listed are kept with no children and ``unreadable``
    set; the walk carries on with their siblings.

    Attributes:
        root_path (Path): Resolved root directory.
        resolver (IgnoreResolver): Name and version-control decisions.
        max_depth (Optional[int]): Directory levels to expand below the root; None for
            unbounded, 0 for the root alone.
        size_threshold (Optional[SizeThreshold]): Skip-large limit.
        show_sizes (bool): Populate ``size_bytes`` of visible directories.
        permission_action (PermissionAction): How to handle unreadable directories.

    Example:
        >>> walker = TreeWalker(".", max_depth=1)  # doctest: +SKIP
        >>> root = walker.walk()  # doctest: +SKIP
        >>> [child.name for child in root.children]  # doctest: +SKIP
        ['node_modules', 'src', 'README.md']
    """

    def __init__(
        self,
        root_path: PathType,
        resolver: Optional[IgnoreResolver] = None,
        max_depth: Optional[int] = None,
        size_threshold: Optional[SizeThreshold] = None,
        show_sizes: bool = False,
        permission_action: PermissionAction = PermissionAction.IGNORE,
        aggregator: Optional[Aggregator] = None,
    ) -> None:
        """Initialize a TreeWalker.

        Raises:
            PathNotFoundError: If the root path does not exist.
            NotADirectoryError: If the root path is not a directory.
            ValueError: If max_depth is negative.
        """
        if max_depth is not None and max_depth < 0:
            raise ValueError(f"max_depth cannot be negative: {max_depth}")
        self.root_path = check_root(root_path)
        self.resolver = resolver if resolver is not None else IgnoreResolver()
        self.max_depth = max_depth
        self.size_threshold = size_threshold
        self.show_sizes = show_sizes
        self.permission_action = permission_action
        self.aggregator = aggregator if aggregator is not None else Aggregator()
        self._totals: Optional[Dict[str, SubtreeTotals]] = None

    def walk(self) -> Entry:
        """Run the traversal to completion and return the root entry."""
        entries = self.iter_entries()
        root = next(entries)
        for _ in entries:
            pass
        return root

    def iter_entries(self) -> Iterator[Entry]:
        """Lazily stream entries in pre-order, attaching each to its parent as it goes.

        The first entry yielded is the root. A directory's ``size_bytes`` (when sizes
        are requested) is filled in once all of its children have been yielded.
        """
        root = Entry(self.root_path.name or str(self.root_path), self.root_path, EntryKind.DIRECTORY)
        yield root
        yield from self._expand(root, 0, self.max_depth)

    def list_children(self, node: Entry) -> List[ChildInfo]:
        children: List[ChildInfo] = []
        try:
            with os.scandir(node.absolute_path) as it:
                for dir_entry in it:
                    children.append(self._describe(node.absolute_path, dir_entry))
        except PermissionError as e:
            if self.permission_action == PermissionAction.RAISE:
                raise PermissionError(f"Access denied to {node.absolute_path}: {e}")
            logger.debug("Access denied to %s: %s", node.absolute_path, e)
            node.unreadable = True
            return []
        except OSError as e:
            logger.debug("Cannot list %s: %s", node.absolute_path, e)
            node.unreadable = True
            return []
        return sorted(children, key=_sort_key)

    def _describe(self, parent: Path, dir_entry: os.DirEntry) -> ChildInfo:
        path = parent / dir_entry.name
        try:
            if dir_entry.is_symlink():
                kind = EntryKind.SYMLINK
            elif dir_entry.is_dir(follow_symlinks=False):
                kind = EntryKind.DIRECTORY
            else:
                kind = EntryKind.FILE
        except OSError:
            kind = EntryKind.FILE

        size_bytes: Optional[int] = None
        if kind is not EntryKind.DIRECTORY:
            try:
                size_bytes = dir_entry.stat(follow_symlinks=False).st_size
            except OSError as e:
                logger.debug("Cannot stat %s: %s", path, e)
        return ChildInfo(dir_entry.name, path, kind, size_bytes)

    def make_entry(self, child: ChildInfo, parent: Optional[Entry]) -> Entry:
        symlink_target = None
        if child.kind is EntryKind.SYMLINK:
            try:
                symlink_target = os.readlink(child.path)
            except OSError:
                pass
        entry = Entry(
            child.name,
            child.path,
            child.kind,
            parent=parent,
            size_bytes=child.size_bytes,
            symlink_target=symlink_target,
        )

        resolver = self.resolver
        if resolver.vcs_active:
            entry.vcs_status = resolver.classifier.classify(child.path)
            if resolver.status_filter is StatusFilter.HISTORY and child.kind is not EntryKind.DIRECTORY:
                entry.last_commit = resolver.classifier.last_commit(child.path)
        return entry

    def _expand(self, node: Entry, depth: int, budget: Optional[int]) -> Iterator[Entry]:
        if budget is not None and depth >= budget:
            if self.show_sizes:
                node.size_bytes = self._measure(node, depth)
            return

        for child in self.list_children(node):
            decision = self.resolver.resolve(child.name, depth + 1, child.kind)
            if not decision.is_visible and child.kind is not EntryKind.DIRECTORY:
                continue
            if not self.resolver.passes_vcs_filter(child.path, child.kind):
                continue

            entry = self.make_entry(child, node)
            if child.kind is not EntryKind.DIRECTORY:
                yield entry
                continue

            if not decision.is_visible:
                entry.summarize(self.aggregator.summarize(child.path))
                yield entry
                continue

            if self.size_threshold is not None:
                summary = self._subtree_totals(child.path).as_summary()
                if self.size_threshold.exceeded(summary.total_size):
                    logger.debug(
                        "Summarizing %s: %d bytes exceeds %r", child.path, summary.total_size, self.size_threshold
                    )
                    entry.summarize(summary)
                    yield entry
                    continue

            yield entry
            yield from self._expand(entry, depth + 1, budget)

        if self.show_sizes:
            node.size_bytes = sum(child.size_bytes or 0 for child in node.children if not child.is_summarized)

    def _subtree_totals(self, path: Path) -> SubtreeTotals:
        """Unfiltered totals of a directory below the root, from one scan shared by the whole walk."""
        if self._totals is None:
            self._totals = self.aggregator.scan_tree(self.root_path)
        totals = self._totals.get(os.fspath(path))
        return totals if totals is not None else self.aggregator.scan(path)

    def _measure(self, node: Entry, depth: int) -> int:
        """Visible size of a directory the depth limit kept unexpanded."""
        probe = Entry(node.name, node.absolute_path, EntryKind.DIRECTORY)
        for _ in self._expand(probe, depth, None):
            pass
        return probe.visible_size


def walk(
    root_path: PathType,
    max_depth: Optional[int] = None,
    ignore_config: Optional[IgnoreConfig] = None,
    vcs_filter: Optional[VcsFilter] = None,
    *,
    classifier: Optional[StatusClassifier] = None,
    size_threshold: Optional[SizeThreshold] = None,
    show_sizes: bool = False,
    permission_action: PermissionAction = PermissionAction.IGNORE,
) -> Entry:
    """Walk ``root_path`` and return the curated entry tree.

    Args:
        root_path: Directory to walk.
        max_depth: Directory levels to expand below the root (None = unbounded).
        ignore_config: Ignore sources and un-ignore directives; defaults only if None.
        vcs_filter: Optional version-control filter.
        classifier: Status source; discovered from git when a filter is active and
            none is given.
        size_threshold: Summarize visible directories larger than this.
        show_sizes: Populate directory sizes.
        permission_action: How to handle unreadable directories.

    Returns:
        Entry: The root entry with its visible descendants attached.

    Raises:
        PathNotFoundError: If the root path does not exist.
        NotADirectoryError: If the root path is not a directory.
        InvalidPatternError: If an ignore pattern cannot be compiled.

    Example:
        >>> root = walk("project")  # doctest: +SKIP
        >>> [(c.name, c.ignored_summary) for c in root.children]  # doctest: +SKIP
        [('src', None), ('target', IgnoredSummary(count=1, total_size=100))]
    """
    vcs_filter = vcs_filter or VcsFilter()
    start = check_root(root_path)
    if vcs_filter.active:
        if vcs_filter.from_root:
            start = repository_start(start)
        if classifier is None:
            classifier = build_status_classifier(start)
    resolver = IgnoreResolver.from_config(ignore_config, vcs_filter, classifier)
    walker = TreeWalker(
        start,
        resolver,
        max_depth=max_depth,
        size_threshold=size_threshold,
        show_sizes=show_sizes,
        permission_action=permission_action,
    )
    return walker.walk()


def repository_start(path: Path) -> Path:
    """Repository root containing ``path``, or ``path`` itself outside a repository."""
    try:
        return find_repository_root(path)
    except VcsUnavailableError as e:
        logger.warning("Cannot start from repository root: %s", e)
        return path
