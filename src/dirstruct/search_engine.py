"""Pattern search over a directory tree.

Search walks the tree the same way the curated view does (same ignore rules, same
version-control filter, same depth semantics and ordering) but, instead of building
a tree, yields every entry whose name matches the search pattern.
"""

import logging
from dataclasses import dataclass
from typing import Iterator, Optional

from dirstruct.exceptions import InvalidPatternError
from dirstruct.file_system_tree.aggregator import Aggregator
from dirstruct.file_system_tree.entry import Entry
from dirstruct.file_system_tree.tree_walker import ChildInfo, TreeWalker, check_root, repository_start
from dirstruct.ignore_rules.resolver import IgnoreResolver
from dirstruct.ignore_rules.rule_set import IgnoreConfig
from dirstruct.pattern_matcher import PatternMatcher, has_wildcards
from dirstruct.types import EntryKind, PathType
from dirstruct.vcs.classifier import StatusClassifier
from dirstruct.vcs.git_classifier import build_status_classifier
from dirstruct.vcs.status import VcsFilter

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SearchSpec:
    """What to search for.

    Attributes:
        pattern (str): Substring, glob, or comma-separated list of either.
        max_depth (Optional[int]): Deepest level reported (children of the root are at
            depth 1); None for unbounded.

    Example:
        >>> SearchSpec("*.py").is_glob
        True
        >>> SearchSpec("gui", max_depth=3).is_glob
        False
    """

    pattern: str
    max_depth: Optional[int] = None

    def __post_init__(self) -> None:
        if self.max_depth is not None and self.max_depth < 0:
            raise ValueError(f"max_depth cannot be negative: {self.max_depth}")

    @property
    def is_glob(self) -> bool:
        return has_wildcards(self.pattern)


class SearchEngine:
    """Depth-bounded traversal collecting entries whose names match a pattern.

    A matching directory is reported and still searched unless the ignore rules hide
    it. Hidden entries are never entered, but a hidden entry whose own name matches
    is still reported, so searching for ``__pycache__`` finds cache directories.
    Entries failing an active version-control filter are neither reported nor
    entered. Results come in pre-order, directories first and case-insensitive name
    order, so repeated searches over an unchanged tree give identical output.

    Attributes:
        root_path (Path): Resolved search root.
        spec (SearchSpec): The search request.

    Example:
        >>> engine = SearchEngine(".", SearchSpec("*.py"))  # doctest: +SKIP
        >>> [entry.relative_path for entry in engine.iter_matches()]  # doctest: +SKIP
    """

    def __init__(
        self,
        root_path: PathType,
        spec: SearchSpec,
        resolver: Optional[IgnoreResolver] = None,
        aggregator: Optional[Aggregator] = None,
    ) -> None:
        """Prepare a search.

        Raises:
            InvalidPatternError: If the pattern is empty or cannot be compiled.
            PathNotFoundError: If the root does not exist.
            NotADirectoryError: If the root is not a directory.
        """
        self.spec = spec
        self.matcher = PatternMatcher(spec.pattern)
        if self.matcher.is_empty:
            raise InvalidPatternError(spec.pattern, 'pattern cannot be empty, use "*" to match everything')
        self.resolver = resolver if resolver is not None else IgnoreResolver()
        self.aggregator = aggregator if aggregator is not None else Aggregator()
        self._walker = TreeWalker(root_path, self.resolver, aggregator=self.aggregator)
        self.root_path = self._walker.root_path

    def iter_matches(self) -> Iterator[Entry]:
        """Traverse once, yielding detached entries for every match.

        Files carry their size; hidden directories carry their summary.
        """
        root = Entry(self.root_path.name or str(self.root_path), self.root_path, EntryKind.DIRECTORY)
        yield from self._search(root, 0)

    def _search(self, node: Entry, depth: int) -> Iterator[Entry]:
        if self.spec.max_depth is not None and depth >= self.spec.max_depth:
            return

        for child in self._walker.list_children(node):
            decision = self.resolver.resolve(child.name, depth + 1, child.kind)
            if not self.resolver.passes_vcs_filter(child.path, child.kind):
                continue

            if self.matcher.matches(child.name):
                yield self._result(child, hidden=not decision.is_visible)

            if child.kind is EntryKind.DIRECTORY and decision.is_visible:
                yield from self._search(Entry(child.name, child.path, EntryKind.DIRECTORY), depth + 1)

    def _result(self, child: ChildInfo, hidden: bool) -> Entry:
        entry = self._walker.make_entry(child, None)
        if hidden and child.kind is EntryKind.DIRECTORY:
            entry.summarize(self.aggregator.summarize(child.path))
        return entry

    def relative_path(self, entry: Entry) -> str:
        """Path of a result relative to the search root, with forward slashes."""
        return entry.absolute_path.relative_to(self.root_path).as_posix()


def search(
    root_path: PathType,
    spec: SearchSpec,
    ignore_config: Optional[IgnoreConfig] = None,
    vcs_filter: Optional[VcsFilter] = None,
    *,
    classifier: Optional[StatusClassifier] = None,
) -> Iterator[Entry]:
    """Search ``root_path`` for entries matching ``spec``.

    Arguments are validated immediately; the traversal itself runs lazily as the
    returned iterator is consumed, and only once.

    Raises:
        InvalidPatternError: If the search pattern is empty or malformed, or an ignore
            pattern cannot be compiled.
        PathNotFoundError: If the root does not exist.
        NotADirectoryError: If the root is not a directory.

    Example:
        >>> [e.name for e in search("project", SearchSpec("*.py"))]  # doctest: +SKIP
        ['main.py', 'util.py']
    """
    vcs_filter = vcs_filter or VcsFilter()
    start = check_root(root_path)
    if vcs_filter.active:
        if vcs_filter.from_root:
            start = repository_start(start)
        if classifier is None:
            classifier = build_status_classifier(start)
    resolver = IgnoreResolver.from_config(ignore_config, vcs_filter, classifier)
    return SearchEngine(start, spec, resolver).iter_matches()
