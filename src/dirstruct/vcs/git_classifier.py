"""Git-backed status classifier.

Status sets are collected once per invocation by running git (``ls-files`` and
``diff --name-only``) against the repository root; individual lookups are then plain
set membership tests. Last-commit information is fetched lazily with ``git log``.
"""

import logging
import os
import subprocess
from pathlib import Path
from typing import Dict, FrozenSet, Iterable, List, Optional, Set

from dirstruct.exceptions import VcsUnavailableError
from dirstruct.types import PathType

from .classifier import NullStatusClassifier, StatusClassifier
from .status import CommitInfo, StatusFilter, VcsStatus

logger = logging.getLogger(__name__)

GIT_TIMEOUT_SECONDS = 10.0
_FIELD_SEP = "\x1f"


def _run_git(cwd: PathType, args: List[str], timeout_seconds: float) -> Optional[subprocess.CompletedProcess]:
    try:
        return subprocess.run(
            ["git", "-C", str(cwd), *args],
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
            timeout=timeout_seconds,
        )
    except (OSError, subprocess.SubprocessError) as e:
        logger.debug("git %s failed to run: %s", " ".join(args), e)
        return None


def find_repository_root(path: PathType, timeout_seconds: float = GIT_TIMEOUT_SECONDS) -> Path:
    """Return the work-tree root of the repository containing ``path``.

    Raises:
        VcsUnavailableError: If git is missing or ``path`` is not inside a work tree.
    """
    start = Path(path)
    if not start.is_dir():
        start = start.parent
    proc = _run_git(start, ["rev-parse", "--show-toplevel"], timeout_seconds)
    if proc is None:
        raise VcsUnavailableError("git is not available")
    if proc.returncode != 0 or not proc.stdout.strip():
        raise VcsUnavailableError(f"not in a git repository: {path}")
    return Path(proc.stdout.strip()).resolve()


def _split_z(output: str) -> List[str]:
    return [token for token in output.split("\0") if token]


class GitStatusClassifier(StatusClassifier):
    """Classify paths using the git repository that contains them.

    Attributes:
        repo_root (Path): Resolved work-tree root.

    Example:
        >>> classifier = GitStatusClassifier(
        ...     Path("/repo"), tracked=["a.py", "b.py"], staged=["b.py"], untracked=["new.txt"]
        ... )
        >>> classifier.classify(Path("/repo/b.py")) == VcsStatus.TRACKED | VcsStatus.STAGED
        True
        >>> classifier.has_matching_descendant(Path("/repo"), StatusFilter.UNTRACKED)
        True
    """

    def __init__(
        self,
        repo_root: PathType,
        tracked: Iterable[str] = (),
        untracked: Iterable[str] = (),
        staged: Iterable[str] = (),
        changed: Iterable[str] = (),
        timeout_seconds: float = GIT_TIMEOUT_SECONDS,
    ) -> None:
        """Initialize from repository-relative path lists.

        Use :meth:`discover` to collect the lists from a real repository.
        """
        self.repo_root = Path(repo_root)
        self.timeout_seconds = timeout_seconds
        self._statuses: Dict[Path, VcsStatus] = {}
        self._ancestors: Dict[VcsStatus, Set[Path]] = {}
        self._commits: Dict[Path, Optional[CommitInfo]] = {}

        for flag, rel_paths in (
            (VcsStatus.TRACKED, tracked),
            (VcsStatus.UNTRACKED, untracked),
            (VcsStatus.STAGED, staged),
            (VcsStatus.CHANGED, changed),
        ):
            for rel_path in rel_paths:
                self._record(self._absolute(rel_path), flag)

    @classmethod
    def discover(cls, path: PathType, timeout_seconds: float = GIT_TIMEOUT_SECONDS) -> "GitStatusClassifier":
        """Collect status information for the repository containing ``path``.

        Raises:
            VcsUnavailableError: If git is missing, ``path`` is not in a repository, or
                a status query fails.
        """
        repo_root = find_repository_root(path, timeout_seconds)

        def query(*args: str) -> List[str]:
            proc = _run_git(repo_root, list(args), timeout_seconds)
            if proc is None or proc.returncode != 0:
                detail = proc.stderr.strip() if proc is not None else "git did not run"
                raise VcsUnavailableError(f"git {' '.join(args)} failed: {detail}")
            return _split_z(proc.stdout)

        return cls(
            repo_root,
            tracked=query("ls-files", "-z"),
            untracked=query("ls-files", "--others", "--exclude-standard", "-z"),
            staged=query("diff", "--name-only", "--cached", "-z"),
            changed=query("diff", "--name-only", "-z"),
            timeout_seconds=timeout_seconds,
        )

    def _absolute(self, rel_path: str) -> Path:
        return Path(os.path.normpath(self.repo_root / rel_path))

    def _record(self, path: Path, flag: VcsStatus) -> None:
        self._statuses[path] = self._statuses.get(path, VcsStatus.UNVERSIONED) | flag
        ancestors = self._ancestors.setdefault(flag, set())
        parent = path.parent
        while parent != path and parent not in ancestors:
            ancestors.add(parent)
            if parent == self.repo_root:
                break
            path, parent = parent, parent.parent

    def paths_with(self, status: VcsStatus) -> FrozenSet[Path]:
        """All recorded paths carrying the given flag."""
        return frozenset(path for path, flags in self._statuses.items() if status in flags)

    def classify(self, path: Path) -> VcsStatus:
        return self._statuses.get(Path(os.path.normpath(path)), VcsStatus.UNVERSIONED)

    def has_matching_descendant(self, directory: Path, status_filter: StatusFilter) -> bool:
        if status_filter is StatusFilter.NONE:
            return True
        ancestors = self._ancestors.get(status_filter.required_status, set())
        return Path(os.path.normpath(directory)) in ancestors

    def last_commit(self, path: Path) -> Optional[CommitInfo]:
        path = Path(os.path.normpath(path))
        if path not in self._commits:
            self._commits[path] = self._query_last_commit(path)
        return self._commits[path]

    def _query_last_commit(self, path: Path) -> Optional[CommitInfo]:
        fmt = _FIELD_SEP.join(["%h", "%s", "%an", "%cr"])
        proc = _run_git(self.repo_root, ["log", "-1", f"--format={fmt}", "--", str(path)], self.timeout_seconds)
        if proc is None or proc.returncode != 0 or not proc.stdout.strip():
            return None
        fields = proc.stdout.strip().split(_FIELD_SEP)
        if len(fields) < 4:
            return None
        return CommitInfo(commit_id=fields[0], summary=fields[1], author=fields[2], date=fields[3])


def build_status_classifier(path: PathType) -> StatusClassifier:
    """Return a git classifier for ``path``, or an all-unversioned one if git is unavailable.

    The returned :class:`NullStatusClassifier` carries the reason so callers can tell
    the user why a filtered view is empty.
    """
    try:
        return GitStatusClassifier.discover(path)
    except VcsUnavailableError as e:
        logger.info("Version-control status unavailable, treating every path as unversioned: %s", e)
        return NullStatusClassifier(reason=str(e))
