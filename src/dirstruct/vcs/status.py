"""Version-control status categories and filters."""

from dataclasses import dataclass
from enum import Enum, Flag, auto
from typing import Iterable, List


class VcsStatus(Flag):
    """Status flags of a path. A path can carry several (e.g. tracked and changed).

    ``UNVERSIONED`` is the empty flag: the path is outside any repository or unknown
    to it.
    """

    UNVERSIONED = 0
    TRACKED = auto()
    UNTRACKED = auto()
    STAGED = auto()
    CHANGED = auto()

    @property
    def labels(self) -> List[str]:
        """Lower-case names of the flags set, in declaration order (empty when unversioned)."""
        return [flag.name.lower() for flag in VcsStatus if flag.value and flag in self]


class StatusFilter(str, Enum):
    """Version-control filter selecting which entries a view shows.

    Values:
        NONE: No filtering
        TRACKED: Files known to the repository
        UNTRACKED: Files not known to the repository (and not ignored by it)
        STAGED: Files with changes in the index
        CHANGED: Files with unstaged changes in the work tree
        HISTORY: Tracked files, annotated with their last commit
    """

    NONE = "none"
    TRACKED = "tracked"
    UNTRACKED = "untracked"
    STAGED = "staged"
    CHANGED = "changed"
    HISTORY = "history"

    @property
    def required_status(self) -> VcsStatus:
        """The status flag a file must carry to pass this filter."""
        return {
            StatusFilter.NONE: VcsStatus.UNVERSIONED,
            StatusFilter.TRACKED: VcsStatus.TRACKED,
            StatusFilter.UNTRACKED: VcsStatus.UNTRACKED,
            StatusFilter.STAGED: VcsStatus.STAGED,
            StatusFilter.CHANGED: VcsStatus.CHANGED,
            StatusFilter.HISTORY: VcsStatus.TRACKED,
        }[self]


# When several filters are requested together, the first one present here wins.
FILTER_PRIORITY = (
    StatusFilter.CHANGED,
    StatusFilter.STAGED,
    StatusFilter.UNTRACKED,
    StatusFilter.TRACKED,
    StatusFilter.HISTORY,
)


def resolve_status_filter(requested: Iterable[StatusFilter]) -> StatusFilter:
    """Pick the single filter honored when several are requested.

    Example:
        >>> resolve_status_filter([StatusFilter.TRACKED, StatusFilter.STAGED])
        <StatusFilter.STAGED: 'staged'>
        >>> resolve_status_filter([])
        <StatusFilter.NONE: 'none'>
    """
    requested = set(requested)
    for status_filter in FILTER_PRIORITY:
        if status_filter in requested:
            return status_filter
    return StatusFilter.NONE


@dataclass(frozen=True)
class VcsFilter:
    """A status filter, optionally scoped to the repository root.

    Attributes:
        status_filter (StatusFilter): Which entries to keep.
        from_root (bool): Start the view at the repository root instead of the given path.
    """

    status_filter: StatusFilter = StatusFilter.NONE
    from_root: bool = False

    @property
    def active(self) -> bool:
        return self.status_filter is not StatusFilter.NONE


@dataclass(frozen=True)
class CommitInfo:
    """Most recent commit touching a path.

    Attributes:
        commit_id (str): Abbreviated commit hash.
        summary (str): First line of the commit message.
        author (str): Author name.
        date (str): Relative commit date as reported by git (e.g. "3 days ago").
    """

    commit_id: str
    summary: str
    author: str = ""
    date: str = ""

    def __str__(self) -> str:
        when = f" ({self.date})" if self.date else ""
        return f"{self.commit_id} {self.summary}{when}"
