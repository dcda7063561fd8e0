"""Pluggable version-control status source."""

import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional

from .status import CommitInfo, StatusFilter, VcsStatus

logger = logging.getLogger(__name__)


class StatusClassifier(ABC):
    """
    Abstract base class for version-control status lookups.

    The traversal core only ever asks "what is the status of this path"; how the
    answer is obtained (running git, reading a fixture in tests) is up to the
    implementation. Only ``classify`` is required. ``last_commit`` and
    ``has_matching_descendant`` have generic default implementations that concrete
    classifiers may replace with faster ones.

    Example:
        >>> class EverythingStaged(StatusClassifier):
        ...     def classify(self, path):
        ...         return VcsStatus.TRACKED | VcsStatus.STAGED
        >>> EverythingStaged().matches("a.txt", StatusFilter.STAGED)
        True
        >>> EverythingStaged().matches("a.txt", StatusFilter.UNTRACKED)
        False
    """

    @abstractmethod
    def classify(self, path: Path) -> VcsStatus:
        """
        Return the status flags of a path.

        Args:
            path (Path): Absolute path of the entry.

        Returns:
            VcsStatus: The status flags; ``VcsStatus.UNVERSIONED`` if unknown.
        """
        pass

    def last_commit(self, path: Path) -> Optional[CommitInfo]:
        """Return the most recent commit touching the path, if the source knows it."""
        return None

    def matches(self, path: Path, status_filter: StatusFilter) -> bool:
        """Check whether the path itself satisfies the filter."""
        if status_filter is StatusFilter.NONE:
            return True
        return status_filter.required_status in self.classify(Path(path))

    def has_matching_descendant(self, directory: Path, status_filter: StatusFilter) -> bool:
        """Check whether any entry below the directory satisfies the filter.

        The default implementation walks the directory (without following symlinks)
        and calls ``matches`` on every entry until one passes.
        """
        stack: List[Path] = [Path(directory)]
        while stack:
            current = stack.pop()
            try:
                with os.scandir(current) as it:
                    for dir_entry in it:
                        child = current / dir_entry.name
                        if self.matches(child, status_filter):
                            return True
                        try:
                            if dir_entry.is_dir(follow_symlinks=False):
                                stack.append(child)
                        except OSError:
                            continue
            except OSError as e:
                logger.debug("Cannot list %s while probing for %s entries: %s", current, status_filter.value, e)
        return False


class NullStatusClassifier(StatusClassifier):
    """Classifier for paths outside any repository: everything is unversioned.

    Any active filter therefore shows nothing.

    Attributes:
        reason (Optional[str]): Why real status information is unavailable.
    """

    def __init__(self, reason: Optional[str] = None) -> None:
        self.reason = reason

    def classify(self, path: Path) -> VcsStatus:
        return VcsStatus.UNVERSIONED

    def has_matching_descendant(self, directory: Path, status_filter: StatusFilter) -> bool:
        return status_filter is StatusFilter.NONE
