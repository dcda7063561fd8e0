"""Version-control status classification for filtered views."""

from .classifier import NullStatusClassifier, StatusClassifier
from .git_classifier import GitStatusClassifier, build_status_classifier, find_repository_root
from .status import CommitInfo, StatusFilter, VcsFilter, VcsStatus, resolve_status_filter

__all__ = [
    "CommitInfo",
    "GitStatusClassifier",
    "NullStatusClassifier",
    "StatusClassifier",
    "StatusFilter",
    "VcsFilter",
    "VcsStatus",
    "build_status_classifier",
    "find_repository_root",
    "resolve_status_filter",
]
