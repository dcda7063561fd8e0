"""Counting and measuring of subtrees without building entry nodes."""

import logging
import os
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from dirstruct.types import PathType

from .entry import IgnoredSummary

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SubtreeTotals:
    """Unfiltered totals of a subtree (the directory itself is not counted)."""

    files: int = 0
    directories: int = 0
    total_size: int = 0

    def as_summary(self) -> IgnoredSummary:
        return IgnoredSummary(self.files, self.total_size)


class Aggregator:
    """Measure subtrees as they are on disk.

    No ignore rules are applied inside a measured subtree: once a directory is hidden
    its whole content is counted as-is, which keeps summarizing large dependency trees
    cheap. Only regular files are counted and sized; symbolic links are neither
    counted nor followed. Entries that cannot be listed or stat'd are left out of the
    totals instead of aborting the scan.

    Example:
        >>> import tempfile, pathlib
        >>> with tempfile.TemporaryDirectory() as tmp:
        ...     root = pathlib.Path(tmp)
        ...     (root / "debug").mkdir()
        ...     _ = (root / "debug" / "out.bin").write_bytes(b"x" * 100)
        ...     Aggregator().summarize(root)
        IgnoredSummary(count=1, total_size=100)
    """

    def scan(self, directory: PathType) -> SubtreeTotals:
        """Count files and directories below ``directory`` and sum the file sizes."""
        files = 0
        directories = 0
        total_size = 0
        stack: List[str] = [os.fspath(directory)]

        while stack:
            current = stack.pop()
            try:
                with os.scandir(current) as it:
                    for dir_entry in it:
                        try:
                            if dir_entry.is_dir(follow_symlinks=False):
                                directories += 1
                                stack.append(dir_entry.path)
                            elif dir_entry.is_file(follow_symlinks=False):
                                total_size += dir_entry.stat(follow_symlinks=False).st_size
                                files += 1
                        except OSError as e:
                            logger.debug("Skipping %s: %s", dir_entry.path, e)
            except OSError as e:
                logger.debug("Cannot list %s: %s", current, e)

        return SubtreeTotals(files, directories, total_size)

    def scan_tree(self, directory: PathType) -> Dict[str, SubtreeTotals]:
        """Totals for ``directory`` and every directory below it, from a single scan.

        Every file is stat'd once. Keys are the directory paths as strings, built by
        joining names onto ``os.fspath(directory)``.
        """
        root = os.fspath(directory)
        own: Dict[str, List[int]] = {}
        order: List[Tuple[str, Optional[str]]] = []
        stack: List[Tuple[str, Optional[str]]] = [(root, None)]

        while stack:
            current, parent = stack.pop()
            order.append((current, parent))
            counts = [0, 0, 0]
            try:
                with os.scandir(current) as it:
                    for dir_entry in it:
                        try:
                            if dir_entry.is_dir(follow_symlinks=False):
                                counts[1] += 1
                                stack.append((dir_entry.path, current))
                            elif dir_entry.is_file(follow_symlinks=False):
                                counts[2] += dir_entry.stat(follow_symlinks=False).st_size
                                counts[0] += 1
                        except OSError as e:
                            logger.debug("Skipping %s: %s", dir_entry.path, e)
            except OSError as e:
                logger.debug("Cannot list %s: %s", current, e)
            own[current] = counts

        # Children come after their parent in scan order, so the reverse folds each
        # finished subtree into its parent.
        for current, parent in reversed(order):
            if parent is not None:
                for i, value in enumerate(own[current]):
                    own[parent][i] += value

        return {path: SubtreeTotals(*counts) for path, counts in own.items()}

    def summarize(self, directory: PathType) -> IgnoredSummary:
        """Return the file count and total size of everything below ``directory``."""
        return self.scan(directory).as_summary()
