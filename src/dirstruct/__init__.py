"""Curated directory structure views.

This package walks a directory tree, summarizes well-known noisy directories
(dependency caches, build output, VCS metadata) instead of listing them, and
produces trees, flat listings or search results that can be filtered by git
status.
"""

from importlib.metadata import PackageNotFoundError, version

from dirstruct.file_system_tree.tree_walker import walk
from dirstruct.search_engine import SearchSpec, search

# Expose the version for both programmatic use and CLI
try:
    __version__ = version("dirstruct")
except PackageNotFoundError:
    __version__ = "unknown"

__all__ = ["SearchSpec", "__version__", "search", "walk"]
