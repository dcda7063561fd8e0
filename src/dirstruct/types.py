from enum import Enum
from os import PathLike
from typing import Union

# Complete path type including strings and any path-like object
PathType = Union[str, PathLike[str]]


class EntryKind(str, Enum):
    """Enumeration of entry kinds recorded during traversal.

    Symbolic links are never followed, so a link to a directory is still a
    ``SYMLINK`` entry.

    Attributes:
        FILE: Regular file (or any other non-directory, non-link entry)
        DIRECTORY: Directory
        SYMLINK: Symbolic link
    """

    FILE = "file"
    DIRECTORY = "directory"
    SYMLINK = "symlink"
