"""Name matching shared by ignore rules and search.

A pattern without wildcards is a plain-text pattern. A pattern containing ``*`` or
``?`` is a glob and must match the whole name. Comma-separated lists match when any
member matches.
"""

import sys
from typing import List

from pathspec import PathSpec
from pathspec.patterns import GitWildMatchPattern  # type: ignore
from pathspec.patterns.gitwildmatch import GitWildMatchPatternError  # type: ignore

from dirstruct.exceptions import InvalidPatternError

WILDCARDS = ("*", "?")

# Follow the host filesystem: Windows and macOS compare names case-insensitively.
CASE_INSENSITIVE_FS = sys.platform in ("win32", "darwin")

# Characters that git wildmatch treats specially but that are literal here.
_GLOB_LITERALS = "[]\\"


def has_wildcards(pattern: str) -> bool:
    """Return True if the pattern contains a glob wildcard (``*`` or ``?``).

    Example:
        >>> has_wildcards("*.py")
        True
        >>> has_wildcards("main")
        False
    """
    return any(wildcard in pattern for wildcard in WILDCARDS)


def split_patterns(patterns: str) -> List[str]:
    """Split a comma-separated pattern list, dropping blank members.

    Example:
        >>> split_patterns("win, Linux,,")
        ['win', 'Linux']
    """
    return [p.strip() for p in patterns.split(",") if p.strip()]


def _escape_glob(pattern: str) -> str:
    """Escape everything git wildmatch would interpret except ``*`` and ``?``."""
    escaped = "".join("\\" + char if char in _GLOB_LITERALS else char for char in pattern)
    if escaped[0] in "!#":
        escaped = "\\" + escaped
    return escaped


def _compile_glob(pattern: str) -> PathSpec:
    try:
        return PathSpec.from_lines(GitWildMatchPattern, [_escape_glob(pattern)])
    except GitWildMatchPatternError as e:
        raise InvalidPatternError(pattern, str(e))


class PatternMatcher:
    """Compiled matcher for one pattern or a comma-separated list of patterns.

    In the default (search) mode a plain-text pattern is a case-insensitive substring
    test. In exact mode, used by ignore rules, a plain-text pattern must equal the
    name. Glob patterns always match the full name, with ``*`` matching any run of
    characters and ``?`` matching one character. Glob case sensitivity follows the
    filesystem convention of the host.

    An empty pattern matches nothing.

    Attributes:
        pattern (str): The pattern text as given.
        exact (bool): Whether plain-text patterns require equality.

    Example:
        >>> PatternMatcher("gui").matches("MyGUI.py")
        True
        >>> PatternMatcher("*.py").matches("main.pyc")
        False
        >>> PatternMatcher("*.wav,*.mp3").matches("song.mp3")
        True
        >>> PatternMatcher("build", exact=True).matches("buildscripts")
        False
        >>> PatternMatcher("").matches("anything")
        False
    """

    def __init__(self, pattern: str, exact: bool = False) -> None:
        """Compile the pattern.

        Args:
            pattern: A single pattern or a comma-separated list of patterns.
            exact: If True, plain-text patterns match only identical names.

        Raises:
            InvalidPatternError: If a glob member cannot be compiled.
        """
        self.pattern = pattern
        self.exact = exact
        self._literals: List[str] = []
        self._globs: List[PathSpec] = []

        for member in split_patterns(pattern):
            if has_wildcards(member):
                self._globs.append(_compile_glob(member.lower() if CASE_INSENSITIVE_FS else member))
            elif exact:
                self._literals.append(member)
            else:
                self._literals.append(member.lower())

    @property
    def is_glob(self) -> bool:
        """True if any member of the pattern list is a glob."""
        return bool(self._globs)

    @property
    def is_empty(self) -> bool:
        """True if the pattern has no usable members and therefore matches nothing."""
        return not self._literals and not self._globs

    def matches(self, name: str) -> bool:
        """Check whether a single name (not a path) matches the pattern.

        Args:
            name: The entry name to test.

        Returns:
            bool: True if any member of the pattern list matches the name.
        """
        if self.exact:
            if name in self._literals:
                return True
        elif self._literals:
            lowered = name.lower()
            if any(literal in lowered for literal in self._literals):
                return True

        if self._globs:
            candidate = name.lower() if CASE_INSENSITIVE_FS else name
            return any(spec.match_file(candidate) for spec in self._globs)
        return False


def matches(name: str, pattern: str) -> bool:
    """Match a name against a search-style pattern.

    Args:
        name: The entry name to test.
        pattern: A substring, a glob, or a comma-separated list of either.

    Returns:
        bool: True if the name matches.

    Raises:
        InvalidPatternError: If a glob member cannot be compiled.

    Example:
        >>> matches("README.md", "readme")
        True
        >>> matches("README.md", "READ*")
        True
        >>> matches("src_README.md", "READ*")
        False
    """
    return PatternMatcher(pattern).matches(name)
