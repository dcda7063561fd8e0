"""Single ignore rules and the decisions they produce."""

from dataclasses import dataclass, field
from enum import Enum

from dirstruct.pattern_matcher import PatternMatcher
from dirstruct.types import EntryKind


class IgnoreSource(str, Enum):
    """Where an ignore rule came from.

    Values:
        DEFAULT: Built-in list of well-known noisy names
        CONFIG: Persisted configuration file
        INLINE: Patterns given for this invocation only
    """

    DEFAULT = "default"
    CONFIG = "config"
    INLINE = "inline"


class RuleTarget(str, Enum):
    """Which kinds of entries a rule applies to.

    Built-in directory names such as ``build`` must not hide a regular file called
    ``build``, and built-in file patterns such as ``*.pyc`` must not hide directories.
    User-supplied rules apply to everything.
    """

    ANY = "any"
    DIRECTORY = "directory"
    FILE = "file"

    def applies_to(self, kind: EntryKind) -> bool:
        if self is RuleTarget.ANY or kind is EntryKind.SYMLINK:
            return True
        if self is RuleTarget.DIRECTORY:
            return kind is EntryKind.DIRECTORY
        return kind is not EntryKind.DIRECTORY


class IgnoreDecision(str, Enum):
    """Outcome of resolving a name against the active rule set.

    Values:
        SHOW: No rule matches the name
        HIDE: An active rule matches; directories are summarized, other entries are excluded
        UNIGNORED: Only rules removed by an un-ignore directive match the name
    """

    SHOW = "show"
    HIDE = "hide"
    UNIGNORED = "unignored"

    @property
    def is_visible(self) -> bool:
        return self is not IgnoreDecision.HIDE


@dataclass(frozen=True)
class IgnoreRule:
    """An immutable ignore pattern tagged with its source.

    Plain-text patterns match identical names only; glob patterns match the full name.
    The pattern is compiled once, when the rule is created.

    Attributes:
        pattern (str): The name or glob to match.
        source (IgnoreSource): Which source supplied the rule.
        target (RuleTarget): Which entry kinds the rule applies to.

    Example:
        >>> rule = IgnoreRule("*.egg-info", IgnoreSource.DEFAULT, RuleTarget.DIRECTORY)
        >>> rule.matches("pkg.egg-info", EntryKind.DIRECTORY)
        True
        >>> rule.matches("pkg.egg-info", EntryKind.FILE)
        False
    """

    pattern: str
    source: IgnoreSource
    target: RuleTarget = RuleTarget.ANY
    _matcher: PatternMatcher = field(init=False, repr=False, compare=False, hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_matcher", PatternMatcher(self.pattern, exact=True))

    def matches(self, name: str, kind: EntryKind = EntryKind.DIRECTORY) -> bool:
        """Check whether this rule matches an entry name of the given kind."""
        return self.target.applies_to(kind) and self._matcher.matches(name)
