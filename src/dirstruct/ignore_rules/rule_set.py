"""Construction of the effective ignore rule set for one invocation.

Rules come from three sources (built-in defaults, the persisted configuration and
inline patterns). Un-ignore directives are applied by *removing* rules while the set
is built, so an un-ignored name behaves exactly as if its rule never existed. Other
rules that happen to match the same name still apply.
"""

from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

from dirstruct.pattern_matcher import split_patterns
from dirstruct.types import EntryKind

from .defaults import default_rules
from .ignore_rule import IgnoreRule, IgnoreSource

UNIGNORE_ALL = "all"
UNIGNORE_DEFAULTS = "defaults"
UNIGNORE_CONFIG = "config"


@dataclass(frozen=True)
class UnignoreDirectives:
    """Accumulated un-ignore directives.

    ``all`` removes the default and configured sources, ``defaults`` and ``config``
    remove one source each, and any other value removes the rules whose pattern equals
    it. Directives accumulate and commute.

    Attributes:
        skip_defaults (bool): Drop every built-in rule.
        skip_config (bool): Drop every configured rule.
        patterns (Tuple[str, ...]): Individual patterns to drop from any source.

    Example:
        >>> d = UnignoreDirectives.parse(["defaults", "target", "config"])
        >>> d.skip_defaults, d.skip_config, d.patterns
        (True, True, ('target',))
    """

    skip_defaults: bool = False
    skip_config: bool = False
    patterns: Tuple[str, ...] = ()

    @classmethod
    def parse(cls, values: Iterable[str]) -> "UnignoreDirectives":
        """Fold ``-n`` values into a single set of directives."""
        skip_defaults = False
        skip_config = False
        patterns: List[str] = []

        for value in values:
            value = value.strip()
            if value == UNIGNORE_ALL:
                skip_defaults = True
                skip_config = True
            elif value == UNIGNORE_DEFAULTS:
                skip_defaults = True
            elif value == UNIGNORE_CONFIG:
                skip_config = True
            elif value and value not in patterns:
                patterns.append(value)

        return cls(skip_defaults, skip_config, tuple(patterns))

    def removes(self, rule: IgnoreRule) -> bool:
        """Check whether these directives subtract the given rule."""
        if self.skip_defaults and rule.source is IgnoreSource.DEFAULT:
            return True
        if self.skip_config and rule.source is IgnoreSource.CONFIG:
            return True
        return rule.pattern in self.patterns


class IgnoreRuleSet:
    """The effective, immutable rule set for one traversal.

    Attributes:
        rules (Tuple[IgnoreRule, ...]): Active rules, in source order.
        removed (Tuple[IgnoreRule, ...]): Rules subtracted by un-ignore directives.

    Example:
        >>> rule_set = IgnoreConfig(inline_patterns=["*.log"], unignore=["target"]).build()
        >>> rule_set.hides("app.log", EntryKind.FILE)
        True
        >>> rule_set.hides("target")
        False
        >>> rule_set.was_removed("target")
        True
    """

    def __init__(self, rules: Sequence[IgnoreRule], removed: Sequence[IgnoreRule] = ()) -> None:
        self.rules: Tuple[IgnoreRule, ...] = tuple(rules)
        self.removed: Tuple[IgnoreRule, ...] = tuple(removed)

    def __iter__(self) -> Iterator[IgnoreRule]:
        return iter(self.rules)

    def __len__(self) -> int:
        return len(self.rules)

    def __repr__(self) -> str:
        return f"IgnoreRuleSet({len(self.rules)} rules, {len(self.removed)} removed)"

    @property
    def patterns(self) -> List[str]:
        """Active patterns in order, without duplicates."""
        seen: List[str] = []
        for rule in self.rules:
            if rule.pattern not in seen:
                seen.append(rule.pattern)
        return seen

    def matching_rule(self, name: str, kind: EntryKind = EntryKind.DIRECTORY) -> Optional[IgnoreRule]:
        """Return the first active rule matching the name, if any."""
        for rule in self.rules:
            if rule.matches(name, kind):
                return rule
        return None

    def hides(self, name: str, kind: EntryKind = EntryKind.DIRECTORY) -> bool:
        return self.matching_rule(name, kind) is not None

    def was_removed(self, name: str, kind: EntryKind = EntryKind.DIRECTORY) -> bool:
        """Check whether an un-ignore directive removed a rule that matches the name."""
        return any(rule.matches(name, kind) for rule in self.removed)


@dataclass
class IgnoreConfig:
    """Invocation parameters for the ignore system.

    Attributes:
        config_patterns: Snapshot of the persisted configuration patterns.
        inline_patterns: Patterns given for this invocation. Members may themselves be
            comma-separated lists.
        unignore: Raw ``-n`` values (``all``, ``defaults``, ``config`` or a pattern).
        use_defaults: Whether the built-in rules participate at all.
    """

    config_patterns: Sequence[str] = field(default_factory=list)
    inline_patterns: Sequence[str] = field(default_factory=list)
    unignore: Sequence[str] = field(default_factory=list)
    use_defaults: bool = True

    def candidate_rules(self) -> List[IgnoreRule]:
        """All rules from every source, before un-ignore subtraction."""
        rules: List[IgnoreRule] = default_rules() if self.use_defaults else []
        for pattern in self.config_patterns:
            pattern = pattern.strip()
            if pattern and not pattern.startswith("#"):
                rules.append(IgnoreRule(pattern, IgnoreSource.CONFIG))
        for patterns in self.inline_patterns:
            rules.extend(IgnoreRule(pattern, IgnoreSource.INLINE) for pattern in split_patterns(patterns))
        return rules

    def build(self) -> IgnoreRuleSet:
        """Build the effective rule set, applying un-ignore directives by subtraction.

        Raises:
            InvalidPatternError: If any configured or inline glob cannot be compiled.
        """
        directives = UnignoreDirectives.parse(self.unignore)
        active: List[IgnoreRule] = []
        removed: List[IgnoreRule] = []
        for rule in self.candidate_rules():
            (removed if directives.removes(rule) else active).append(rule)
        return IgnoreRuleSet(active, removed)
