"""Per-entry ignore decisions combining name rules and version-control filters."""

from pathlib import Path
from typing import Optional

from dirstruct.types import EntryKind, PathType
from dirstruct.vcs.classifier import NullStatusClassifier, StatusClassifier
from dirstruct.vcs.status import StatusFilter, VcsFilter

from .ignore_rule import IgnoreDecision
from .rule_set import IgnoreConfig, IgnoreRuleSet


class IgnoreResolver:
    """Decide, for every entry of a traversal, whether it is shown or hidden.

    Two independent layers are combined:

    - Name rules: the effective :class:`IgnoreRuleSet` (defaults, configuration and
      inline patterns after un-ignore subtraction). ``resolve`` reports the decision.
    - Version-control filter: when active, entries whose status does not satisfy the
      filter are dropped, except directories that contain at least one matching
      descendant. ``passes_vcs_filter`` reports this layer.

    The traversal root is never hidden.

    Attributes:
        rule_set (IgnoreRuleSet): Effective name rules.
        vcs_filter (VcsFilter): Active version-control filter (possibly inactive).
        classifier (StatusClassifier): Status source used when the filter is active.

    Example:
        >>> resolver = IgnoreResolver.from_config(IgnoreConfig())
        >>> resolver.resolve("node_modules", depth=1)
        <IgnoreDecision.HIDE: 'hide'>
        >>> resolver.resolve("src", depth=1)
        <IgnoreDecision.SHOW: 'show'>
        >>> resolver = IgnoreResolver.from_config(IgnoreConfig(unignore=["node_modules"]))
        >>> resolver.resolve("node_modules", depth=1)
        <IgnoreDecision.UNIGNORED: 'unignored'>
    """

    def __init__(
        self,
        rule_set: Optional[IgnoreRuleSet] = None,
        vcs_filter: Optional[VcsFilter] = None,
        classifier: Optional[StatusClassifier] = None,
    ) -> None:
        self.rule_set = rule_set if rule_set is not None else IgnoreConfig().build()
        self.vcs_filter = vcs_filter if vcs_filter is not None else VcsFilter()
        self.classifier = classifier if classifier is not None else NullStatusClassifier()

    @classmethod
    def from_config(
        cls,
        config: Optional[IgnoreConfig] = None,
        vcs_filter: Optional[VcsFilter] = None,
        classifier: Optional[StatusClassifier] = None,
    ) -> "IgnoreResolver":
        """Build a resolver from invocation parameters.

        Raises:
            InvalidPatternError: If a configured or inline glob cannot be compiled.
        """
        return cls((config or IgnoreConfig()).build(), vcs_filter, classifier)

    @property
    def status_filter(self) -> StatusFilter:
        return self.vcs_filter.status_filter

    @property
    def vcs_active(self) -> bool:
        return self.vcs_filter.active

    def resolve(self, name: str, depth: int = 1, kind: EntryKind = EntryKind.DIRECTORY) -> IgnoreDecision:
        """Resolve an entry name against the effective rule set.

        Args:
            name: Entry name (not a path).
            depth: Depth of the entry below the traversal root; the root (depth 0) is
                never hidden.
            kind: Entry kind, since built-in rules target directories or files only.

        Returns:
            IgnoreDecision: HIDE if an active rule matches, UNIGNORED if only removed
                rules match, SHOW otherwise.
        """
        if depth == 0:
            return IgnoreDecision.SHOW
        if self.rule_set.hides(name, kind):
            return IgnoreDecision.HIDE
        if self.rule_set.was_removed(name, kind):
            return IgnoreDecision.UNIGNORED
        return IgnoreDecision.SHOW

    def passes_vcs_filter(self, path: PathType, kind: EntryKind) -> bool:
        """Check the version-control layer for one entry.

        Directories pass when they match themselves or contain a matching descendant,
        so matches deep in the tree stay reachable.
        """
        if not self.vcs_active:
            return True
        path = Path(path)
        if self.classifier.matches(path, self.status_filter):
            return True
        if kind is EntryKind.DIRECTORY:
            return self.classifier.has_matching_descendant(path, self.status_filter)
        return False
