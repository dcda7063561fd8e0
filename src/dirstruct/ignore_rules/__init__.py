"""Ignore rules deciding which entries are shown, summarized or excluded."""

from .ignore_rule import IgnoreDecision, IgnoreRule, IgnoreSource, RuleTarget
from .resolver import IgnoreResolver
from .rule_set import IgnoreConfig, IgnoreRuleSet, UnignoreDirectives
from .size_rules import SizeThreshold, parse_file_size

__all__ = [
    "IgnoreConfig",
    "IgnoreDecision",
    "IgnoreResolver",
    "IgnoreRule",
    "IgnoreRuleSet",
    "IgnoreSource",
    "RuleTarget",
    "SizeThreshold",
    "UnignoreDirectives",
    "parse_file_size",
]
