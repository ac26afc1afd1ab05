"""Matchers: module-selection trees compiled from assign/match rules."""

from .builders import block_matcher, match_rule_matcher
from .engine import evaluate_matcher
from .pattern import matches_pattern, pattern_to_regex
from .types import (
    AndMatcher,
    ExcludeMatcher,
    Matcher,
    MatcherBranch,
    OrMatcher,
    PatternMatcher,
)

__all__ = [
    "block_matcher",
    "match_rule_matcher",
    "evaluate_matcher",
    "matches_pattern",
    "pattern_to_regex",
    "AndMatcher",
    "ExcludeMatcher",
    "Matcher",
    "MatcherBranch",
    "OrMatcher",
    "PatternMatcher",
]
