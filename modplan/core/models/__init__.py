"""Pydantic models for modplan, organized by concern.

- module.py: Module pairs and credit helpers
- rules.py: Match rule and satisfy rule tagged unions
- block.py: Block definitions with YAML I/O
- results.py: Matcher and satisfier result trees
- validation.py: Authoring validation issues
"""

from .module import Module, to_modules, total_mcs
from .rules import (
    # Match rules
    PatternMatchRule,
    AndMatchRule,
    OrMatchRule,
    ExcludeMatchRule,
    MatchRule,
    parse_match_rule,
    # Satisfy rules
    BlockRefSatisfyRule,
    MCSatisfyRule,
    AndSatisfyRule,
    OrSatisfyRule,
    SatisfyRule,
    parse_satisfy_rule,
)
from .block import Block, RESERVED_PROPERTIES
from .results import MatcherResult, SatisfierResult
from .validation import Severity, ValidationIssue, ValidationResult

__all__ = [
    "Module",
    "to_modules",
    "total_mcs",
    "PatternMatchRule",
    "AndMatchRule",
    "OrMatchRule",
    "ExcludeMatchRule",
    "MatchRule",
    "parse_match_rule",
    "BlockRefSatisfyRule",
    "MCSatisfyRule",
    "AndSatisfyRule",
    "OrSatisfyRule",
    "SatisfyRule",
    "parse_satisfy_rule",
    "Block",
    "RESERVED_PROPERTIES",
    "MatcherResult",
    "SatisfierResult",
    "Severity",
    "ValidationIssue",
    "ValidationResult",
]
