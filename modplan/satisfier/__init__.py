"""Satisfiers: constraint-verification trees compiled from satisfy rules."""

from .builders import (
    block_id_satisfier,
    block_satisfier,
    pattern_assign_satisfier,
    satisfy_rule_satisfier,
)
from .engine import evaluate_satisfier
from .inequality import (
    Inequality,
    InequalitySign,
    inequality_satisfier,
    parse_inequality,
    take_within,
)
from .types import (
    ConstraintOutcome,
    Satisfier,
    SatisfierBranch,
    SatisfierLeafAssign,
    SatisfierLeafConstraint,
    SatisfierLeafFilter,
)

__all__ = [
    "block_id_satisfier",
    "block_satisfier",
    "pattern_assign_satisfier",
    "satisfy_rule_satisfier",
    "evaluate_satisfier",
    "Inequality",
    "InequalitySign",
    "inequality_satisfier",
    "parse_inequality",
    "take_within",
    "ConstraintOutcome",
    "Satisfier",
    "SatisfierBranch",
    "SatisfierLeafAssign",
    "SatisfierLeafConstraint",
    "SatisfierLeafFilter",
]
