"""Build satisfier trees from blocks and satisfy rules."""

import logging

from ..core.models import AndSatisfyRule, Module, SatisfyRule, parse_satisfy_rule
from ..errors import CircularReferenceError, MalformedRuleTreeError
from ..matcher import block_matcher, evaluate_matcher, pattern_to_regex
from .engine import evaluate_satisfier
from .inequality import inequality_satisfier
from .types import (
    ConstraintOutcome,
    Satisfier,
    SatisfierBranch,
    SatisfierLeafAssign,
    SatisfierLeafConstraint,
)

logger = logging.getLogger(__name__)


def block_satisfier(
    directory,
    prefix: str,
    block_id: str,
    _ancestors: tuple[str, ...] = (),
) -> SatisfierBranch:
    """Build the satisfier for the block ``block_id`` resolved against ``prefix``.

    The branch first narrows its input to the modules the block's matcher
    claims (nothing, for a block without ``assign`` or ``match`` rules), then
    requires an informational leaf and the block's ``satisfy`` rules to hold.

    Raises:
        BlockNotFoundError: If ``block_id`` does not resolve.
        CircularReferenceError: If the block is already being evaluated.
    """
    full_id, block = directory.find(prefix, block_id)
    if full_id in _ancestors:
        raise CircularReferenceError(list(_ancestors) + [full_id])
    ancestors = _ancestors + (full_id,)

    info_leaf = SatisfierLeafConstraint(
        constraint=lambda assigned: True,
        ref=f"{full_id}/info",
        infos=(block.info,) if block.info else (),
    )
    children: list[Satisfier] = [info_leaf]
    if block.satisfy is not None:
        rules = block.satisfy
        rule = rules[0] if len(rules) == 1 else AndSatisfyRule(rules=rules)
        children.append(
            satisfy_rule_satisfier(directory, full_id, full_id, rule, ancestors)
        )

    matcher = block_matcher(directory, full_id, block)
    narrow = lambda assigned: evaluate_matcher(assigned, matcher).matched  # noqa: E731

    return SatisfierBranch(
        satisfiers=tuple(children),
        reduce=all,
        filter=narrow,
        ref=full_id,
    )


def block_id_satisfier(
    directory,
    prefix: str,
    ref: str,
    block_id: str,
    _ancestors: tuple[str, ...] = (),
) -> SatisfierLeafConstraint:
    """Leaf requiring the assigned modules to satisfy another block.

    The referenced block is resolved when the leaf is evaluated.
    """

    def constraint(assigned: list[Module]) -> ConstraintOutcome:
        nested = block_satisfier(directory, prefix, block_id, _ancestors)
        result = evaluate_satisfier(assigned, nested)
        return ConstraintOutcome(satisfied=result.satisfied, context=result)

    return SatisfierLeafConstraint(
        constraint=constraint,
        ref=ref,
        message=f"modules do not satisfy block '{block_id}'",
    )


def satisfy_rule_satisfier(
    directory,
    prefix: str,
    ref: str,
    rule: SatisfyRule | object,
    _ancestors: tuple[str, ...] = (),
) -> Satisfier:
    """Compile a (typed or authored) satisfy rule into a satisfier node.

    A list of rules is an implicit ``and``.

    Raises:
        MalformedRuleTreeError: If the rule has no recognisable shape.
        MalformedInequalityError: If an ``mc`` bound is malformed.
    """
    rule = parse_satisfy_rule(rule)

    if rule.kind == "block":
        return block_id_satisfier(
            directory, prefix, f"{ref}/{rule.block}", rule.block, _ancestors
        )
    if rule.kind == "mc":
        return inequality_satisfier(f"{ref}/mc", rule.mc)
    if rule.kind in ("and", "or"):
        branch_ref = f"{ref}/{rule.kind}"
        return SatisfierBranch(
            satisfiers=tuple(
                satisfy_rule_satisfier(
                    directory, prefix, f"{branch_ref}/{i}", child, _ancestors
                )
                for i, child in enumerate(rule.rules)
            ),
            reduce=all if rule.kind == "and" else any,
            ref=branch_ref,
            message=(
                "modules were not satisfied by all rules"
                if rule.kind == "and"
                else "modules were not satisfied by any rule"
            ),
        )
    raise MalformedRuleTreeError("satisfy", rule)


def pattern_assign_satisfier(ref: str, pattern: str) -> SatisfierLeafAssign:
    """Leaf claiming every unassigned module whose code matches ``pattern``."""
    regex = pattern_to_regex(pattern)
    return SatisfierLeafAssign(
        assign=lambda remaining: [m for m in remaining if regex.match(m[0])],
        ref=ref,
        message=f"no remaining modules match '{pattern}'",
    )
