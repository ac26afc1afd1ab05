"""Build matcher trees from blocks and match rules."""

import logging

from ..core.models import (
    AndMatchRule,
    Block,
    ExcludeMatchRule,
    MatchRule,
    OrMatchRule,
    PatternMatchRule,
    parse_match_rule,
)
from ..errors import CircularReferenceError, MalformedRuleTreeError
from .pattern import pattern_to_regex
from .types import (
    AndMatcher,
    ExcludeMatcher,
    Matcher,
    MatcherBranch,
    OrMatcher,
    PatternMatcher,
)

logger = logging.getLogger(__name__)


def match_rule_matcher(rule: MatchRule | object, ref: str = "match") -> Matcher:
    """Compile a (typed or authored) match rule into a matcher node.

    A list of rules is an implicit ``or``.

    Raises:
        MalformedRuleTreeError: If the rule has no recognisable shape.
    """
    rule = parse_match_rule(rule)

    if rule.kind == "pattern":
        return PatternMatcher(
            pattern=rule.pattern,
            regex=pattern_to_regex(rule.pattern),
            ref=f"{ref}/{rule.pattern}",
            info=rule.info,
        )
    if rule.kind == "and":
        return AndMatcher(
            matchers=tuple(
                match_rule_matcher(r, f"{ref}/and/{i}") for i, r in enumerate(rule.rules)
            ),
            ref=f"{ref}/and",
        )
    if rule.kind == "or":
        return OrMatcher(
            matchers=tuple(
                match_rule_matcher(r, f"{ref}/or/{i}") for i, r in enumerate(rule.rules)
            ),
            ref=f"{ref}/or",
        )
    if rule.kind == "exclude":
        return ExcludeMatcher(
            matcher=match_rule_matcher(rule.rule, f"{ref}/exclude"),
            ref=f"{ref}/exclude",
        )
    raise MalformedRuleTreeError("match", rule)


def block_matcher(
    directory,
    prefix: str,
    block: Block,
    _ancestors: tuple[str, ...] = (),
) -> MatcherBranch:
    """Build the matcher for a block registered as ``prefix``.

    The first child (if any) claims modules for the ``assign`` blocks in
    declared order; each is resolved against ``prefix`` and built under its
    own identifier. The second child (if any) selects by the block's
    ``match`` rules from whatever the assign branch left over.

    Raises:
        BlockNotFoundError: If an assigned block does not resolve.
        CircularReferenceError: If assign lists loop back on themselves.
    """
    ancestors = _ancestors + (prefix,)
    children: list[Matcher] = []

    if block.assign is not None:
        assigned: list[Matcher] = []
        for block_id in block.assign:
            full_id, child = directory.find(prefix, block_id)
            if full_id in ancestors:
                raise CircularReferenceError(list(ancestors) + [full_id])
            assigned.append(block_matcher(directory, full_id, child, ancestors))
        children.append(MatcherBranch(matchers=tuple(assigned), ref=f"{prefix}/assign"))

    if block.match is not None:
        rules = block.match
        rule = rules[0] if len(rules) == 1 else OrMatchRule(rules=rules)
        children.append(match_rule_matcher(rule, f"{prefix}/match"))

    logger.debug("Built matcher for '%s' (%d branches)", prefix, len(children))
    return MatcherBranch(matchers=tuple(children), ref=prefix)
